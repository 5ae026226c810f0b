"""Tests for API functionality."""

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from folgezettel.api.app import create_app, generate_token  # noqa: E402
from folgezettel.runtime import build_runtime  # noqa: E402


@pytest.fixture
def client(sample_vault):
    rt = build_runtime(vault_path=sample_vault)
    return TestClient(create_app(rt, token=None))


def test_health_endpoint(client):
    """Test /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_auth_required(sample_vault):
    """Test that endpoints require authentication when token is set."""
    token = generate_token()
    client = TestClient(create_app(build_runtime(vault_path=sample_vault), token=token))

    assert client.get("/health").status_code == 401
    response = client.get("/health", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_list_notes(client):
    """Test /notes returns the annotated outline."""
    response = client.get("/notes")
    assert response.status_code == 200
    data = response.json()
    assert [n["id"] for n in data] == ["1", "1a", "1a1", "1b", "2", None]
    assert [n["split_level"] for n in data] == [None, 2, 3, 2, 1, 1]

    filtered = client.get("/notes", params={"q": "branch"}).json()
    assert [n["path"] for n in filtered] == ["1a branch.md"]


def test_note_by_path(client):
    """Test lookup by vault path."""
    response = client.get("/notes/by-path", params={"path": "deep/1a1 leaf.md"})
    assert response.status_code == 200
    assert response.json()["display_title"] == "Leaf"

    assert client.get("/notes/by-path", params={"path": "nope.md"}).status_code == 404


def test_next_id(client):
    """Test sibling and child allocation."""
    response = client.get("/next-id", params={"path": "1a branch.md"})
    assert response.status_code == 200
    assert response.json() == {"id": "1c", "parent": None}

    response = client.get("/next-id", params={"path": "1a branch.md", "child": "true"})
    assert response.json() == {"id": "1a2", "parent": "1a"}


def test_next_id_errors(client):
    """Test soft failures map to HTTP errors."""
    assert client.get("/next-id", params={"path": "missing.md"}).status_code == 404
    assert client.get("/next-id", params={"path": "inbox.md"}).status_code == 409
