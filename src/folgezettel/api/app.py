"""FastAPI application exposing the annotated note outline."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .. import __version__
from ..core.model import AnnotatedNote


def _note_json(note: AnnotatedNote) -> dict[str, Any]:
    return {
        "path": note.path,
        "id": note.id,
        "title": note.title,
        "toc_title": note.meta.toc_title,
        "display_title": note.display_title,
        "split_level": note.split_level,
    }


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Every request reloads the vault, so responses always reflect the files
    on disk.

    Args:
        runtime: Runtime instance with vault and note collection manager
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware
    """
    app = FastAPI(
        title="Folgezettel API",
        description="Local JSON API for hierarchical note identifiers",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        return {"status": "ok", "version": __version__}

    @app.get("/notes")
    async def list_notes(
        q: str | None = Query(None, description="Filter by id or title"),
        auth: None = Depends(verify_token),
    ) -> list[dict[str, Any]]:
        """Notes in outline order with split-levels."""
        collection = runtime.refresh().collection
        notes = collection.filter(q) if q else list(collection)
        return [_note_json(n) for n in notes]

    @app.get("/notes/by-path")
    async def note_by_path(
        path: str = Query(..., description="Vault-relative note path"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        note = runtime.refresh().collection.get(path)
        if note is None:
            raise HTTPException(status_code=404, detail=f"Note {path} not found")
        return _note_json(note)

    @app.get("/next-id")
    async def next_id(
        path: str = Query(..., description="Reference note path"),
        child: bool = Query(False, description="Child instead of sibling"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Allocate a free sibling or child identifier for a note."""
        collection = runtime.refresh().collection
        note = collection.get(path)
        if note is None:
            raise HTTPException(status_code=404, detail=f"Note {path} not found")
        if note.id is None:
            raise HTTPException(status_code=409, detail=f"Note {path} has no identifier")

        nid = runtime.notes.next_id(path, want_child=child)
        if nid is None:
            raise HTTPException(status_code=409, detail=f"No free identifier after {note.id}")
        return {"id": nid, "parent": note.id if child else None}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
