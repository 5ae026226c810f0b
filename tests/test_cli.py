"""Tests for the fz command line."""

import json
import subprocess
import sys
from pathlib import Path


def run_fz(vault: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "folgezettel.cli", "--vault", str(vault), *args],
        capture_output=True,
        text=True,
        cwd=vault,
    )


def test_ls_json(sample_vault):
    """Test ls lists notes in outline order with split-levels."""
    result = run_fz(sample_vault, "--json", "ls")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert [n["id"] for n in data] == ["1", "1a", "1a1", "1b", "2", None]
    assert [n["split_level"] for n in data] == [None, 2, 3, 2, 1, 1]
    assert data[2]["path"] == "deep/1a1 leaf.md"


def test_ls_text_separators(sample_vault):
    """Test a separator line precedes top-level splits."""
    result = run_fz(sample_vault, "ls")
    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0].split() == ["1", "Start"]
    assert lines.count("-" * 20) == 2
    assert lines[-1].strip() == "Inbox"


def test_ls_grep(sample_vault):
    """Test filtering by title."""
    result = run_fz(sample_vault, "--json", "ls", "--grep", "LEA")
    assert [n["id"] for n in json.loads(result.stdout)] == ["1a1"]


def test_next_sibling_and_child(sample_vault):
    """Test next skips identifiers already in use."""
    result = run_fz(sample_vault, "next", "1 start.md")
    assert result.returncode == 0
    assert result.stdout.strip() == "3"

    result = run_fz(sample_vault, "next", "1 start.md", "--child")
    assert result.stdout.strip() == "1c"

    result = run_fz(sample_vault, "next", str(sample_vault / "deep" / "1a1 leaf.md"))
    assert result.stdout.strip() == "1a2"


def test_next_without_id(sample_vault):
    """Test next fails softly for notes without an identifier."""
    result = run_fz(sample_vault, "next", "inbox.md")
    assert result.returncode == 1
    assert "has no identifier" in result.stderr

    result = run_fz(sample_vault, "next", "missing.md")
    assert result.returncode == 1
    assert "not found" in result.stderr


def test_new_creates_child(sample_vault):
    """Test new writes a file next to its reference note."""
    result = run_fz(sample_vault, "--json", "new", "deep/1a1 leaf.md", "--child", "--title", "Deeper")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data == {"id": "1a1a", "path": "deep/1a1a deeper.md"}
    assert (sample_vault / "deep" / "1a1a deeper.md").exists()

    again = run_fz(sample_vault, "next", "deep/1a1 leaf.md", "--child")
    assert again.stdout.strip() == "1a1b"


def test_new_budget_exhausted(sample_vault):
    """Test no note is created when no identifier can be allocated."""
    (sample_vault / "fz.toml").write_text("[id]\nmax_attempts = 1\n")
    before = sorted(p.name for p in sample_vault.rglob("*.md"))

    result = run_fz(sample_vault, "new", "1 start.md", "--title", "Nope")
    assert result.returncode == 1
    assert "Could not allocate" in result.stderr
    assert sorted(p.name for p in sample_vault.rglob("*.md")) == before


def test_check_reports_duplicates(sample_vault):
    """Test check exits non-zero on duplicate identifiers."""
    result = run_fz(sample_vault, "check")
    assert result.returncode == 0

    (sample_vault / "dup.md").write_text("---\nid: 1a\n---\n# Dup\n")
    result = run_fz(sample_vault, "--json", "check")
    assert result.returncode == 1
    data = json.loads(result.stdout)
    assert sorted(data["duplicates"]["1a"]) == ["1a branch.md", "dup.md"]
    assert data["missing"] == ["inbox.md"]


def test_version_flag():
    """Test that --version shows the package version."""
    result = subprocess.run(
        [sys.executable, "-m", "folgezettel.cli", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "folgezettel" in result.stdout
    assert "python" in result.stdout


def test_version_module():
    """Test that version is accessible from module."""
    from folgezettel import __version__

    assert len(__version__.split(".")) >= 2
