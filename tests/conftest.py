import tempfile
from pathlib import Path

import pytest


def write_note(root: Path, rel: str, nid: str | None, title: str) -> None:
    fm = f"---\nid: '{nid}'\ntitle: {title}\n---\n" if nid else f"---\ntitle: {title}\n---\n"
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(fm + f"\n# {title}\n", encoding="utf-8")


@pytest.fixture
def sample_vault():
    """Vault with a small outline: 1, 1a, 1a1, 1b, 2 and one note without id."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir) / "vault"
        root.mkdir()
        write_note(root, "1 start.md", "1", "Start")
        write_note(root, "1a branch.md", "1a", "Branch")
        write_note(root, "deep/1a1 leaf.md", "1a1", "Leaf")
        write_note(root, "1b other.md", "1b", "Other")
        write_note(root, "2 next.md", "2", "Next")
        write_note(root, "inbox.md", None, "Inbox")
        yield root
