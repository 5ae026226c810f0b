from pathlib import Path
from typing import Iterable


class FsStorage:
    """
    Markdown files anywhere below one root directory, addressed by
    their vault-relative POSIX path (e.g. "zettel/1a.md").
    """

    def __init__(self, root: Path):
        self.root = root

    def path_for(self, rel: str) -> Path:
        return self.root / rel

    def exists(self, rel: str) -> bool:
        return self.path_for(rel).exists()

    def read_raw(self, rel: str) -> str | None:
        p = self.path_for(rel)
        return p.read_text(encoding="utf-8") if p.exists() else None

    def write_raw(self, rel: str, contents: str) -> None:
        p = self.path_for(rel)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(contents, encoding="utf-8")

    def list_all(self) -> Iterable[str]:
        if not self.root.exists():
            return []
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in self.root.rglob("*.md")
            if p.is_file() and not _hidden(p.relative_to(self.root))
        )


def _hidden(rel: Path) -> bool:
    # skips .obsidian/, .trash/ and dotfiles
    return any(part.startswith(".") for part in rel.parts)
