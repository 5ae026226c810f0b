from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import overload

NoteId = str


@dataclass(frozen=True)
class NoteMeta:
    path: str  # vault-relative, unique key
    title: str
    toc_title: str | None = None  # preferred label in the outline view
    id: NoteId | None = None


@dataclass(frozen=True)
class AnnotatedNote:
    meta: NoteMeta
    split_level: int | None = None  # depth at which this id leaves the previous one

    @property
    def path(self) -> str:
        return self.meta.path

    @property
    def id(self) -> NoteId | None:
        return self.meta.id

    @property
    def title(self) -> str:
        return self.meta.title

    @property
    def display_title(self) -> str:
        return self.meta.toc_title or self.meta.title


class NoteCollection:
    """
    Ordered, annotated notes. Immutable; build a new one with ``annotate``.
    """

    def __init__(self, notes: Iterable[AnnotatedNote] = ()):
        self._notes = tuple(notes)
        self._by_path = {n.path: n for n in self._notes}

    def __iter__(self) -> Iterator[AnnotatedNote]:
        return iter(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    @overload
    def __getitem__(self, i: int) -> AnnotatedNote: ...

    @overload
    def __getitem__(self, i: slice) -> tuple[AnnotatedNote, ...]: ...

    def __getitem__(self, i):
        return self._notes[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoteCollection):
            return NotImplemented
        return self._notes == other._notes

    def __repr__(self) -> str:
        return f"NoteCollection({list(self._notes)!r})"

    def get(self, path: str) -> AnnotatedNote | None:
        return self._by_path.get(path)

    def index_of(self, path: str) -> int | None:
        for i, note in enumerate(self._notes):
            if note.path == path:
                return i
        return None

    def paths(self) -> list[str]:
        return [n.path for n in self._notes]

    def ids(self) -> set[NoteId]:
        """All identifiers currently in use."""
        return {n.id for n in self._notes if n.id is not None}

    def split_levels(self) -> dict[str, int | None]:
        return {n.path: n.split_level for n in self._notes}

    def filter(self, query: str) -> list[AnnotatedNote]:
        """Case-insensitive substring match on id, title and toc title."""
        q = query.strip().lower()
        if not q:
            return list(self._notes)
        out = []
        for note in self._notes:
            fields = (note.id, note.title, note.meta.toc_title)
            if any(f and q in f.lower() for f in fields):
                out.append(note)
        return out
