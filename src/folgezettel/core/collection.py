"""Sort, annotate and diff collections of notes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

from .ids import DEFAULT_MAX_ATTEMPTS, allocate_unique, first_child, next_sibling
from .model import AnnotatedNote, NoteCollection, NoteId, NoteMeta
from .ordering import compare_ids, split_level


def compare_notes(a: NoteMeta, b: NoteMeta) -> int:
    """
    Notes with an id come first, in hierarchical order.
    The rest follow by title (case-insensitive), then path.
    """
    if a.id is not None and b.id is not None:
        result = compare_ids(a.id, b.id)
        if result:
            return result
    elif a.id is not None:
        return -1
    elif b.id is not None:
        return 1

    ka = (a.title.lower(), a.path)
    kb = (b.title.lower(), b.path)
    return (ka > kb) - (ka < kb)


def note_split_level(prev: NoteMeta | None, curr: NoteMeta) -> int | None:
    if prev is None:
        return 1 if curr.id is None else None
    if prev.id is not None and curr.id is not None:
        return split_level(prev.id, curr.id)
    if prev.id is None and curr.id is None:
        return None
    return 1


def annotate(raw_notes: Iterable[NoteMeta]) -> NoteCollection:
    """Order notes and record where each one splits from its predecessor."""
    ordered = sorted(raw_notes, key=cmp_to_key(compare_notes))
    annotated = []
    prev: NoteMeta | None = None
    for meta in ordered:
        annotated.append(AnnotatedNote(meta, note_split_level(prev, meta)))
        prev = meta
    return NoteCollection(annotated)


def diff_split_levels(old: NoteCollection, new: NoteCollection) -> set[str]:
    """
    Paths in ``new`` whose split-level differs from ``old``.
    Paths only in ``old`` are gone and are not reported.
    """
    old_levels = old.split_levels()
    new_levels = new.split_levels()
    return {
        path
        for path in new_levels
        if old_levels.get(path) != new_levels.get(path)
    }


def next_id_for_note(
    collection: NoteCollection,
    path: str,
    want_child: bool,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> NoteId | None:
    """Free identifier for a new sibling or child of the note at ``path``."""
    note = collection.get(path)
    if note is None or note.id is None:
        return None
    candidate = first_child(note.id) if want_child else next_sibling(note.id)
    return allocate_unique(candidate, collection.ids(), max_attempts)


@dataclass(frozen=True)
class Refresh:
    collection: NoteCollection
    remeasure: set[str]


class NoteCollectionManager:
    """Holds the current collection and replaces it on every refresh."""

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.max_attempts = max_attempts
        self._current = NoteCollection()

    @property
    def current(self) -> NoteCollection:
        return self._current

    def refresh(
        self, raw_notes: Iterable[NoteMeta], changed_paths: Iterable[str] = ()
    ) -> Refresh:
        new = annotate(raw_notes)
        remeasure = diff_split_levels(self._current, new)
        remeasure.update(p for p in changed_paths if new.get(p) is not None)
        self._current = new
        return Refresh(new, remeasure)

    def next_id(self, path: str, want_child: bool = False) -> NoteId | None:
        return next_id_for_note(self._current, path, want_child, self.max_attempts)
