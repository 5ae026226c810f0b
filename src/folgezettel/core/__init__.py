"""Hierarchical identifier engine for folgezettel."""

from .collection import (
    NoteCollectionManager,
    Refresh,
    annotate,
    diff_split_levels,
    next_id_for_note,
)
from .ids import allocate_unique, first_child, level, next_sibling
from .increment import increment
from .model import AnnotatedNote, NoteCollection, NoteMeta
from .ordering import compare_ids, id_sort_key, split_level
from .segments import Segment, classify, last_segment, split_segments

__all__ = [
    "classify",
    "last_segment",
    "split_segments",
    "Segment",
    "increment",
    "next_sibling",
    "first_child",
    "level",
    "allocate_unique",
    "compare_ids",
    "id_sort_key",
    "split_level",
    "NoteMeta",
    "AnnotatedNote",
    "NoteCollection",
    "annotate",
    "diff_split_levels",
    "next_id_for_note",
    "NoteCollectionManager",
    "Refresh",
]
