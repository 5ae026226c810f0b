"""Hierarchical ordering of identifiers and split-level detection."""

from __future__ import annotations

from functools import cmp_to_key

from .segments import DIGIT, LETTER, Kind, Segment, split_segments

_KIND_RANK: dict[Kind, int] = {"digit": 0, "letter": 1, "other": 2}


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_segments(a: Segment, b: Segment) -> int:
    """Order two segments found at the same position."""
    if a.kind != b.kind:
        return _cmp(_KIND_RANK[a.kind], _KIND_RANK[b.kind])
    if a.kind == DIGIT:
        # "01" and "1" are numerically equal; text keeps the order total
        return _cmp(int(a.text), int(b.text)) or _cmp(a.text, b.text)
    if a.kind == LETTER:
        # Same order the incrementer produces: "z" < "aa"
        return _cmp(len(a.text), len(b.text)) or _cmp(a.text, b.text)
    return _cmp(a.text, b.text)


def compare_ids(a: str, b: str) -> int:
    """
    Compare two identifiers segment by segment.

    Returns -1, 0 or 1. An identifier that runs out of segments first
    sorts first, so "1a" < "1a1" < "1b".
    """
    segs_a = split_segments(a)
    segs_b = split_segments(b)
    for seg_a, seg_b in zip(segs_a, segs_b):
        result = compare_segments(seg_a, seg_b)
        if result:
            return result
    return _cmp(len(segs_a), len(segs_b))


id_sort_key = cmp_to_key(compare_ids)


def split_level(prev_id: str, curr_id: str) -> int | None:
    """
    1-based index of the first segment where two identifiers diverge.

    Identifiers with identical segments have no split and yield None.

    Examples:
        >>> split_level("1a1", "1a2")
        3
        >>> split_level("1a1", "1b1")
        2
    """
    segs_prev = split_segments(prev_id)
    segs_curr = split_segments(curr_id)
    for idx in range(max(len(segs_prev), len(segs_curr))):
        if idx >= len(segs_prev) or idx >= len(segs_curr):
            return idx + 1
        if segs_prev[idx] != segs_curr[idx]:
            return idx + 1
    return None
