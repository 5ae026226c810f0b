"""Derive sibling and child identifiers, and allocate unused ones."""

from __future__ import annotations

from collections.abc import Container

from .increment import increment
from .segments import DIGIT, LETTER, last_segment, split_segments

DEFAULT_MAX_ATTEMPTS = 50


def level(identifier: str) -> int:
    """Nesting depth of an identifier: its number of segments."""
    return len(split_segments(identifier))


def next_sibling(identifier: str) -> str:
    """
    Next identifier at the same depth.

    Only the trailing segment changes. A trailing segment without a
    successor is left as is.

    Examples:
        >>> next_sibling("1a9")
        '1a10'
        >>> next_sibling("1z")
        '1aa'
    """
    seg = last_segment(identifier)
    prefix = identifier[: len(identifier) - len(seg.text)]
    bumped = increment(seg.text, seg.kind)
    return prefix + (bumped if bumped is not None else seg.text)


def first_child(identifier: str) -> str:
    """
    First identifier one level below, alternating digits and letters.

    Examples:
        >>> first_child("1")
        '1a'
        >>> first_child("1a")
        '1a1'
    """
    kind = last_segment(identifier).kind
    if kind == DIGIT:
        return identifier + "a"
    if kind == LETTER:
        return identifier + "1"
    return identifier


def allocate_unique(
    candidate: str,
    taken: Container[str],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str | None:
    """
    Walk the sibling sequence from ``candidate`` to the first free identifier.

    Returns None when ``max_attempts`` identifiers were all taken, or when
    the sequence cannot advance past a taken identifier.
    """
    for _ in range(max_attempts):
        if candidate not in taken:
            return candidate
        following = next_sibling(candidate)
        if following == candidate:
            return None
        candidate = following
    return None
