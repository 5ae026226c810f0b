"""Segmentation of folgezettel identifiers.

An identifier such as ``"12b3"`` is a sequence of maximal runs of characters
sharing one classification:

    >>> split_segments("12b3")
    [Segment(text='12', kind='digit'), Segment(text='b', kind='letter'), Segment(text='3', kind='digit')]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Kind = Literal["digit", "letter", "other"]

DIGIT: Kind = "digit"
LETTER: Kind = "letter"
OTHER: Kind = "other"


@dataclass(frozen=True)
class Segment:
    text: str
    kind: Kind


def classify(char: str) -> Kind:
    """Classify a single character as digit, letter or other."""
    if not char:
        return OTHER
    if char.isdecimal():
        return DIGIT
    if char.isalpha():
        return LETTER
    return OTHER


def last_segment(identifier: str) -> Segment:
    """
    Return the trailing run of same-classified characters.

    Examples:
        >>> last_segment("1a12")
        Segment(text='12', kind='digit')
        >>> last_segment("")
        Segment(text='', kind='other')
    """
    if not identifier:
        return Segment("", OTHER)

    kind = classify(identifier[-1])
    start = len(identifier) - 1
    while start > 0 and classify(identifier[start - 1]) == kind:
        start -= 1

    return Segment(identifier[start:], kind)


def split_segments(identifier: str) -> list[Segment]:
    """Split an identifier into all of its segments, left to right."""
    segments: list[Segment] = []
    if not identifier:
        return segments

    start = 0
    kind = classify(identifier[0])
    for i in range(1, len(identifier)):
        char_kind = classify(identifier[i])
        if char_kind != kind:
            segments.append(Segment(identifier[start:i], kind))
            start = i
            kind = char_kind
    segments.append(Segment(identifier[start:], kind))

    return segments
