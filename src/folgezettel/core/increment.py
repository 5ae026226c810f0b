"""Increment a single identifier segment with carry."""

from __future__ import annotations

import string

from .segments import DIGIT, LETTER, Kind

_LOWER = string.ascii_lowercase
_UPPER = string.ascii_uppercase


def _alphabet(char: str) -> str | None:
    if char in _LOWER:
        return _LOWER
    if char in _UPPER:
        return _UPPER
    return None


def increment_digits(text: str) -> str | None:
    """Add one to a run of digits. Leading zeros are not preserved."""
    try:
        value = int(text)
    except ValueError:
        return None
    if value < 0:
        return None
    return str(value + 1)


def increment_letters(text: str) -> str | None:
    """
    Add one to a run of letters, spreadsheet-column style.

    Upper and lower case are separate alphabets; each character wraps
    within its own case and carries into the character on its left.

    Examples:
        >>> increment_letters("az")
        'ba'
        >>> increment_letters("zz")
        'aaa'
        >>> increment_letters("Az")
        'Ba'
    """
    if not text or any(_alphabet(c) is None for c in text):
        return None

    chars = list(text)
    pos = len(chars) - 1
    while pos >= 0:
        alphabet = _alphabet(chars[pos])
        idx = alphabet.index(chars[pos])  # type: ignore[union-attr]
        if idx < len(alphabet) - 1:
            chars[pos] = alphabet[idx + 1]
            return "".join(chars)
        chars[pos] = alphabet[0]
        pos -= 1

    # Carry ran off the left edge; grow in the case of the leading letter
    return _alphabet(text[0])[0] + "".join(chars)  # type: ignore[index]


def increment(text: str, kind: Kind) -> str | None:
    """Return the successor of a segment, or None if it has none."""
    if kind == DIGIT:
        return increment_digits(text)
    if kind == LETTER:
        return increment_letters(text)
    return None
