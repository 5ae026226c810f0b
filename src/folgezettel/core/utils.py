"""Utility functions for folgezettel."""

import re
import unicodedata

_DASHES = str.maketrans({"–": "-", "—": "-", "−": "-"})


def slugify(text: str) -> str:
    """
    Turn a note title into a filename-safe slug.

    Examples:
        >>> slugify("Parallel transport")
        'parallel-transport'
        >>> slugify("Ökonomie & Gesellschaft")
        'okonomie-gesellschaft'
    """
    text = text.lower().translate(_DASHES)

    # Drop accents
    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))

    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s-]+", "-", text)
    return text.strip("-")


def note_filename(note_id: str, title: str | None) -> str:
    """
    Filename for a new note: "<id> <slug>.md", or "<id>.md" without a title.

    Examples:
        >>> note_filename("1a", "Parallel transport")
        '1a parallel-transport.md'
    """
    stem = slugify(note_id) or "untitled"
    slug = slugify(title) if title else ""
    return f"{stem} {slug}.md" if slug else f"{stem}.md"
