"""Build NoteMeta records from Markdown files with YAML frontmatter."""

import re
from pathlib import PurePosixPath
from typing import Any

import yaml

from ..core.model import NoteMeta
from .yaml_codec import YamlFrontmatter

_HEADING = re.compile(r"^#[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE)


def _raw_text(value: Any, raw: Any) -> str | None:
    """
    Scalar exactly as written, stripped; None for missing, blank or non-scalar.

    ``value`` is the typed YAML value and ``raw`` the same key read with
    ``yaml.BaseLoader``. Typed YAML would turn `id: 1.10` into the float 1.1.
    """
    if value is None or isinstance(value, (list, dict)) or not isinstance(raw, str):
        return None
    return raw.strip() or None


class FrontmatterNoteLoader:
    def __init__(
        self,
        fm: YamlFrontmatter,
        id_field: str = "id",
        title_field: str = "title",
        toc_title_field: str = "toc-title",
    ):
        self.fm = fm
        self.id_field = id_field
        self.title_field = title_field
        self.toc_title_field = toc_title_field

    def load(self, path: str, text: str) -> NoteMeta:
        meta, body = self.fm.decode(text)
        raw_meta, _ = self.fm.decode(text, loader=yaml.BaseLoader)

        title = _raw_text(meta.get(self.title_field), raw_meta.get(self.title_field))
        if title is None:
            m = _HEADING.search(body)
            title = m.group(1) if m else PurePosixPath(path).stem

        return NoteMeta(
            path=path,
            title=title,
            toc_title=_raw_text(
                meta.get(self.toc_title_field), raw_meta.get(self.toc_title_field)
            ),
            id=_raw_text(meta.get(self.id_field), raw_meta.get(self.id_field)),
        )
