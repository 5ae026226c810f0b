import io
import re
from typing import Any

import yaml

_FM = re.compile(r"^\s*---\s*\n(.*?)\n---\s*\n?", re.DOTALL)


class YamlFrontmatter:
    def decode(
        self, text: str, loader: type = yaml.SafeLoader
    ) -> tuple[dict[str, Any], str]:
        """Split frontmatter from body. ``yaml.BaseLoader`` keeps every scalar as written."""
        m = _FM.match(text)
        if not m:
            return {}, text
        try:
            fm = yaml.load(io.StringIO(m.group(1)), Loader=loader) or {}
        except yaml.YAMLError:
            # Unreadable frontmatter is treated as absent
            return {}, text[m.end() :]
        if not isinstance(fm, dict):
            fm = {}
        body = text[m.end() :]
        return (fm, body)

    def encode(self, meta: dict[str, Any]) -> str:
        if not meta:
            return ""
        buf = io.StringIO()
        yaml.safe_dump(meta, buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"
