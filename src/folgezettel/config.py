"""Configuration loader for fz.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .core.ids import DEFAULT_MAX_ATTEMPTS


@dataclass
class VaultConfig:
    """Vault-specific configuration."""
    root: Path


@dataclass
class IdConfig:
    """Identifier field and allocation budget."""
    field: str = "id"
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


@dataclass
class NotesConfig:
    """Frontmatter keys used to build note titles."""
    title_field: str = "title"
    toc_title_field: str = "toc-title"


@dataclass
class UIConfig:
    """UI configuration."""
    split_marker: str = "-"


@dataclass
class FolgeConfig:
    """Complete folgezettel configuration."""
    vault: VaultConfig
    id: IdConfig = field(default_factory=IdConfig)
    notes: NotesConfig = field(default_factory=NotesConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) and value.strip() else default


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    return value if isinstance(value, dict) else {}


def load_config(config_path: Path | None = None, vault_path: Path | None = None) -> FolgeConfig:
    """
    Load configuration from fz.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/fz.toml
    3. vault_path/fz.toml

    Missing or malformed values fall back to defaults.
    """
    toml_data: dict[str, Any] = {}

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "fz.toml")
    if vault_path:
        search_paths.append(vault_path / "fz.toml")

    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break

    vault_data = _section(toml_data, "vault")
    vault_root = Path(_str(vault_data, "root", str(vault_path or Path("./vault"))))

    id_data = _section(toml_data, "id")
    max_attempts = id_data.get("max_attempts", DEFAULT_MAX_ATTEMPTS)
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
        max_attempts = DEFAULT_MAX_ATTEMPTS

    notes_data = _section(toml_data, "notes")
    ui_data = _section(toml_data, "ui")

    return FolgeConfig(
        vault=VaultConfig(root=vault_root),
        id=IdConfig(
            field=_str(id_data, "field", "id"),
            max_attempts=max_attempts,
        ),
        notes=NotesConfig(
            title_field=_str(notes_data, "title_field", "title"),
            toc_title_field=_str(notes_data, "toc_title_field", "toc-title"),
        ),
        ui=UIConfig(split_marker=_str(ui_data, "split_marker", "-")),
    )
