"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.note_loader import FrontmatterNoteLoader
from .adapters.yaml_codec import YamlFrontmatter
from .config import FolgeConfig, load_config
from .core.collection import NoteCollectionManager, Refresh
from .core.vault import Vault


@dataclass
class Runtime:
    """Container for all wired components."""
    vault: Vault
    notes: NoteCollectionManager
    config: FolgeConfig

    def refresh(self, changed_paths: set[str] | None = None) -> Refresh:
        """Reload every note from disk and re-annotate."""
        return self.notes.refresh(self.vault.load_notes(), changed_paths or ())


def build_runtime(
    vault_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a vault."""
    config = load_config(config_path=config_path, vault_path=vault_path)

    if vault_path is None:
        vault_path = config.vault.root

    fm = YamlFrontmatter()
    loader = FrontmatterNoteLoader(
        fm,
        id_field=config.id.field,
        title_field=config.notes.title_field,
        toc_title_field=config.notes.toc_title_field,
    )
    vault = Vault(FsStorage(vault_path), loader, fm)

    return Runtime(
        vault=vault,
        notes=NoteCollectionManager(max_attempts=config.id.max_attempts),
        config=config,
    )
