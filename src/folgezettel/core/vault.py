from pathlib import PurePosixPath

from ..adapters.fs_storage import FsStorage
from ..adapters.note_loader import FrontmatterNoteLoader
from ..adapters.yaml_codec import YamlFrontmatter
from .model import NoteMeta
from .utils import note_filename


class Vault:
    def __init__(
        self, storage: FsStorage, loader: FrontmatterNoteLoader, fm: YamlFrontmatter
    ):
        self.storage = storage
        self.loader = loader
        self.fm = fm

    def get(self, path: str) -> NoteMeta | None:
        raw = self.storage.read_raw(path)
        if raw is None:
            return None
        return self.loader.load(path, raw)

    def load_notes(self) -> list[NoteMeta]:
        notes = []
        for path in self.storage.list_all():
            note = self.get(path)
            if note is not None:
                notes.append(note)
        return notes

    def create_note(self, note_id: str, title: str | None = None, folder: str = "") -> str:
        """Write a new note carrying ``note_id`` and return its vault path."""
        name = note_filename(note_id, title)
        path = str(PurePosixPath(folder) / name) if folder else name
        if self.storage.exists(path):
            raise FileExistsError(f"Note already exists: {path}")

        meta: dict[str, str] = {self.loader.id_field: note_id}
        if title:
            meta[self.loader.title_field] = title
        heading = f"# {title}\n" if title else ""
        self.storage.write_raw(path, self.fm.encode(meta) + "\n" + heading)
        return path
