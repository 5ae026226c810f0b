"""Watch mode - re-annotate the vault on file changes."""

import json
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer


class DebounceHandler(FileSystemEventHandler):
    """File system event handler with debouncing."""

    def __init__(
        self,
        vault_path: Path,
        on_batch: Callable[[set[str]], None],
        debounce_ms: int = 150,
    ):
        super().__init__()
        self.vault_path = vault_path
        self.on_batch = on_batch
        self.debounce_ms = debounce_ms

        # Vault-relative paths touched since the last flush
        self.pending: set[str] = set()
        self.last_event_time = 0.0

    def _rel_path(self, raw: str | bytes) -> str | None:
        """Vault-relative POSIX path, or None for files we ignore."""
        path = Path(raw.decode() if isinstance(raw, bytes) else raw)
        name = path.name

        if name.endswith("~") or name.endswith(".swp") or name.startswith(".#"):
            return None
        if not name.endswith(".md"):
            return None

        try:
            rel = path.resolve().relative_to(self.vault_path.resolve())
        except ValueError:
            return None
        if any(part.startswith(".") for part in rel.parts):
            return None
        return rel.as_posix()

    def _record(self, raw: str | bytes) -> None:
        rel = self._rel_path(raw)
        if rel:
            self.pending.add(rel)
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._record(event.src_path)
            self._record(event.dest_path)

    def check_and_flush(self) -> None:
        """Flush once the debounce period has elapsed."""
        if not self.pending:
            return
        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        if not self.pending:
            return
        # events recorded while on_batch runs go into the fresh set
        changed, self.pending = self.pending, set()
        self.on_batch(changed)


def make_batch_handler(
    runtime: Any, quiet: bool = False, json_output: bool = False
) -> Callable[[set[str]], None]:
    """Reload notes for a batch of changed paths and report what to re-measure."""

    def handle_batch(changed: set[str]) -> None:
        start_time = time.time()
        try:
            result = runtime.refresh(changed)
        except (OSError, UnicodeDecodeError) as e:
            if json_output:
                print(json.dumps({"type": "error", "message": str(e)}), flush=True)
            else:
                print(f"Error: {e}", file=sys.stderr, flush=True)
            return

        duration_ms = int((time.time() - start_time) * 1000)
        if json_output:
            event = {
                "type": "batch",
                "changed": sorted(changed),
                "remeasure": sorted(result.remeasure),
                "notes": len(result.collection),
                "duration_ms": duration_ms,
            }
            print(json.dumps(event), flush=True)
        elif not quiet:
            print(
                f"Reloaded {len(result.collection)} notes, "
                f"{len(result.remeasure)} to re-measure ({duration_ms}ms)",
                flush=True,
            )
            for path in sorted(result.remeasure):
                print(f"  {path}", flush=True)

    return handle_batch


def watch_vault(
    runtime: Any,
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
) -> int:
    """
    Watch the vault directory and re-annotate notes after each batch of changes.

    Args:
        runtime: Runtime with vault and note collection manager
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress output
        json_output: Output JSON events instead of human-readable

    Returns:
        Exit code
    """
    vault_path = runtime.vault.storage.root
    if not vault_path.exists():
        print(f"Error: Vault not found: {vault_path}", file=sys.stderr)
        return 1

    initial = runtime.refresh()
    if not quiet and not json_output:
        print(f"Loaded {len(initial.collection)} notes")

    running = True

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(
        vault_path, make_batch_handler(runtime, quiet, json_output), debounce_ms
    )
    observer = Observer()
    observer.schedule(handler, str(vault_path), recursive=True)

    if not quiet and not json_output:
        print(f"Watching {vault_path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()
    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
