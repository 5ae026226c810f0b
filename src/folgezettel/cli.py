"""CLI for folgezettel - hierarchical note identifiers."""

import argparse
import json
import platform
import sys
from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Any

from . import __version__
from .core.model import AnnotatedNote
from .runtime import build_runtime


def _vault_rel(rt: Any, ref: str) -> str:
    """Accept either a vault-relative path or a filesystem path inside the vault."""
    candidate = Path(ref)
    root = rt.vault.storage.root.resolve()
    if candidate.exists():
        try:
            return candidate.resolve().relative_to(root).as_posix()
        except ValueError:
            pass
    return PurePosixPath(ref).as_posix()


def _note_dict(note: AnnotatedNote) -> dict[str, Any]:
    return {
        "path": note.path,
        "id": note.id,
        "title": note.title,
        "toc_title": note.meta.toc_title,
        "split_level": note.split_level,
    }


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List notes in outline order."""
    collection = rt.refresh().collection
    notes = collection.filter(args.grep) if args.grep else list(collection)

    if args.json:
        print(json.dumps([_note_dict(n) for n in notes], indent=2))
        return 0

    marker = rt.config.ui.split_marker
    width = max((len(n.id or "") for n in notes), default=0)
    for i, note in enumerate(notes):
        if i > 0 and note.split_level == 1 and not args.grep:
            print(marker * 20)
        print(f"{(note.id or ''):<{width}}  {note.display_title}")

    return 0


def cmd_next(args: argparse.Namespace, rt: Any) -> int:
    """Print the next free sibling or child identifier for a note."""
    rt.refresh()
    path = _vault_rel(rt, args.path)
    note = rt.notes.current.get(path)
    if note is None:
        print(f"Note {path} not found", file=sys.stderr)
        return 1
    if note.id is None:
        print(f"Note {path} has no identifier", file=sys.stderr)
        return 1

    nid = rt.notes.next_id(path, want_child=args.child)
    if nid is None:
        print(
            f"No free identifier after {note.id} within {rt.notes.max_attempts} attempts",
            file=sys.stderr,
        )
        return 1

    print(nid)
    return 0


def cmd_new(args: argparse.Namespace, rt: Any) -> int:
    """Create a new note next to (or below) an existing one."""
    rt.refresh()
    path = _vault_rel(rt, args.path)
    nid = rt.notes.next_id(path, want_child=args.child)
    if nid is None:
        print(f"Could not allocate an identifier relative to {path}", file=sys.stderr)
        return 1

    folder = PurePosixPath(path).parent.as_posix()
    new_path = rt.vault.create_note(nid, args.title, "" if folder == "." else folder)

    if args.json:
        print(json.dumps({"id": nid, "path": new_path}))
    elif not args.quiet:
        print(f"{nid}\t{new_path}")
    return 0


def cmd_check(args: argparse.Namespace, rt: Any) -> int:
    """Report duplicate identifiers and notes without one."""
    collection = rt.refresh().collection

    by_id: dict[str, list[str]] = defaultdict(list)
    missing: list[str] = []
    for note in collection:
        if note.id is None:
            missing.append(note.path)
        else:
            by_id[note.id].append(note.path)
    duplicates = {nid: paths for nid, paths in by_id.items() if len(paths) > 1}

    if args.json:
        print(json.dumps({"duplicates": duplicates, "missing": missing}, indent=2))
    elif not args.quiet:
        for nid, paths in duplicates.items():
            print(f"error: {nid} used by {', '.join(paths)}")
        for path in missing:
            print(f"info: {path} has no identifier")
        print(f"{len(collection)} notes, {len(duplicates)} duplicate ids, {len(missing)} without id")

    return 1 if duplicates else 0


def cmd_watch(args: argparse.Namespace, rt: Any) -> int:
    """Watch the vault and report notes whose grouping changed."""
    try:
        from .watch import watch_vault
    except ImportError:
        print(
            "Error: watchdog library not installed. Install with: pip install folgezettel[watch]",
            file=sys.stderr,
        )
        return 1

    return watch_vault(
        rt,
        debounce_ms=args.debounce_ms,
        quiet=args.quiet,
        json_output=args.json,
    )


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start local JSON API server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install folgezettel[api]",
            file=sys.stderr,
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1

    token: str | None
    if args.token == "auto":
        token = generate_token()
        print(f"Generated bearer token: {token}")
    elif args.token == "none":
        print("Warning: Running without authentication. Only use in trusted environments.")
        token = None
    else:
        token = args.token

    app = create_app(rt, token=token, enable_cors=args.cors)

    print(f"Starting server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level="info")
    return 0


def _version_string() -> str:
    return (
        f"folgezettel {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fz", description="Hierarchical note identifiers"
    )
    parser.add_argument("--version", action="version", version=_version_string())
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/fz.toml, vault/fz.toml)",
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=None,
        help="Path to vault directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Machine-readable output"
    )

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # ls command
    parser_ls = subparsers.add_parser("ls", help="List notes in outline order")
    parser_ls.add_argument("--grep", help="Only notes whose id or title contains this text")

    # next command
    parser_next = subparsers.add_parser("next", help="Print the next free identifier")
    parser_next.add_argument("path", help="Note path (vault-relative or on disk)")
    parser_next.add_argument(
        "--child", action="store_true", help="Child instead of sibling identifier"
    )

    # new command
    parser_new = subparsers.add_parser("new", help="Create a note after or below another")
    parser_new.add_argument("path", help="Reference note path")
    parser_new.add_argument(
        "--child", action="store_true", help="Create a child instead of a sibling"
    )
    parser_new.add_argument("--title", help="Note title")

    # check command
    subparsers.add_parser("check", help="Report duplicate and missing identifiers")

    # watch command
    parser_watch = subparsers.add_parser("watch", help="Watch vault and report regrouped notes")
    parser_watch.add_argument(
        "--debounce-ms", type=int, default=150,
        help="Debounce window in milliseconds (default: 150)"
    )

    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument(
        "--host", default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=8765,
        help="Port to bind to (default: 8765)"
    )
    parser_serve.add_argument(
        "--token", default="auto",
        help="Bearer token (auto|<string>|none, default: auto)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    rt = build_runtime(vault_path=args.vault, config_path=args.config)

    handlers = {
        "ls": cmd_ls,
        "next": cmd_next,
        "new": cmd_new,
        "check": cmd_check,
        "watch": cmd_watch,
        "serve": cmd_serve,
    }

    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
