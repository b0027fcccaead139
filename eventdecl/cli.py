"""CLI entrypoints for eventdecl commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .emitter import UnresolvedClassError
from .graph import collect_event_classes
from .logging import configure_logging
from .orchestrator import Orchestrator
from .snapshot import SnapshotError, load_snapshot


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_snapshot_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "snapshot",
        help="Path to the reflected class/event snapshot (JSON or YAML).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eventdecl",
        description="Generate TypeScript event declarations from a reflected type snapshot.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write the event declaration document for a snapshot.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_snapshot_argument(generate_parser)
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to .eventdecl.yml or its directory (defaults to the snapshot's directory).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Override the output file path from the configuration.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated document instead of writing it.",
    )

    classes_parser = subparsers.add_parser(
        "classes",
        help="List the event classes referenced by the snapshot's groups.",
    )
    _add_verbose_option(classes_parser, suppress_default=True)
    _add_snapshot_argument(classes_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP generation service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for eventdecl commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "generate":
        try:
            outcome = Orchestrator().run_generate(
                args.snapshot,
                config_path=args.config,
                output=args.output,
                dry_run=bool(getattr(args, "dry_run", False)),
            )
        except (ConfigError, SnapshotError) as exc:
            parser.exit(1, f"{exc}\n")
        except UnresolvedClassError as exc:
            parser.exit(1, f"eventdecl generate aborted: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"eventdecl generate failed to write output: {exc}\n")
        if outcome.written:
            print(f"Declarations written to {_relativize(outcome.path)}")
        else:
            sys.stdout.write(outcome.text)
    elif args.command == "classes":
        try:
            snapshot = load_snapshot(Path(args.snapshot))
        except SnapshotError as exc:
            parser.exit(1, f"{exc}\n")
        for name in collect_event_classes(snapshot.groups):
            marker = "" if name in snapshot.graph else "  (missing from snapshot)"
            print(f"{name}{marker}")
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
