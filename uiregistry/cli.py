"""CLI entrypoints for uiregistry commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .builder import BuildAbort, RegistryBuilder
from .config import ConfigError, load_config
from .logging import SERVER_LOGGERS, configure_logging
from .resolver import RegistryResolver
from .stores import ArtifactError, load_registry


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


def _add_log_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing .uiregistry.yml (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uiregistry",
        description="Generate and serve a static registry of UI component sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Scan the component directory and regenerate the registry artifact.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_log_file_option(build_parser)
    _add_path_argument(build_parser)
    build_parser.add_argument(
        "--sort",
        action="store_true",
        help="Emit components in lexicographic order instead of directory order.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the registry document for one component.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    show_parser.add_argument("slug", help="Component identifier, optionally ending in .json.")
    _add_path_argument(show_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve registry documents over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_log_file_option(serve_parser)
    _add_path_argument(serve_parser)
    serve_parser.add_argument("--host", default="0.0.0.0", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for uiregistry commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=getattr(args, "log_file", None),
        server_loggers=SERVER_LOGGERS if args.command == "serve" else (),
    )

    try:
        config = load_config(Path(args.path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "build":
        if getattr(args, "sort", False):
            config.sort_entries = True
        try:
            result = RegistryBuilder(config).build()
        except BuildAbort as exc:
            parser.exit(1, f"uiregistry build failed: {exc}\nNo artifact was written.\n")
        except ValueError as exc:
            parser.exit(1, f"uiregistry build failed: {exc}\n")
        print(f"Registry written to {_relativize(result.output_path)} ({result.count} components)")
    elif args.command == "show":
        try:
            registry = load_registry(config.output_file)
        except FileNotFoundError:
            parser.exit(1, f"Registry artifact {config.output_file} not found. Run `uiregistry build` first.\n")
        except ArtifactError as exc:
            parser.exit(1, f"Invalid registry artifact: {exc}\n")
        try:
            resolver = RegistryResolver.from_config(config, registry)
        except ValueError as exc:
            parser.exit(1, f"{exc}\n")
        resolution = resolver.resolve(args.slug)
        print(json.dumps(resolution.document, indent=2, ensure_ascii=False))
        if not resolution.found:
            parser.exit(1)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(Path(args.path), host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
