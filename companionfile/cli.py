"""Command-line front door for companionfile.

Parses CLI options, loads persisted settings, and resolves one companion.
Prints the companion path, or exits with a message when there is none.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .classify import FileRole
from .config import load_settings
from .errors import InvalidPathError
from .resolver import resolve_companion_file
from .search import SEARCH_TOOLS, default_scanner


def _positive_float(value: str) -> float:
    """argparse type for positive second counts."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def main(default_root: Path | None = None) -> None:
    """Parse CLI arguments and print the companion of the given file.

    ``default_root`` is primarily for tests; when omitted the current working
    directory is the project root for include searches.
    """
    parser = argparse.ArgumentParser(
        description="Find the header for a C/C++/Objective-C source file, or the source for a header."
    )
    parser.add_argument("path", help="Header or source file.")
    parser.add_argument("--root", default=None, help="Project root for include search. Defaults to current directory.")
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Seconds before the include search gives up (default: config value, 15).",
    )
    parser.add_argument(
        "--tool",
        choices=SEARCH_TOOLS,
        default=None,
        help="Content-search tool for the include search (default: config value, auto).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search progress to stderr.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    if default_root is None:
        default_root = Path.cwd()
    root = Path(args.root) if args.root is not None else default_root
    if not root.is_dir():
        raise SystemExit(f"Project root is not a directory: {root}")

    settings = load_settings()
    if settings.extension_table.classify(path) is FileRole.OTHER:
        raise SystemExit(f"Not a header or source file: {path}")

    timeout = args.timeout if args.timeout is not None else settings.include_search_timeout
    tool = args.tool if args.tool is not None else settings.search_tool
    try:
        companion = resolve_companion_file(
            path,
            root,
            timeout=timeout,
            table=settings.extension_table,
            scanner=default_scanner(tool),
        )
    except InvalidPathError as exc:
        raise SystemExit(str(exc)) from exc

    if companion is None:
        raise SystemExit(f"No companion file found for {path}.")
    sys.stdout.write(f"{companion}\n")


if __name__ == "__main__":
    main()
