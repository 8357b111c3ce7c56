"""Find a source file that includes a given header.

The search covers the header's own directory and everything below it, not the
whole project. It is take-one: the first accepted line ends the scan. Which
file wins when several include the header depends on scan order and is not
deterministic across filesystems.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import aclosing
from pathlib import Path

from ..classify import DEFAULT_EXTENSION_TABLE, ExtensionTable
from ..errors import require_path
from .pattern import INCLUDE_DIRECTIVES, IncludeQuery
from .scanners import Scanner, default_scanner

logger = logging.getLogger(__name__)


async def _including_source_files(
    query: IncludeQuery,
    scanner: Scanner,
    table: ExtensionTable,
) -> AsyncGenerator[Path | None, None]:
    async with aclosing(scanner(query.search_root, query.pattern)) as matches:
        async for line_match in matches:
            accepted = query.accept(line_match.path, line_match.text, table)
            if accepted is None:
                continue
            logger.debug("%s includes %s", accepted, query.header)
            yield accepted
            return
    yield None


def find_including_source_file(
    header: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
    directives: tuple[str, ...] = INCLUDE_DIRECTIVES,
) -> AsyncGenerator[Path | None, None]:
    """Return a lazy stream that yields at most one including source file.

    Handles two include spellings: relative to ``project_root``
    (``#include <a/b.h>``) and relative to the including file
    (``#include "../../a.h"``). The latter is checked against the filesystem
    layout before it is accepted.

    The stream yields the first accepted ``Path`` and ends, or yields ``None``
    once when the scan finishes without one. Closing the stream, or cancelling
    the task consuming it, terminates the scan. A failing scan raises
    ``IncludeSearchError`` from the stream.

    Path arguments are validated immediately; ``InvalidPathError`` is raised
    here rather than on first iteration.
    """
    header_path = require_path(header, "header")
    root_path = require_path(project_root, "project_root")
    query = IncludeQuery.for_header(header_path, root_path, directives)
    active_scanner = scanner if scanner is not None else default_scanner()
    logger.debug("searching %s for includes of %s", query.search_root, header_path)
    return _including_source_files(query, active_scanner, table)


async def first_including_source_file(
    header: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
    directives: tuple[str, ...] = INCLUDE_DIRECTIVES,
) -> Path | None:
    """Await the single result of ``find_including_source_file``."""
    results = find_including_source_file(
        header,
        project_root,
        table=table,
        scanner=scanner,
        directives=directives,
    )
    async with aclosing(results):
        async for result in results:
            return result
    return None


__all__ = [
    "find_including_source_file",
    "first_including_source_file",
]
