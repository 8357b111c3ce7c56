"""Companion-file resolution: header for a source file, source for a header.

Lookup order, cheapest first:
1. a same-basename sibling in the file's own directory
2. (header lookups) the framework ``Headers``/``PrivateHeaders`` trees
3. (source lookups) a timeout-bounded include search below the header

"Nothing found" is always ``None``. Search timeouts and scan failures degrade
to ``None`` as well; only invalid path arguments raise.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from .classify import DEFAULT_EXTENSION_TABLE, ExtensionTable, FileRole
from .errors import IncludeSearchError, require_path
from .framework import framework_header_directories, framework_structure_for
from .fs import probe_directory, role_is
from .search import Scanner, first_including_source_file

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS = 15.0


def find_header_for_source(
    source: str | os.PathLike[str],
    *,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
) -> Path | None:
    """Return the header paired with ``source``, or ``None``.

    Checks the source's directory first, then the framework header trees in
    priority order (``Headers`` before ``PrivateHeaders``).
    """
    source_path = require_path(source, "source")
    basename = table.basename_of(source_path)
    is_header = role_is(FileRole.HEADER)

    header = probe_directory(source_path.parent, basename, is_header, table)
    if header is not None:
        return header

    structure = framework_structure_for(source_path.parent)
    if structure is None:
        return None
    for directory in framework_header_directories(structure):
        header = probe_directory(directory, basename, is_header, table)
        if header is not None:
            return header
    return None


async def find_source_for_header(
    header: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    timeout: float | None = None,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
) -> Path | None:
    """Return the source file paired with ``header``, or ``None``.

    A same-directory sibling wins without any search. Otherwise the header's
    directory subtree is scanned for a source file including it, bounded by
    ``timeout`` seconds (``DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS`` when
    omitted). Expiry cancels the scan and returns ``None``.
    """
    header_path = require_path(header, "header")
    root_path = require_path(project_root, "project_root")

    source = probe_directory(
        header_path.parent,
        table.basename_of(header_path),
        role_is(FileRole.SOURCE),
        table,
    )
    if source is not None:
        return source

    limit = DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(
            first_including_source_file(header_path, root_path, table=table, scanner=scanner),
            timeout=limit,
        )
    except asyncio.TimeoutError:
        logger.debug("include search for %s timed out after %ss", header_path, limit)
        return None
    except IncludeSearchError as exc:
        logger.warning("include search for %s failed: %s", header_path, exc)
        return None


async def find_companion_file(
    path: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    timeout: float | None = None,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
) -> Path | None:
    """Switch between header and source: return ``path``'s counterpart.

    Files that are neither headers nor sources have no companion.
    """
    target = require_path(path, "path")
    role = table.classify(target)
    if role is FileRole.HEADER:
        return await find_source_for_header(
            target,
            project_root,
            timeout=timeout,
            table=table,
            scanner=scanner,
        )
    if role is FileRole.SOURCE:
        return find_header_for_source(target, table=table)
    return None


def resolve_source_for_header(
    header: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    timeout: float | None = None,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
) -> Path | None:
    """Blocking ``find_source_for_header`` for callers without an event loop."""
    return asyncio.run(
        find_source_for_header(header, project_root, timeout=timeout, table=table, scanner=scanner)
    )


def resolve_companion_file(
    path: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    *,
    timeout: float | None = None,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    scanner: Scanner | None = None,
) -> Path | None:
    """Blocking ``find_companion_file`` for callers without an event loop."""
    return asyncio.run(
        find_companion_file(path, project_root, timeout=timeout, table=table, scanner=scanner)
    )


__all__ = [
    "DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS",
    "find_companion_file",
    "find_header_for_source",
    "find_source_for_header",
    "resolve_companion_file",
    "resolve_source_for_header",
]
