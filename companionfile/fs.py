"""Directory-local companion probing."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .classify import DEFAULT_EXTENSION_TABLE, ExtensionTable, FileRole

logger = logging.getLogger(__name__)

RoleFilter = Callable[[FileRole], bool]


def role_is(role: FileRole) -> RoleFilter:
    """Return a role filter accepting exactly ``role``."""
    return lambda candidate: candidate is role


def list_directory_files(directory: Path) -> list[Path]:
    """Return regular-file children of ``directory`` in listing order.

    A missing or unreadable directory lists as empty. Order is whatever
    ``os.scandir`` reports and is not sorted.
    """
    files: list[Path] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    if child.is_dir():
                        continue
                except OSError:
                    continue
                files.append(Path(child.path))
    except (PermissionError, OSError) as exc:
        logger.debug("cannot list %s: %s", directory, exc)
        return []
    return files


def probe_directory(
    directory: Path,
    basename: str,
    role_filter: RoleFilter,
    table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
) -> Path | None:
    """Return the first file in ``directory`` matching ``basename`` and ``role_filter``.

    "First" is listing order, so callers must not rely on which entry wins
    when several files qualify.
    """
    for path in list_directory_files(directory):
        if not role_filter(table.classify(path)):
            continue
        if table.basename_of(path) == basename:
            return path
    return None


__all__ = [
    "RoleFilter",
    "list_directory_files",
    "probe_directory",
    "role_is",
]
