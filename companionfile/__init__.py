"""Public package surface for companionfile.

Resolves the companion of a C-family file: the header for a source file, or
the source for a header. Exports the resolver API plus ``main`` for
programmatic CLI invocation.
"""

from __future__ import annotations

from .classify import ExtensionTable, FileRole, basename_of, classify
from .errors import CompanionFileError, IncludeSearchError, InvalidPathError
from .framework import FrameworkStructure, framework_structure_for
from .resolver import (
    DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS,
    find_companion_file,
    find_header_for_source,
    find_source_for_header,
    resolve_companion_file,
    resolve_source_for_header,
)
from .search import find_including_source_file, first_including_source_file


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "CompanionFileError",
    "DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS",
    "ExtensionTable",
    "FileRole",
    "FrameworkStructure",
    "IncludeSearchError",
    "InvalidPathError",
    "basename_of",
    "classify",
    "find_companion_file",
    "find_header_for_source",
    "find_including_source_file",
    "find_source_for_header",
    "first_including_source_file",
    "framework_structure_for",
    "main",
    "resolve_companion_file",
    "resolve_source_for_header",
]
