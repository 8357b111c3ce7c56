"""Header/source classification by file extension.

The extension table is data, so hosts can swap in their own language mix.
Everything here is pure string work; no filesystem access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

HEADER_EXTENSIONS = frozenset({".h", ".hh", ".hpp", ".hxx", ".h++"})
SOURCE_EXTENSIONS = frozenset({".c", ".cc", ".cpp", ".cxx", ".c++", ".m", ".mm"})
# `Foo-inl.h` and `FooInternal.h` belong to `Foo.cpp`/`Foo.m`.
COMPANION_SUFFIXES = ("-inl", "Internal")


class FileRole(Enum):
    HEADER = "header"
    SOURCE = "source"
    OTHER = "other"


def _normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


@dataclass(frozen=True)
class ExtensionTable:
    """Extension membership table used to assign a ``FileRole``.

    Extensions may span several dots (``.pb.h``); the longest one that ends the
    file name wins. Comparison is case-insensitive.
    """

    header_extensions: frozenset[str] = HEADER_EXTENSIONS
    source_extensions: frozenset[str] = SOURCE_EXTENSIONS
    companion_suffixes: tuple[str, ...] = COMPANION_SUFFIXES

    @classmethod
    def from_lists(
        cls,
        header_extensions: list[str] | None = None,
        source_extensions: list[str] | None = None,
        companion_suffixes: list[str] | None = None,
    ) -> ExtensionTable:
        """Build a table from loose config lists, keeping defaults for ``None``."""
        headers = HEADER_EXTENSIONS
        sources = SOURCE_EXTENSIONS
        suffixes = COMPANION_SUFFIXES
        if header_extensions is not None:
            headers = frozenset(ext for ext in map(_normalize_extension, header_extensions) if ext)
        if source_extensions is not None:
            sources = frozenset(ext for ext in map(_normalize_extension, source_extensions) if ext)
        if companion_suffixes is not None:
            suffixes = tuple(suffix for suffix in companion_suffixes if suffix)
        return cls(header_extensions=headers, source_extensions=sources, companion_suffixes=suffixes)

    def _longest_extension(self, name: str, extensions: frozenset[str]) -> str | None:
        lowered = name.lower()
        best: str | None = None
        for extension in extensions:
            # A bare ".h" file has no stem, so it is not a header.
            if len(lowered) > len(extension) and lowered.endswith(extension):
                if best is None or len(extension) > len(best):
                    best = extension
        return best

    def role_extension(self, name: str) -> tuple[FileRole, str | None]:
        """Return ``(role, matched_extension)`` for a bare file name."""
        header_ext = self._longest_extension(name, self.header_extensions)
        source_ext = self._longest_extension(name, self.source_extensions)
        if header_ext is not None and (source_ext is None or len(header_ext) >= len(source_ext)):
            return FileRole.HEADER, header_ext
        if source_ext is not None:
            return FileRole.SOURCE, source_ext
        return FileRole.OTHER, None

    def classify(self, path: str | os.PathLike[str]) -> FileRole:
        role, _extension = self.role_extension(os.path.basename(os.fspath(path)))
        return role

    def basename_of(self, path: str | os.PathLike[str]) -> str:
        """Return the companion matching key for ``path``.

        Strips the role extension (or the last extension for unclassified
        files), then one trailing companion suffix. A suffix is never stripped
        when it is the whole remaining name.
        """
        name = os.path.basename(os.fspath(path))
        _role, extension = self.role_extension(name)
        if extension is not None:
            stem = name[: len(name) - len(extension)]
        else:
            stem, _ext = os.path.splitext(name)
        for suffix in self.companion_suffixes:
            if stem.endswith(suffix) and len(stem) > len(suffix):
                return stem[: len(stem) - len(suffix)]
        return stem


DEFAULT_EXTENSION_TABLE = ExtensionTable()


def classify(path: str | os.PathLike[str], table: ExtensionTable = DEFAULT_EXTENSION_TABLE) -> FileRole:
    """Return the ``FileRole`` of ``path`` from its extension."""
    return table.classify(path)


def basename_of(path: str | os.PathLike[str], table: ExtensionTable = DEFAULT_EXTENSION_TABLE) -> str:
    """Return ``path``'s name without role extension and companion suffix."""
    return table.basename_of(path)


def is_header_file(path: str | os.PathLike[str], table: ExtensionTable = DEFAULT_EXTENSION_TABLE) -> bool:
    return table.classify(path) is FileRole.HEADER


def is_source_file(path: str | os.PathLike[str], table: ExtensionTable = DEFAULT_EXTENSION_TABLE) -> bool:
    return table.classify(path) is FileRole.SOURCE


__all__ = [
    "COMPANION_SUFFIXES",
    "DEFAULT_EXTENSION_TABLE",
    "ExtensionTable",
    "FileRole",
    "HEADER_EXTENSIONS",
    "SOURCE_EXTENSIONS",
    "basename_of",
    "classify",
    "is_header_file",
    "is_source_file",
]
