"""Exception types raised by companion-file resolution.

Only caller mistakes (bad path arguments) escape the public resolver API.
Search failures are raised by the tree-search engine and absorbed by the resolver.
"""

from __future__ import annotations

import os
from pathlib import Path


class CompanionFileError(Exception):
    """Base class for companionfile errors."""


class InvalidPathError(CompanionFileError, ValueError):
    """A path argument is empty, malformed, or not path-like."""


class IncludeSearchError(CompanionFileError):
    """The content scan could not run or exited with a failure status."""


def require_path(value: object, name: str = "path") -> Path:
    """Validate a caller-supplied path and return it as an absolute ``Path``.

    Accepts ``str`` and ``os.PathLike`` values. Empty strings and values with
    NUL bytes raise ``InvalidPathError``. Symlinks are not resolved.
    """
    if not isinstance(value, (str, os.PathLike)):
        raise InvalidPathError(f"{name} must be a path, got {type(value).__name__}")
    text = os.fspath(value)
    if not isinstance(text, str):
        raise InvalidPathError(f"{name} must be a text path")
    if not text:
        raise InvalidPathError(f"{name} must not be empty")
    if "\x00" in text:
        raise InvalidPathError(f"{name} contains a NUL byte: {text!r}")
    return Path(os.path.abspath(text))
