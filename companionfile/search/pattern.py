"""Include-directive pattern for one header and acceptance of candidate lines.

Two include spellings are recognized:

1. paths relative to the project root, e.g. ``#include <a/b/x.h>``
2. paths relative to the including file, e.g. ``#include "../../b/x.h"``

Root-relative hits and bare ``#include "x.h"`` are accepted as-is. Any other
relative spelling only counts when it resolves back to the header itself.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..classify import DEFAULT_EXTENSION_TABLE, ExtensionTable, is_source_file

INCLUDE_DIRECTIVES = ("include", "import")

# Characters special to both Python ``re`` and ripgrep's regex syntax. Escaping
# only these keeps one pattern string valid for both engines.
_REGEX_SPECIAL = frozenset("\\.^$|?*+()[]{}")


def escape_literal(text: str) -> str:
    return "".join("\\" + char if char in _REGEX_SPECIAL else char for char in text)


def _trailing_directories(root_relative_dir: str) -> list[str]:
    """Return ``b/``, ``a/b/`` style suffixes of a slash-separated directory."""
    parts = [part for part in root_relative_dir.split("/") if part not in ("", ".", "..")]
    return ["/".join(parts[index:]) + "/" for index in range(len(parts) - 1, -1, -1)]


def build_include_pattern(
    root_relative_path: str,
    basename: str,
    directives: tuple[str, ...] = INCLUDE_DIRECTIVES,
) -> str:
    """Return the include-line regex source for one header.

    Group ``path`` is the whole included path. Group ``relative`` is set only
    for the file-relative branch: optional ``../`` ascents, optional trailing
    directories of the header's own location, then the header's file name.
    """
    directive = "|".join(escape_literal(name) for name in directives)
    directories = _trailing_directories(root_relative_path.rpartition("/")[0])
    prefix = ""
    if directories:
        prefix = "(?:" + "|".join(escape_literal(item) for item in directories) + ")?"
    included = (
        rf"(?P<path>{escape_literal(root_relative_path)}"
        rf"|(?P<relative>(?:\.\./)*{prefix}{escape_literal(basename)}))"
    )
    return rf"^\s*#(?:{directive})\s+" + '["<]' + included + '[">]' + r"\s*$"


@dataclass(frozen=True)
class IncludeQuery:
    """Compiled include pattern bound to the header it looks for."""

    header: Path
    search_root: Path
    pattern: str
    regex: re.Pattern[str] = field(compare=False, repr=False)

    @classmethod
    def for_header(
        cls,
        header: Path,
        project_root: Path,
        directives: tuple[str, ...] = INCLUDE_DIRECTIVES,
    ) -> IncludeQuery:
        # Include paths always use forward slashes, whatever the host separator.
        relative = os.path.relpath(header, project_root).replace(os.sep, "/")
        pattern = build_include_pattern(relative, header.name, directives)
        return cls(
            header=header,
            search_root=header.parent,
            pattern=pattern,
            regex=re.compile(pattern),
        )

    def accept(
        self,
        path: Path,
        line: str,
        table: ExtensionTable = DEFAULT_EXTENSION_TABLE,
    ) -> Path | None:
        """Return ``path`` if ``line`` in it really includes the header."""
        if not is_source_file(path, table):
            return None
        match = self.regex.match(line.rstrip("\r\n"))
        if match is None:
            return None
        relative = match.group("relative")
        if relative is not None and relative != self.header.name:
            target = os.path.normpath(os.path.join(path.parent, relative))
            if Path(target) != self.header:
                return None
        return path


__all__ = [
    "INCLUDE_DIRECTIVES",
    "IncludeQuery",
    "build_include_pattern",
    "escape_literal",
]
