"""Tree search fallback: include-directive scanning under a header's directory.

Combines pattern building, content scanners, and the take-one engine in one
import surface.
"""

from __future__ import annotations

from .engine import find_including_source_file, first_including_source_file
from .pattern import INCLUDE_DIRECTIVES, IncludeQuery, build_include_pattern, escape_literal
from .scanners import (
    SEARCH_TOOLS,
    LineMatch,
    Scanner,
    default_scanner,
    scan_with_ripgrep,
    scan_with_walk,
    walk_matching_lines,
)

__all__ = [
    "INCLUDE_DIRECTIVES",
    "IncludeQuery",
    "LineMatch",
    "SEARCH_TOOLS",
    "Scanner",
    "build_include_pattern",
    "default_scanner",
    "escape_literal",
    "find_including_source_file",
    "first_including_source_file",
    "scan_with_ripgrep",
    "scan_with_walk",
    "walk_matching_lines",
]
