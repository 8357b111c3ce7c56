"""Persistent JSON settings for companion resolution.

Stores the header/source extension table, the include-search timeout, and the
preferred content-search tool. All access is defensive: malformed or missing
config falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .classify import DEFAULT_EXTENSION_TABLE, ExtensionTable
from .resolver import DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS
from .search import SEARCH_TOOLS

APP_NAME = "companionfile"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class ResolverSettings:
    """Everything a caller needs to configure one resolution."""

    extension_table: ExtensionTable = DEFAULT_EXTENSION_TABLE
    include_search_timeout: float = DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS
    search_tool: str = "auto"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _string_list(value: object) -> list[str] | None:
    """Return ``value`` as a list of strings, or ``None`` when it is not one."""
    if not isinstance(value, list):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return list(value)


def load_extension_table(data: dict[str, object] | None = None) -> ExtensionTable:
    """Build the extension table, keeping defaults for invalid or absent keys.

    An empty extension list is treated as invalid, since it would make every
    file unclassifiable.
    """
    config = load_config() if data is None else data
    headers = _string_list(config.get("header_extensions")) or None
    sources = _string_list(config.get("source_extensions")) or None
    suffixes = _string_list(config.get("companion_suffixes"))
    if headers is None and sources is None and suffixes is None:
        return DEFAULT_EXTENSION_TABLE
    return ExtensionTable.from_lists(headers, sources, suffixes)


def load_include_search_timeout(data: dict[str, object] | None = None) -> float:
    """Return the include-search timeout in seconds.

    Only positive numbers are accepted; booleans and other types fall back to
    ``DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS``.
    """
    config = load_config() if data is None else data
    value = config.get("include_search_timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS
    return float(value)


def load_search_tool(data: dict[str, object] | None = None) -> str:
    config = load_config() if data is None else data
    value = config.get("search_tool")
    return value if isinstance(value, str) and value in SEARCH_TOOLS else "auto"


def load_settings() -> ResolverSettings:
    """Load all resolver settings from one read of the config file."""
    data = load_config()
    return ResolverSettings(
        extension_table=load_extension_table(data),
        include_search_timeout=load_include_search_timeout(data),
        search_tool=load_search_tool(data),
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "ResolverSettings",
    "load_config",
    "load_extension_table",
    "load_include_search_timeout",
    "load_search_tool",
    "load_settings",
]
