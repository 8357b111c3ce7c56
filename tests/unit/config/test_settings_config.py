"""Tests for settings persistence and input sanitization.

Ensures malformed config data falls back to defaults key by key.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from companionfile import config
from companionfile.classify import DEFAULT_EXTENSION_TABLE, FileRole
from companionfile.resolver import DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS


class SettingsConfigTests(unittest.TestCase):
    def _write_config(self, tmp: str, data: object) -> Path:
        config_path = Path(tmp) / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        return config_path

    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("companionfile.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                settings = config.load_settings()

        self.assertEqual(settings, config.ResolverSettings())
        self.assertIs(settings.extension_table, DEFAULT_EXTENSION_TABLE)
        self.assertEqual(settings.include_search_timeout, DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS)
        self.assertEqual(settings.search_tool, "auto")

    def test_non_object_or_malformed_config_yields_empty_dict(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("companionfile.config.CONFIG_PATH", self._write_config(tmp, [1, 2])):
                self.assertEqual(config.load_config(), {})
            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with mock.patch("companionfile.config.CONFIG_PATH", broken):
                self.assertEqual(config.load_config(), {})

    def test_valid_values_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write_config(
                tmp,
                {
                    "header_extensions": [".h", ".cuh"],
                    "source_extensions": ["cu", ".cpp"],
                    "companion_suffixes": ["_private"],
                    "include_search_timeout_seconds": 2.5,
                    "search_tool": "walk",
                },
            )
            with mock.patch("companionfile.config.CONFIG_PATH", path):
                settings = config.load_settings()

        table = settings.extension_table
        self.assertIs(table.classify("k.cuh"), FileRole.HEADER)
        self.assertIs(table.classify("k.cu"), FileRole.SOURCE)
        self.assertIs(table.classify("k.c"), FileRole.OTHER)
        self.assertEqual(table.basename_of("k_private.h"), "k")
        self.assertEqual(settings.include_search_timeout, 2.5)
        self.assertEqual(settings.search_tool, "walk")

    def test_invalid_values_fall_back_per_key(self) -> None:
        data = {
            "header_extensions": [],
            "source_extensions": [".c", 3],
            "include_search_timeout_seconds": True,
            "search_tool": "grep",
        }

        self.assertIs(config.load_extension_table(data), DEFAULT_EXTENSION_TABLE)
        self.assertEqual(config.load_include_search_timeout(data), DEFAULT_INCLUDE_SEARCH_TIMEOUT_SECONDS)
        self.assertEqual(config.load_include_search_timeout({"include_search_timeout_seconds": -1}), 15.0)
        self.assertEqual(config.load_search_tool(data), "auto")

    def test_config_path_uses_platform_config_dir(self) -> None:
        self.assertEqual(config.CONFIG_PATH.name, "config.json")
        self.assertEqual(config.CONFIG_PATH.parent.name, config.APP_NAME)


if __name__ == "__main__":
    unittest.main()
