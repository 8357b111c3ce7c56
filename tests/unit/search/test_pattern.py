"""Tests for include-pattern construction and candidate acceptance."""

from __future__ import annotations

import re
import unittest
from pathlib import Path

from companionfile.classify import ExtensionTable
from companionfile.search.pattern import IncludeQuery, build_include_pattern, escape_literal


class IncludePatternTests(unittest.TestCase):
    def setUp(self) -> None:
        self.regex = re.compile(build_include_pattern("a/b/x.h", "x.h"))

    def test_matches_root_relative_and_relative_spellings(self) -> None:
        for line in (
            "#include <a/b/x.h>",
            '#include "a/b/x.h"',
            '  #import "a/b/x.h"  ',
            '#include "x.h"',
            '#include "../x.h"',
            '#include "../../b/x.h"',
            '#include "../../../a/b/x.h"',
            "\t#include\t<x.h>\r",
        ):
            self.assertIsNotNone(self.regex.match(line), line)

    def test_rejects_other_headers_and_directives(self) -> None:
        for line in (
            "#include <a/b/y.h>",
            "#include <b/a/x.h>",
            '#include "../wrong/x.h"',
            '#define X "x.h"',
            '// #include "x.h" is commented out',
            '#include "x.h" // trailing comment',
            '#include "a/b/xxh"',
        ):
            self.assertIsNone(self.regex.match(line), line)

    def test_directives_are_configurable(self) -> None:
        regex = re.compile(build_include_pattern("x.h", "x.h", directives=("include",)))

        self.assertIsNotNone(regex.match('#include "x.h"'))
        self.assertIsNone(regex.match('#import "x.h"'))

    def test_escape_literal_only_escapes_regex_metacharacters(self) -> None:
        self.assertEqual(escape_literal("a-b/c.h"), r"a-b/c\.h")
        self.assertEqual(escape_literal("x(1)+.h"), r"x\(1\)\+\.h")


class IncludeQueryAcceptTests(unittest.TestCase):
    def setUp(self) -> None:
        self.root = Path("/project")
        self.header = self.root / "a" / "b" / "x.h"
        self.query = IncludeQuery.for_header(self.header, self.root)

    def test_search_root_is_header_directory(self) -> None:
        self.assertEqual(self.query.search_root, self.root / "a" / "b")

    def test_root_relative_include_is_accepted_without_resolution(self) -> None:
        candidate = self.root / "a" / "b" / "deep" / "er" / "impl.cpp"

        self.assertEqual(self.query.accept(candidate, "#include <a/b/x.h>\n"), candidate)

    def test_relative_include_resolving_to_header_is_accepted(self) -> None:
        candidate = self.root / "a" / "b" / "c" / "y.m"

        self.assertEqual(self.query.accept(candidate, '#include "../../b/x.h"'), candidate)
        self.assertEqual(self.query.accept(candidate, '#import "../x.h"'), candidate)

    def test_relative_include_resolving_elsewhere_is_rejected(self) -> None:
        candidate = self.root / "a" / "b" / "c" / "y.m"

        self.assertIsNone(self.query.accept(candidate, '#include "../../x.h"'))
        self.assertIsNone(self.query.accept(candidate, '#include "../../../x.h"'))

    def test_bare_file_name_include_is_accepted(self) -> None:
        candidate = self.root / "a" / "b" / "c" / "y.cpp"

        self.assertEqual(self.query.accept(candidate, '#include "x.h"'), candidate)

    def test_non_source_files_are_discarded(self) -> None:
        self.assertIsNone(self.query.accept(self.root / "a" / "b" / "other.h", "#include <a/b/x.h>"))
        self.assertIsNone(self.query.accept(self.root / "a" / "b" / "notes.txt", "#include <a/b/x.h>"))

    def test_source_role_follows_the_extension_table(self) -> None:
        table = ExtensionTable.from_lists(source_extensions=[".cu"])
        kernel = self.root / "a" / "b" / "kernel.cu"

        self.assertIsNone(self.query.accept(kernel, "#include <a/b/x.h>"))
        self.assertEqual(self.query.accept(kernel, "#include <a/b/x.h>", table), kernel)
        self.assertIsNone(self.query.accept(self.root / "a" / "b" / "y.cpp", "#include <a/b/x.h>", table))

    def test_non_matching_line_is_discarded(self) -> None:
        self.assertIsNone(self.query.accept(self.root / "a" / "b" / "y.cpp", "int x = 1;"))


if __name__ == "__main__":
    unittest.main()
