#!/usr/bin/env python3
from __future__ import annotations

import io
import sys
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

import foundry_ci_utils


class StripCommentLinesTests(unittest.TestCase):
    def test_drops_only_whole_line_comments(self) -> None:
        text = "\n".join(
            [
                "# top comment",
                "   # indented comment",
                "\t# tab-indented comment",
                'bytecode_hash = "none" # inline stays',
                "[profile.default]",
            ]
        )
        self.assertEqual(
            foundry_ci_utils.strip_comment_lines(text),
            ['bytecode_hash = "none" # inline stays', "[profile.default]"],
        )

    def test_keeps_blank_lines(self) -> None:
        self.assertEqual(foundry_ci_utils.strip_comment_lines("a = 1\n\nb = 2\n"), ["a = 1", "", "b = 2"])


class HasSoliditySourcesTests(unittest.TestCase):
    def test_missing_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertFalse(foundry_ci_utils.has_solidity_sources(Path(tmpdir) / "absent"))

    def test_top_level_sol_file_qualifies(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "Counter.sol").write_text("", encoding="utf-8")
            self.assertTrue(foundry_ci_utils.has_solidity_sources(root))

    def test_non_sol_and_nested_entries_do_not_qualify(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "README.md").write_text("", encoding="utf-8")
            (root / "Counter.sol.bak").write_text("", encoding="utf-8")
            (root / "nested").mkdir()
            (root / "nested" / "Counter.sol").write_text("", encoding="utf-8")
            self.assertFalse(foundry_ci_utils.has_solidity_sources(root))


class ReportingTests(unittest.TestCase):
    def test_die_prints_error_and_exits_one(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                foundry_ci_utils.die("boom")
        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "error: boom\n")

    def test_report_errors_is_silent_without_errors(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            foundry_ci_utils.report_errors([], "check failed")
        self.assertEqual(stderr.getvalue(), "")

    def test_report_errors_lists_each_error(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as ctx:
                foundry_ci_utils.report_errors(["first", "second"], "check failed")
        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(stderr.getvalue(), "check failed:\n  - first\n  - second\n")


if __name__ == "__main__":
    unittest.main()
