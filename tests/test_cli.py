"""Tests for the command line interface."""

import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from quizmark import __version__
from quizmark.cli import main
from quizmark.parse.blocks import parse
from quizmark.parse.encode import encode_document

from sample_docs import MISSING_METADATA, STYLE_GUIDE


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.good = self.root / "good.md"
        self.good.write_text(STYLE_GUIDE, encoding="utf-8")
        self.bad = self.root / "bad.md"
        self.bad.write_text(MISSING_METADATA, encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_version(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn(__version__, out.getvalue())

    def test_check_clean(self) -> None:
        code, out, _ = _run(["check", str(self.good)])
        self.assertEqual(code, 0)
        self.assertIn("2 quiz blocks", out)

    def test_check_reports_errors(self) -> None:
        code, _, err = _run(["check", str(self.good), str(self.bad)])
        self.assertEqual(code, 1)
        self.assertIn("missing-metadata", err)

    def test_check_missing_file(self) -> None:
        code, _, err = _run(["check", str(self.root / "missing.md")])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_list(self) -> None:
        code, out, _ = _run(["list", str(self.good)])
        self.assertEqual(code, 0)
        self.assertIn("html_indentation", out)
        self.assertIn("time_taken_html", out)

    def test_list_empty(self) -> None:
        empty = self.root / "empty.md"
        empty.write_text("# Nothing\n", encoding="utf-8")
        code, out, _ = _run(["list", str(empty)])
        self.assertEqual(code, 0)
        self.assertIn("No quiz blocks found", out)

    def test_export(self) -> None:
        out_dir = self.root / "out"
        code, out, _ = _run(["export", str(self.good), "--out", str(out_dir)])
        self.assertEqual(code, 0)
        self.assertIn("Blocks: 2", out)
        self.assertTrue((out_dir / "good" / "manifest.json").exists())

    def test_fmt(self) -> None:
        code, out, _ = _run(["fmt", str(self.good)])
        self.assertEqual(code, 0)
        self.assertEqual(out, encode_document(parse(STYLE_GUIDE).blocks))

    def test_fmt_reports_skipped_blocks(self) -> None:
        code, _, err = _run(["fmt", str(self.bad)])
        self.assertEqual(code, 1)
        self.assertIn("skipped: missing-metadata", err)


if __name__ == "__main__":
    unittest.main()
