"""Tests for record export and manifest determinism."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from quizmark.export.build import export_document
from quizmark.export.manifest import compute_sha256, create_manifest, write_manifest
from quizmark.export.records import block_to_record, write_records_ndjson
from quizmark.parse.blocks import parse

from sample_docs import MISSING_METADATA, STYLE_GUIDE


class TestComputeSha256(unittest.TestCase):
    def test_hash_string(self) -> None:
        self.assertEqual(
            compute_sha256("hello world"),
            "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9",
        )

    def test_bytes_and_str_agree(self) -> None:
        self.assertEqual(compute_sha256("quiz"), compute_sha256(b"quiz"))


class TestRecords(unittest.TestCase):
    def test_block_to_record(self) -> None:
        block = parse(STYLE_GUIDE).blocks[0]
        record = block_to_record(block)
        self.assertEqual(record["id"], "html_indentation")
        self.assertEqual(record["kind"], "choose_best")
        self.assertEqual(record["points"], 1)
        self.assertEqual(record["answer"], "2")
        self.assertEqual(record["correct_index"], 1)
        self.assertEqual(len(record["options"]), 3)
        self.assertEqual(record["options"][1]["correct"], True)
        self.assertEqual(set(record["options"][0]), {"text", "feedback", "correct"})

    def test_unparseable_points_kept_raw(self) -> None:
        doc = "- P\n- A\n- B\n{: .choose_best #q title=\"T\" points=\"many\" answer=\"1\" }\n"
        record = block_to_record(parse(doc).blocks[0])
        self.assertEqual(record["points"], "many")

    def test_write_records_ndjson(self) -> None:
        blocks = parse(STYLE_GUIDE).blocks
        with tempfile.TemporaryDirectory() as td:
            path = write_records_ndjson(blocks, Path(td))
            lines = path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual([json.loads(line)["id"] for line in lines], ["html_indentation", "time_taken_html"])


class TestManifest(unittest.TestCase):
    def test_create_manifest(self) -> None:
        blocks = parse(STYLE_GUIDE).blocks
        manifest = create_manifest(
            source_path="guide.md",
            source_text=STYLE_GUIDE,
            blocks=blocks,
            artifacts={"quizzes.ndjson": compute_sha256("x")},
            errors=[],
        )
        self.assertEqual(manifest.source.sha256, compute_sha256(STYLE_GUIDE))
        self.assertEqual([b.id for b in manifest.blocks], ["html_indentation", "time_taken_html"])
        self.assertEqual(manifest.blocks[0].option_count, 3)
        self.assertEqual(manifest.total_points, 1)

    def test_write_manifest_is_byte_stable(self) -> None:
        result = parse(MISSING_METADATA)
        manifest = create_manifest(
            source_path="broken.md",
            source_text=MISSING_METADATA,
            blocks=result.blocks,
            artifacts={},
            errors=result.errors,
        )
        self.assertEqual(manifest.errors, ["missing-metadata line=3"])

        with tempfile.TemporaryDirectory() as td:
            out = Path(td)
            b1 = write_manifest(manifest, out).read_bytes()
            b2 = write_manifest(manifest, out).read_bytes()
        self.assertEqual(b1, b2)


class TestExportDocument(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.source = self.root / "html_style.md"
        self.source.write_text(STYLE_GUIDE, encoding="utf-8")
        self.out = self.root / "export"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_artifacts(self) -> None:
        result = export_document(self.source, self.out)
        export_dir = self.out / "html_style"
        self.assertEqual(result.output_dir, export_dir)
        self.assertEqual(result.blocks_count, 2)
        self.assertEqual(result.total_points, 1)
        self.assertEqual(result.warnings, [])
        self.assertEqual(result.artifacts, ["quizzes.ndjson", "quizzes.md", "manifest.json"])
        for name in result.artifacts:
            self.assertTrue((export_dir / name).exists(), name)

        manifest = json.loads((export_dir / "manifest.json").read_text(encoding="utf-8"))
        self.assertEqual(
            manifest["artifacts"]["quizzes.ndjson"],
            compute_sha256((export_dir / "quizzes.ndjson").read_bytes()),
        )
        self.assertNotIn("manifest.json", manifest["artifacts"])

    def test_normalized_markdown_reparses(self) -> None:
        export_document(self.source, self.out)
        normalized = (self.out / "html_style" / "quizzes.md").read_text(encoding="utf-8")
        self.assertEqual(parse(normalized).blocks, parse(STYLE_GUIDE).blocks)

    def test_existing_export_is_kept_without_force(self) -> None:
        export_document(self.source, self.out)
        again = export_document(self.source, self.out)
        self.assertEqual(again.blocks_count, 2)
        self.assertTrue(any("already exists" in w for w in again.warnings))

    def test_force_rebuild_is_deterministic(self) -> None:
        export_document(self.source, self.out)
        manifest_path = self.out / "html_style" / "manifest.json"
        first = manifest_path.read_bytes()
        export_document(self.source, self.out, force=True)
        self.assertEqual(manifest_path.read_bytes(), first)

    def test_errors_become_warnings(self) -> None:
        self.source.write_text(MISSING_METADATA, encoding="utf-8")
        result = export_document(self.source, self.out)
        self.assertEqual(result.blocks_count, 0)
        self.assertIn("missing-metadata line=3", result.warnings)
        self.assertTrue(any(w.startswith("No quiz blocks found") for w in result.warnings))

    def test_missing_source_raises(self) -> None:
        with self.assertRaises(OSError):
            export_document(self.root / "nope.md", self.out)


if __name__ == "__main__":
    unittest.main()
