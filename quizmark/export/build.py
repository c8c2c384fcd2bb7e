"""Export builder: parse, validate and write hand-off artifacts."""

import json
import logging
import shutil
from pathlib import Path

from pydantic import BaseModel

from ..config import MANIFEST_FILENAME, RECORDS_FILENAME
from ..errors import QuizError
from ..parse.encode import encode_document
from ..validate import check
from .manifest import compute_sha256, create_manifest, write_manifest
from .records import write_records_ndjson

logger = logging.getLogger(__name__)

NORMALIZED_FILENAME = "quizzes.md"


class ExportResult(BaseModel):
    """Result of exporting a document."""

    model_config = {"arbitrary_types_allowed": True}

    output_dir: Path
    blocks_count: int
    total_points: int
    warnings: list[str]
    artifacts: list[str]


def export_document(
    source: Path,
    out_dir: Path = Path("."),
    force: bool = False,
) -> ExportResult:
    """Export the quiz blocks of a Markdown document.

    Defects in individual blocks do not stop the export; they are listed in
    the result warnings and in the manifest.

    Args:
        source: Markdown document
        out_dir: Output directory; artifacts go to ``out_dir/<source stem>``
        force: Replace an existing export

    Returns:
        ExportResult with export info
    """
    warnings: list[str] = []
    artifacts: list[str] = []

    text = source.read_text(encoding="utf-8")
    export_dir = out_dir / source.stem

    if export_dir.exists() and not force:
        manifest_path = export_dir / MANIFEST_FILENAME
        if manifest_path.exists():
            # Already exported, return existing result
            manifest_data = json.loads(manifest_path.read_text(encoding="utf-8"))
            return ExportResult(
                output_dir=export_dir,
                blocks_count=len(manifest_data.get("blocks", [])),
                total_points=manifest_data.get("total_points", 0),
                warnings=["Export already exists, use --force to rebuild"],
                artifacts=list(manifest_data.get("artifacts", {}).keys()),
            )

    if export_dir.exists() and force:
        shutil.rmtree(export_dir)

    export_dir.mkdir(parents=True, exist_ok=True)

    report = check(text)
    errors: list[QuizError] = list(report.errors)
    warnings.extend(str(e) for e in errors)
    if not report.blocks:
        warnings.append(f"No quiz blocks found in {source}")

    write_records_ndjson(report.blocks, export_dir)
    artifacts.append(RECORDS_FILENAME)

    normalized_path = export_dir / NORMALIZED_FILENAME
    normalized_path.write_text(encode_document(report.blocks), encoding="utf-8")
    artifacts.append(NORMALIZED_FILENAME)

    # Hash artifacts before writing the manifest that lists them.
    artifact_hashes: dict[str, str] = {}
    for artifact in sorted(set(artifacts)):
        artifact_hashes[artifact] = compute_sha256((export_dir / artifact).read_bytes())

    manifest = create_manifest(
        source_path=str(source),
        source_text=text,
        blocks=report.blocks,
        artifacts=artifact_hashes,
        errors=errors,
    )
    write_manifest(manifest, export_dir)
    artifacts.append(MANIFEST_FILENAME)

    logger.debug("exported %d quiz blocks from %s to %s", len(report.blocks), source, export_dir)

    return ExportResult(
        output_dir=export_dir,
        blocks_count=len(report.blocks),
        total_points=manifest.total_points,
        warnings=warnings,
        artifacts=artifacts,
    )
