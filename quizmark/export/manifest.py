"""Manifest model and generation."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel

from ..config import MANIFEST_FILENAME, PARSER_VERSION, SCHEMA_VERSION
from ..errors import QuizError
from ..models import QuizBlock
from .records import record_line


class SourceInfo(BaseModel):
    """The Markdown document the quizzes came from."""

    path: str
    sha256: str


class BlockInfo(BaseModel):
    """Per-block summary in the manifest."""

    id: str
    kind: str
    title: str
    points: int | None
    option_count: int
    sha256: str


class Manifest(BaseModel):
    """Export manifest with all metadata."""

    schema_version: int = SCHEMA_VERSION
    parser_version: str = PARSER_VERSION
    source: SourceInfo
    blocks: list[BlockInfo]
    artifacts: dict[str, str]  # path -> sha256
    errors: list[str]
    total_points: int


def compute_sha256(content: bytes | str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: Bytes or string to hash

    Returns:
        Hex-encoded SHA256 hash
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def create_manifest(
    source_path: str,
    source_text: str,
    blocks: list[QuizBlock],
    artifacts: dict[str, str],
    errors: list[QuizError],
) -> Manifest:
    """Create a manifest for an export.

    The manifest carries no timestamps so that exporting the same document
    twice produces identical bytes.

    Args:
        source_path: Path of the source document as given by the caller
        source_text: Full source text
        blocks: Exported quiz blocks
        artifacts: Map of artifact paths to SHA256 hashes
        errors: Parse and validation errors found in the source

    Returns:
        Populated Manifest object
    """
    block_infos = [
        BlockInfo(
            id=block.id,
            kind=block.kind.value,
            title=block.title,
            points=block.points_value,
            option_count=len(block.options),
            sha256=compute_sha256(record_line(block)),
        )
        for block in blocks
    ]

    return Manifest(
        source=SourceInfo(path=source_path, sha256=compute_sha256(source_text)),
        blocks=block_infos,
        artifacts=artifacts,
        errors=[str(e) for e in errors],
        total_points=sum(info.points or 0 for info in block_infos),
    )


def write_manifest(manifest: Manifest, output_dir: Path) -> Path:
    """Write manifest to JSON file.

    Args:
        manifest: Manifest object
        output_dir: Directory to write to

    Returns:
        Path to written manifest file
    """
    manifest_path = output_dir / MANIFEST_FILENAME
    payload = manifest.model_dump(mode="json")
    manifest_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return manifest_path
