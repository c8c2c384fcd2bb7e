"""Flat records for handing quiz blocks to an external host."""

import json
from pathlib import Path
from typing import Any

from ..config import RECORDS_FILENAME
from ..models import QuizBlock


def block_to_record(block: QuizBlock) -> dict[str, Any]:
    """Convert a block to a JSON-friendly dict.

    Args:
        block: Quiz block

    Returns:
        Dict with id, kind, title, points, answer, options, prompt and
        correct_index. Options are ``{"text", "feedback", "correct"}`` dicts
        in document order.
    """
    return {
        "id": block.id,
        "kind": block.kind.value,
        "title": block.title,
        "points": block.points_value if block.points_value is not None else block.points,
        "answer": block.answer,
        "prompt": block.prompt,
        "correct_index": block.correct_index,
        "options": [option.model_dump() for option in block.options],
    }


def record_line(block: QuizBlock) -> str:
    """Serialize a block as a single canonical JSON line (no newline)."""
    return json.dumps(block_to_record(block), sort_keys=True, ensure_ascii=False)


def write_records_ndjson(blocks: list[QuizBlock], output_dir: Path) -> Path:
    """Write blocks to an ndjson file, one record per line.

    Args:
        blocks: Quiz blocks in document order
        output_dir: Directory to write to

    Returns:
        Path to written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / RECORDS_FILENAME

    with path.open("w", encoding="utf-8") as f:
        for block in blocks:
            f.write(record_line(block) + "\n")

    return path
