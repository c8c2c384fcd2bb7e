"""Encode QuizBlocks back into the Markdown quiz micro-format."""

from __future__ import annotations

from collections.abc import Iterable

from ..config import FEEDBACK_INDENT, SEPARATOR_COMMENT
from ..models import QuizBlock
from .attributes import quote_value
from .blocks import FENCE_PATTERN


def encode_metadata(block: QuizBlock) -> str:
    """Render the ``{: ... }`` metadata line for a block.

    Attribute order is kind, id, title, points, answer, then any extra
    attributes and classes in their original order.
    """
    tokens = [f".{block.kind.value}", f"#{block.id}"]
    tokens.append(f"title={quote_value(block.title)}")
    if block.points is not None:
        tokens.append(f"points={quote_value(block.points)}")
    if block.answer is not None:
        tokens.append(f"answer={quote_value(block.answer)}")
    for key, value in block.attributes:
        tokens.append(f"{key}={quote_value(value)}")
    tokens.extend(f".{cls}" for cls in block.classes)
    return "{: " + " ".join(tokens) + " }"


def _item_lines(head: str, body: str) -> list[str]:
    pad = " " * FEEDBACK_INDENT
    lines = [f"- {head}" if head else "-"]
    if body:
        lines.extend(f"{pad}{line}" if line else "" for line in body.split("\n"))
    return lines


def _fits_marker_line(line: str) -> bool:
    """True when a line reads back unchanged after the ``- `` marker."""
    return bool(line) and line == line.strip() and not FENCE_PATTERN.match(line)


def encode_block(block: QuizBlock) -> str:
    """Render a block as separator, prompt, options with feedback, metadata.

    A prompt whose first line cannot sit on the marker line (a code fence,
    indented code) goes under a bare `-` instead.
    """
    lines = [SEPARATOR_COMMENT, ""]
    first, _, rest = block.prompt.partition("\n")
    if _fits_marker_line(first):
        lines.extend(_item_lines(first, rest))
    else:
        lines.extend(_item_lines("", block.prompt))
    for option in block.options:
        lines.extend(_item_lines(option.text, option.feedback))
    lines.append(encode_metadata(block))
    return "\n".join(lines) + "\n"


def encode_document(blocks: Iterable[QuizBlock]) -> str:
    """Render several blocks, separated by blank lines."""
    return "\n".join(encode_block(block) for block in blocks)
