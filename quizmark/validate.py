"""Semantic validation of parsed quiz blocks."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from .config import FREE_TEXT_SENTINEL, MIN_CHOOSE_BEST_OPTIONS
from .errors import (
    ANSWER_OUT_OF_RANGE,
    DUPLICATE_ID,
    INVALID_ANSWER,
    INVALID_POINTS,
    TOO_FEW_OPTIONS,
    UNEXPECTED_OPTIONS,
    ParseError,
    QuizDocumentError,
    ValidationError,
)
from .models import QuizBlock, QuizKind, as_non_negative_int, is_numeric_literal
from .parse.blocks import parse


class CheckReport(BaseModel):
    """Outcome of parsing and validating a whole document."""

    model_config = {"arbitrary_types_allowed": True}

    blocks: list[QuizBlock]
    parse_errors: list[ParseError]
    validation_errors: list[ValidationError]

    @property
    def errors(self) -> list[ParseError | ValidationError]:
        return [*self.parse_errors, *self.validation_errors]

    @property
    def ok(self) -> bool:
        return not self.parse_errors and not self.validation_errors

    @property
    def total_points(self) -> int:
        return sum(block.points_value or 0 for block in self.blocks)

    def raise_for_errors(self) -> list[QuizBlock]:
        if not self.ok:
            raise QuizDocumentError(self.errors)
        return self.blocks


def validate_block(block: QuizBlock) -> list[ValidationError]:
    """Check one block on its own (everything except id uniqueness)."""
    errors: list[ValidationError] = []

    if as_non_negative_int(block.points) is None:
        errors.append(ValidationError(INVALID_POINTS, block_id=block.id, points=block.points))

    if block.kind is QuizKind.CHOOSE_BEST:
        option_count = len(block.options)
        if option_count < MIN_CHOOSE_BEST_OPTIONS:
            errors.append(
                ValidationError(
                    TOO_FEW_OPTIONS,
                    block_id=block.id,
                    option_count=option_count,
                    minimum=MIN_CHOOSE_BEST_OPTIONS,
                )
            )
        index = block.answer_index
        if index is None:
            errors.append(ValidationError(INVALID_ANSWER, block_id=block.id, answer=block.answer))
        elif not 1 <= index <= option_count:
            errors.append(
                ValidationError(
                    ANSWER_OUT_OF_RANGE,
                    block_id=block.id,
                    answer=block.answer,
                    option_count=option_count,
                )
            )

    elif block.kind is QuizKind.FREE_TEXT_NUMBER:
        answer = (block.answer or "").strip()
        if answer != FREE_TEXT_SENTINEL and not is_numeric_literal(answer):
            errors.append(ValidationError(INVALID_ANSWER, block_id=block.id, answer=block.answer))
        if block.options:
            errors.append(
                ValidationError(UNEXPECTED_OPTIONS, block_id=block.id, option_count=len(block.options))
            )

    return errors


def validate(blocks: Iterable[QuizBlock]) -> list[ValidationError]:
    """Validate a sequence of blocks.

    Args:
        blocks: Quiz blocks, typically from ``parse``

    Returns:
        Every validation error found; an empty list means the blocks are valid
    """
    errors: list[ValidationError] = []
    seen: set[str] = set()
    reported: set[str] = set()

    for block in blocks:
        if block.id in seen:
            # One error per duplicated id, however many times it repeats.
            if block.id not in reported:
                errors.append(ValidationError(DUPLICATE_ID, block_id=block.id))
                reported.add(block.id)
        seen.add(block.id)
        errors.extend(validate_block(block))

    return errors


def check(text: str) -> CheckReport:
    """Parse and validate a document in one pass."""
    result = parse(text)
    blocks = result.blocks
    return CheckReport(
        blocks=blocks,
        parse_errors=result.errors,
        validation_errors=validate(blocks),
    )
