"""Error taxonomy for quiz parsing and validation.

Errors are collected and returned in batches rather than raised one at a
time; ``QuizDocumentError`` is the only exception meant to be raised, and it
carries the whole batch.
"""

from __future__ import annotations

from typing import Any

# ParseError reasons
MISSING_METADATA = "missing-metadata"
MISSING_ID = "missing-id"
DUPLICATE_ID = "duplicate-id"
ANSWER_OUT_OF_RANGE = "answer-out-of-range"

# ValidationError reasons (duplicate-id and answer-out-of-range are shared)
INVALID_POINTS = "invalid-points"
INVALID_ANSWER = "invalid-answer"
TOO_FEW_OPTIONS = "too-few-options"
UNEXPECTED_OPTIONS = "unexpected-options"

PARSE_REASONS = frozenset({MISSING_METADATA, MISSING_ID, DUPLICATE_ID, ANSWER_OUT_OF_RANGE})
VALIDATION_REASONS = frozenset(
    {DUPLICATE_ID, ANSWER_OUT_OF_RANGE, INVALID_POINTS, INVALID_ANSWER, TOO_FEW_OPTIONS, UNEXPECTED_OPTIONS}
)


class QuizError(Exception):
    """A single defect found in a quiz document."""

    allowed_reasons: frozenset[str] = frozenset()

    def __init__(
        self,
        reason: str,
        block_id: str | None = None,
        line: int | None = None,
        **details: Any,
    ) -> None:
        if self.allowed_reasons and reason not in self.allowed_reasons:
            raise ValueError(f"unknown {type(self).__name__} reason: {reason!r}")
        self.reason = reason
        self.block_id = block_id
        self.line = line
        self.details = details
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.reason]
        if self.block_id is not None:
            parts.append(f"id={self.block_id}")
        if self.line is not None:
            parts.append(f"line={self.line}")
        for key in sorted(self.details):
            parts.append(f"{key}={self.details[key]}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, str(self)))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"reason": self.reason}
        if self.block_id is not None:
            data["id"] = self.block_id
        if self.line is not None:
            data["line"] = self.line
        data.update(self.details)
        return data


class ParseError(QuizError):
    """Structural malformation of a quiz block."""

    allowed_reasons = PARSE_REASONS


class ValidationError(QuizError):
    """Structurally well-formed block with semantically invalid content."""

    allowed_reasons = VALIDATION_REASONS


class QuizDocumentError(Exception):
    """Raised by strict helpers when a document has one or more defects."""

    def __init__(self, errors: list[QuizError]):
        self.errors = list(errors)
        super().__init__(f"{len(self.errors)} quiz error(s): " + "; ".join(str(e) for e in self.errors))
