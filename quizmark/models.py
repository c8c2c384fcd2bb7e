"""Quiz block records."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, field_validator

_NON_NEGATIVE_INT = re.compile(r"^\+?\d+$")
_NUMERIC_LITERAL = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$")


class QuizKind(str, Enum):
    """Interaction kinds understood by the LMS host."""

    CHOOSE_BEST = "choose_best"
    FREE_TEXT_NUMBER = "free_text_number"

    @classmethod
    def from_classes(cls, classes: list[str]) -> QuizKind | None:
        """Return the first class name that is a known kind."""
        for name in classes:
            try:
                return cls(name)
            except ValueError:
                continue
        return None


class Option(BaseModel):
    """One answer choice together with the feedback shown when it is picked."""

    model_config = {"frozen": True}

    text: str
    feedback: str = ""
    correct: bool = False


class QuizBlock(BaseModel):
    """A single interactive question embedded in a document.

    ``points`` and ``answer`` keep the raw attribute strings from the
    metadata line so that validation can report what was actually written.
    """

    model_config = {"frozen": True}

    id: str
    kind: QuizKind
    title: str = ""
    points: str | None = None
    answer: str | None = None
    prompt: str = ""
    options: tuple[Option, ...] = ()
    classes: tuple[str, ...] = ()
    attributes: tuple[tuple[str, str], ...] = ()

    @field_validator("attributes", mode="before")
    @classmethod
    def _attribute_pairs(cls, value: object) -> object:
        # Accept a mapping; store ordered pairs so blocks stay hashable.
        if isinstance(value, dict):
            return tuple(value.items())
        return value

    @property
    def points_value(self) -> int | None:
        return as_non_negative_int(self.points)

    @property
    def answer_index(self) -> int | None:
        """1-based answer index as written, or None when it is not an integer."""
        if self.kind is not QuizKind.CHOOSE_BEST:
            return None
        return as_non_negative_int(self.answer)

    @property
    def correct_index(self) -> int | None:
        """0-based index of the correct option, or None when there is none."""
        index = self.answer_index
        if index is None or not 1 <= index <= len(self.options):
            return None
        return index - 1

    @property
    def correct_option(self) -> Option | None:
        idx = self.correct_index
        return None if idx is None else self.options[idx]


def as_non_negative_int(value: str | None) -> int | None:
    """Parse a non-negative integer attribute value.

    Returns:
        The integer, or None when the value is missing or not a plain integer
    """
    if value is None:
        return None
    value = value.strip()
    if not _NON_NEGATIVE_INT.match(value):
        return None
    return int(value)


def is_numeric_literal(value: str | None) -> bool:
    """Return True for integer or decimal literals such as ``42`` or ``-1.5``."""
    if value is None:
        return False
    return bool(_NUMERIC_LITERAL.match(value.strip()))
