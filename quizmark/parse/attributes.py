"""Parse kramdown-style attribute list lines (``{: .class #id key="value" }``)."""

from __future__ import annotations

import re
from typing import NamedTuple

from ..models import QuizKind

# Block attribute list on its own line. Up to three spaces of indentation, like
# any other Markdown block construct.
ATTRIBUTE_LIST_PATTERN = re.compile(r"^ {0,3}\{:(?P<body>.*)\}\s*$")

_TOKEN_PATTERN = re.compile(
    r"""
    \.(?P<cls>[A-Za-z_][\w-]*)
    | \#(?P<id>[A-Za-z_][\w:.-]*)
    | (?P<key>[A-Za-z_][\w-]*)=
      (?:
        "(?P<dq>(?:[^"\\]|\\.)*)"
        | '(?P<sq>(?:[^'\\]|\\.)*)'
        | (?P<bare>[^\s"'}]+)
      )
    """,
    re.VERBOSE,
)

_ESCAPE_PATTERN = re.compile(r"\\(.)")


class AttributeList(NamedTuple):
    """Tokens of one attribute list line, in source order."""

    classes: list[str]
    id: str | None
    attributes: dict[str, str]

    @property
    def kind(self) -> QuizKind | None:
        return QuizKind.from_classes(self.classes)


def parse_attribute_list(line: str) -> AttributeList | None:
    """Parse an attribute list line.

    Args:
        line: A single line of Markdown

    Returns:
        AttributeList, or None if the line is not an attribute list
    """
    m = ATTRIBUTE_LIST_PATTERN.match(line)
    if not m:
        return None

    classes: list[str] = []
    block_id: str | None = None
    attributes: dict[str, str] = {}

    for token in _TOKEN_PATTERN.finditer(m.group("body")):
        if token.group("cls"):
            classes.append(token.group("cls"))
        elif token.group("id"):
            # kramdown keeps the last id when several are given
            block_id = token.group("id")
        else:
            if token.group("dq") is not None:
                value = _unescape(token.group("dq"))
            elif token.group("sq") is not None:
                value = _unescape(token.group("sq"))
            else:
                value = token.group("bare")
            attributes[token.group("key")] = value

    return AttributeList(classes=classes, id=block_id, attributes=attributes)


def parse_metadata_line(line: str) -> AttributeList | None:
    """Parse a quiz metadata line.

    Only attribute lists carrying a known quiz kind class count as metadata;
    any other attribute list is ordinary document text.
    """
    attrs = parse_attribute_list(line)
    if attrs is None or attrs.kind is None:
        return None
    return attrs


def quote_value(value: str) -> str:
    """Quote an attribute value so that parse_attribute_list reads it back."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _unescape(value: str) -> str:
    return _ESCAPE_PATTERN.sub(r"\1", value)
