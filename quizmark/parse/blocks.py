"""Scan Markdown documents for quiz blocks.

A quiz block is a ``-`` list whose first item is the prompt and whose later
items are the options, each followed by indented feedback lines. A metadata
attribute list closes the block:

    <!--  -->

    - Which indentation does the style guide use?
    - Tabs
      Tabs render differently across editors.
    - Two spaces
      Correct.
    {: .choose_best #html_indentation title="Indentation" points="1" answer="2" }

The separator comment arms a candidate block. An armed list that reaches the
next heading, the next separator, or the end of the document without a
metadata line is reported as ``missing-metadata``. Unarmed lists are ordinary
narrative text unless a metadata line directly follows them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import (
    ANSWER_OUT_OF_RANGE,
    DUPLICATE_ID,
    MISSING_ID,
    MISSING_METADATA,
    ParseError,
    QuizDocumentError,
)
from ..models import Option, QuizBlock, QuizKind, as_non_negative_int
from .attributes import AttributeList, parse_metadata_line

logger = logging.getLogger(__name__)

SEPARATOR_PATTERN = re.compile(r"^\s*<!--\s*-->\s*$")
HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}(?:\s|$)")
FENCE_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<fence>`{3,}|~{3,})")
ITEM_PATTERN = re.compile(r"^(?P<indent> {0,3})-(?:(?P<gap>[ \t]+)(?P<text>.*?))?\s*$")
NESTED_MARKER_PATTERN = re.compile(r"^(?:-\s+)+")

# Attributes that map onto QuizBlock fields; anything else is kept verbatim.
_FIELD_ATTRIBUTES = ("title", "points", "answer")


@dataclass
class _Item:
    """One ``-`` list item: the text on the marker line plus continuation lines."""

    content_col: int
    head: str
    body: list[str] = field(default_factory=list)
    pending_blanks: int = 0

    def add_continuation(self, raw: str) -> None:
        if raw[: self.content_col].strip() == "":
            text = raw[self.content_col :]
        else:
            text = raw.lstrip()
        text = text.rstrip()

        if not text:
            self.pending_blanks += 1
            return

        # Blank lines only survive between two continuation lines.
        if self.body:
            self.body.extend([""] * self.pending_blanks)
        self.pending_blanks = 0
        self.body.append(text)

    @property
    def full_text(self) -> str:
        lines = ([self.head] if self.head else []) + self.body
        return "\n".join(lines)

    @property
    def feedback(self) -> str:
        # A lone nested item is the feedback itself, not a list.
        if len(self.body) == 1:
            return NESTED_MARKER_PATTERN.sub("", self.body[0])
        return "\n".join(self.body)


@dataclass
class _Fragment:
    """A run of list items that may become a quiz block."""

    start_line: int
    armed: bool
    base_indent: int = 0
    items: list[_Item] = field(default_factory=list)

    def add_item(self, m: re.Match[str]) -> None:
        indent = len(m.group("indent"))
        text = (m.group("text") or "").strip()
        gap = m.group("gap") or " "
        content_col = indent + 1 + (len(gap) if text else 1)
        if not self.items:
            self.base_indent = indent
        self.items.append(_Item(content_col=content_col, head=text))

    def blank(self) -> None:
        if self.items:
            self.items[-1].pending_blanks += 1

    def continue_item(self, raw: str) -> None:
        self.items[-1].add_continuation(raw)


class _Scanner:
    """Line-by-line state machine producing QuizBlocks and ParseErrors."""

    def __init__(self) -> None:
        self.fragment: _Fragment | None = None
        self.fence: str | None = None
        self.seen_ids: set[str] = set()

    def feed(self, line_num: int, raw: str) -> Iterator[QuizBlock | ParseError]:
        fragment = self.fragment

        # Inside fenced code nothing is structural.
        if self.fence is not None:
            fm = FENCE_PATTERN.match(raw)
            if fm and fm.group("fence")[0] == self.fence[0] and len(fm.group("fence")) >= len(self.fence):
                if not raw[fm.end():].strip():
                    self.fence = None
            if fragment is not None and fragment.items:
                fragment.continue_item(raw)
            return

        fm = FENCE_PATTERN.match(raw)
        if fm:
            self.fence = fm.group("fence")
            if fragment is not None and fragment.items:
                if fragment.armed or len(fm.group("indent")) > fragment.base_indent:
                    fragment.continue_item(raw)
                    return
            if fragment is not None and not fragment.armed:
                self.fragment = None
            return

        # Lines indented to the item content column belong to the item, whatever
        # they look like.
        if fragment is not None and fragment.items and raw.strip():
            if _indent_width(raw) >= fragment.items[-1].content_col:
                fragment.continue_item(raw)
                return

        attrs = parse_metadata_line(raw)
        if attrs is not None:
            self.fragment = None
            yield from self._finish(fragment, attrs, line_num)
            return

        if SEPARATOR_PATTERN.match(raw):
            yield from self._abandon(fragment)
            self.fragment = _Fragment(start_line=line_num, armed=True)
            return

        if HEADING_PATTERN.match(raw):
            yield from self._abandon(fragment)
            self.fragment = None
            return

        if not raw.strip():
            if fragment is not None:
                fragment.blank()
            return

        im = ITEM_PATTERN.match(raw)
        if im:
            if fragment is None:
                fragment = self.fragment = _Fragment(start_line=line_num, armed=False)
            if not fragment.items or len(im.group("indent")) <= fragment.base_indent:
                fragment.add_item(im)
            else:
                fragment.continue_item(raw)
            return

        # Plain text.
        if fragment is None:
            return
        if not fragment.items:
            # Separator followed by prose rather than a list.
            self.fragment = None
        elif fragment.armed or raw[:1] in (" ", "\t"):
            fragment.continue_item(raw)
        else:
            self.fragment = None

    def close(self) -> Iterator[ParseError]:
        yield from self._abandon(self.fragment)
        self.fragment = None

    def _abandon(self, fragment: _Fragment | None) -> Iterator[ParseError]:
        if fragment is not None and fragment.armed and fragment.items:
            yield ParseError(MISSING_METADATA, line=fragment.start_line)

    def _finish(
        self,
        fragment: _Fragment | None,
        attrs: AttributeList,
        line_num: int,
    ) -> Iterator[QuizBlock | ParseError]:
        if attrs.id is None:
            yield ParseError(MISSING_ID, line=line_num)
            return

        if attrs.id in self.seen_ids:
            yield ParseError(DUPLICATE_ID, block_id=attrs.id, line=line_num)
            return
        self.seen_ids.add(attrs.id)

        items = fragment.items if fragment is not None else []
        kind = attrs.kind
        if kind is None:
            raise ValueError(f"metadata line at {line_num} has no quiz kind")
        answer = attrs.attributes.get("answer")
        option_items = items[1:]

        correct_idx: int | None = None
        if kind is QuizKind.CHOOSE_BEST:
            index = as_non_negative_int(answer)
            if index is not None:
                if not 1 <= index <= len(option_items):
                    yield ParseError(
                        ANSWER_OUT_OF_RANGE,
                        block_id=attrs.id,
                        line=line_num,
                        answer=answer,
                        option_count=len(option_items),
                    )
                    return
                correct_idx = index - 1

        options = tuple(
            Option(text=item.head, feedback=item.feedback, correct=(i == correct_idx))
            for i, item in enumerate(option_items)
        )

        extra_classes = list(attrs.classes)
        extra_classes.remove(kind.value)

        block = QuizBlock(
            id=attrs.id,
            kind=kind,
            title=attrs.attributes.get("title", ""),
            points=attrs.attributes.get("points"),
            answer=answer,
            prompt=items[0].full_text if items else "",
            options=options,
            classes=tuple(extra_classes),
            attributes=tuple((k, v) for k, v in attrs.attributes.items() if k not in _FIELD_ATTRIBUTES),
        )
        logger.debug("quiz block %s (%s, %d options) at line %d", block.id, kind.value, len(options), line_num)
        yield block


def _indent_width(raw: str) -> int:
    return len(raw) - len(raw.lstrip(" \t"))


def iter_parse(text: str) -> Iterator[QuizBlock | ParseError]:
    """Scan text and yield quiz blocks and parse errors in document order.

    Args:
        text: Markdown document

    Yields:
        QuizBlock for every well-formed block, ParseError for every defect
    """
    scanner = _Scanner()
    for line_num, raw in enumerate(text.splitlines(), start=1):
        yield from scanner.feed(line_num, raw)
    yield from scanner.close()


class ParseResult:
    """Quiz blocks found in a document.

    Iterating re-scans the text each time, so the result can be iterated
    lazily and more than once. ``blocks`` and ``errors`` run one full pass
    and cache it.
    """

    def __init__(self, text: str):
        self.text = text
        self._blocks: list[QuizBlock] | None = None
        self._errors: list[ParseError] | None = None

    def __iter__(self) -> Iterator[QuizBlock]:
        for item in iter_parse(self.text):
            if isinstance(item, QuizBlock):
                yield item

    def _collect(self) -> None:
        if self._blocks is not None:
            return
        blocks: list[QuizBlock] = []
        errors: list[ParseError] = []
        for item in iter_parse(self.text):
            if isinstance(item, QuizBlock):
                blocks.append(item)
            else:
                errors.append(item)
        self._blocks = blocks
        self._errors = errors

    @property
    def blocks(self) -> list[QuizBlock]:
        self._collect()
        assert self._blocks is not None
        return list(self._blocks)

    @property
    def errors(self) -> list[ParseError]:
        self._collect()
        assert self._errors is not None
        return list(self._errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> list[QuizBlock]:
        """Return the blocks, raising QuizDocumentError if any block was malformed."""
        if self.errors:
            raise QuizDocumentError(self.errors)
        return self.blocks


def parse(text: str) -> ParseResult:
    """Parse quiz blocks from Markdown text."""
    return ParseResult(text)


def parse_file(path: Path) -> ParseResult:
    """Read a UTF-8 Markdown file and parse its quiz blocks."""
    return parse(path.read_text(encoding="utf-8"))
