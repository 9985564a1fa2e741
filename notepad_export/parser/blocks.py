"""Splits Markdown text into an ordered sequence of blocks.

The parser is line oriented and never fails: anything it does not
recognise becomes paragraph text.  It keeps three states while walking
the lines (normal text, inside a code fence, inside a list of a given
kind) and flushes pending paragraph/list buffers whenever a line of a
different kind arrives.
"""

import logging
import re
from dataclasses import dataclass, field

from notepad_export.model.block import (
    Block,
    BlockquoteBlock,
    CodeBlock,
    HeadingBlock,
    OrderedListBlock,
    ParagraphBlock,
    UnorderedListBlock,
)

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(\S+)?\s*$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_QUOTE_RE = re.compile(r"^>\s?(.*)$")
_UNORDERED_RE = re.compile(r"^[-*+]\s+(.+)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.+)$")

_UNORDERED = "unordered"
_ORDERED = "ordered"

_LIST_BLOCKS = {
    _UNORDERED: UnorderedListBlock,
    _ORDERED: OrderedListBlock,
}


@dataclass
class _ParserState:
    """Accumulators for one parse_blocks() call."""
    blocks: list[Block] = field(default_factory=list)
    paragraph: list[str] = field(default_factory=list)
    in_code: bool = False
    code_lines: list[str] = field(default_factory=list)
    list_kind: str = ""
    list_items: list[str] = field(default_factory=list)

    def flush_paragraph(self) -> None:
        if not self.paragraph:
            return
        self.blocks.append(ParagraphBlock(lines=tuple(self.paragraph)))
        self.paragraph = []

    def close_list(self) -> None:
        if not self.list_kind:
            return
        block_type = _LIST_BLOCKS[self.list_kind]
        self.blocks.append(block_type(items=tuple(self.list_items)))
        self.list_kind = ""
        self.list_items = []

    def flush(self) -> None:
        self.flush_paragraph()
        self.close_list()

    def add_list_item(self, kind: str, text: str) -> None:
        self.flush_paragraph()
        if self.list_kind and self.list_kind != kind:
            self.close_list()
        self.list_kind = kind
        self.list_items.append(text)

    def emit_code(self) -> None:
        self.blocks.append(CodeBlock(lines=tuple(self.code_lines)))
        self.code_lines = []


def normalize_newlines(text: str | None) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    value = "" if text is None else str(text)
    return value.replace("\r\n", "\n").replace("\r", "\n")


def parse_blocks(text: str | None) -> list[Block]:
    """Parse Markdown text into blocks, preserving source order."""
    state = _ParserState()

    for line in normalize_newlines(text).split("\n"):
        _consume_line(state, line)

    state.flush()
    if state.in_code:
        # Unterminated fence: keep what was captured.
        logger.debug("Unterminated code fence, %d line(s) captured", len(state.code_lines))
        state.emit_code()

    return state.blocks


def _consume_line(state: _ParserState, line: str) -> None:
    trimmed_end = line.rstrip()
    trimmed = trimmed_end.strip()

    if _FENCE_RE.match(trimmed):
        state.flush()
        if state.in_code:
            state.in_code = False
            state.emit_code()
        else:
            state.in_code = True
            state.code_lines = []
        return

    if state.in_code:
        state.code_lines.append(trimmed_end)
        return

    if not trimmed:
        state.flush()
        return

    match = _HEADING_RE.match(trimmed_end)
    if match:
        state.flush()
        level = min(6, len(match.group(1)))
        state.blocks.append(HeadingBlock(level=level, text=match.group(2)))
        return

    match = _QUOTE_RE.match(trimmed_end)
    if match:
        state.flush()
        state.blocks.append(BlockquoteBlock(text=match.group(1) or ""))
        return

    match = _UNORDERED_RE.match(trimmed)
    if match:
        state.add_list_item(_UNORDERED, match.group(1))
        return

    match = _ORDERED_RE.match(trimmed)
    if match:
        state.add_list_item(_ORDERED, match.group(1))
        return

    state.close_list()
    state.paragraph.append(trimmed_end)
