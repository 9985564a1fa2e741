"""Block-level elements parsed from Markdown text."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Block:
    """Base class for parsed Markdown blocks."""
    pass


@dataclass(frozen=True)
class ParagraphBlock(Block):
    """Consecutive text lines rendered as a single paragraph."""
    lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class HeadingBlock(Block):
    """An ATX heading (``#`` through ``######``)."""
    level: int = 1
    text: str = ""


@dataclass(frozen=True)
class BlockquoteBlock(Block):
    """One ``>`` quoted line."""
    text: str = ""


@dataclass(frozen=True)
class CodeBlock(Block):
    """A fenced code block; lines are kept verbatim (right-trimmed)."""
    lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnorderedListBlock(Block):
    """A run of ``-``, ``*`` or ``+`` list items."""
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class OrderedListBlock(Block):
    """A run of ``1.`` style list items. Numbering restarts at 1."""
    items: tuple[str, ...] = ()
