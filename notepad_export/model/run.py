"""Styled text runs produced by the inline tokenizer."""

from dataclasses import dataclass, field, fields


@dataclass(frozen=True)
class RunStyle:
    """Character formatting for a run.

    Every field is always present; ``False``, ``""`` and ``0`` mean unset.
    ``size`` is expressed in half-points, as Word stores it.
    """
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str = ""
    font: str = ""
    size: int = 0

    def merge(self, other: "RunStyle") -> "RunStyle":
        """Return a copy of this style with the set fields of ``other`` applied."""
        values = {}
        for f in fields(self):
            override = getattr(other, f.name)
            values[f.name] = override if override else getattr(self, f.name)
        return RunStyle(**values)


@dataclass(frozen=True)
class Run:
    """A run of text with uniform formatting."""
    text: str
    style: RunStyle = field(default_factory=RunStyle)
