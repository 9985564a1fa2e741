"""Inline Markdown tokenizer.

Turns the text of one line into styled runs: code spans, bold, italic,
images and links.  Delimiters are consumed; every other character ends
up in exactly one run.
"""

import re

from notepad_export.model.run import Run, RunStyle

MONO_FONT = "Consolas"
LINK_COLOR = "0000FF"

# Alternation order sets the priority between overlapping markers.
_INLINE_TOKEN_RE = re.compile(
    r"(`[^`]+`"
    r"|\*\*[^*]+\*\*"
    r"|\*[^*]+\*"
    r"|!\[[^\]]*\]\([^)]+\)"
    r"|\[[^\]]+\]\([^)]+\))"
)
_IMAGE_RE = re.compile(r"^!\[([^\]]*)\]\(([^)]+)\)$")
_LINK_RE = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)$")

_PLAIN = RunStyle()


def tokenize(text: str | None) -> list[Run]:
    """Split a line of Markdown into runs in a single left-to-right pass."""
    value = "" if text is None else str(text)
    runs: list[Run] = []
    last_index = 0

    for match in _INLINE_TOKEN_RE.finditer(value):
        if match.start() > last_index:
            runs.append(Run(value[last_index:match.start()], _PLAIN))
        runs.extend(_token_runs(match.group(0)))
        last_index = match.end()

    if last_index < len(value):
        runs.append(Run(value[last_index:], _PLAIN))

    return runs


def _token_runs(token: str) -> list[Run]:
    """Map one matched token to its styled run(s)."""
    if token.startswith("`"):
        return [Run(token[1:-1], RunStyle(font=MONO_FONT))]
    if token.startswith("**"):
        return [Run(token[2:-2], RunStyle(bold=True))]
    if token.startswith("*"):
        return [Run(token[1:-1], RunStyle(italic=True))]
    if token.startswith("!["):
        match = _IMAGE_RE.match(token)
        alt = match.group(1) or "image"
        url = match.group(2)
        return [Run(f"{alt} ({url})", RunStyle(italic=True))]

    match = _LINK_RE.match(token)
    label, url = match.group(1), match.group(2)
    runs = [Run(label, RunStyle(underline=True, color=LINK_COLOR))]
    if url:
        runs.append(Run(f" ({url})", _PLAIN))
    return runs
