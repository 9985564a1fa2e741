"""Utility functions for the notepad export tool."""

import re
from pathlib import Path

from notepad_export.model.note import Note

MARKDOWN_SUFFIXES = (".md", ".markdown")

_RESERVED_CHARS_RE = re.compile(r'[\\/:*?"<>|]+')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_filename(value: str | None) -> str:
    """Make a note title safe to use as a filename.

    Runs of filesystem-reserved characters become '-', whitespace is
    collapsed, and an empty result falls back to 'note'.

    Examples:
        'a/b:c' -> 'a-b-c'
        '  My   Note ' -> 'My Note'
    """
    base = (value or "").strip()
    if not base:
        return "note"
    cleaned = _RESERVED_CHARS_RE.sub("-", base)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned or "note"


def _with_extension(title: str | None, extension: str) -> str:
    base = sanitize_filename(title)
    if base.lower().endswith(extension):
        return base
    return f"{base}{extension}"


def build_docx_filename(title: str | None) -> str:
    """Filename for a Word export; '.docx' is appended once."""
    return _with_extension(title, ".docx")


def build_markdown_filename(title: str | None) -> str:
    """Filename for a Markdown export; '.md' is appended once."""
    return _with_extension(title, ".md")


def discover_markdown_files(input_dir: Path) -> list[Path]:
    """Recursively find all Markdown files in a directory."""
    files = sorted(
        p
        for p in input_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
    )
    return files


def note_title_from_filename(filename: str) -> str:
    """Derive a note title from a Markdown filename.

    Examples:
        'Meeting Notes.md' -> 'Meeting Notes'
        'todo.markdown' -> 'todo'
    """
    return Path(filename).stem.strip() or "Untitled"


def read_note(path: Path, title: str = "") -> Note:
    """Read a Markdown file into a Note."""
    return Note(
        title=title or note_title_from_filename(path.name),
        content=path.read_text(encoding="utf-8"),
        source_path=str(path),
    )
