"""Writes exported notes to an output directory.

Wraps the pure export functions and handles everything on disk:
filenames, duplicate titles and directory creation.
"""

import logging
from datetime import datetime
from pathlib import Path

from notepad_export.exporter import export_markdown, export_markdown_to_docx
from notepad_export.model.note import Note
from notepad_export.model.package import ExportedDocument, NoteMetadata
from notepad_export.utils import build_docx_filename, build_markdown_filename

logger = logging.getLogger(__name__)


class NoteWriter:
    """Saves notes as .docx or .md files under one output directory."""

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)
        self._seen: dict[str, int] = {}

    def write_docx(self, note: Note, timestamp: datetime | None = None) -> Path:
        """Export a note to Word and write it.

        Returns the created file path.
        """
        document = export_markdown_to_docx(
            note.content,
            NoteMetadata(title=note.title, timestamp=timestamp),
        )
        return self._write(document, build_docx_filename(note.title))

    def write_markdown(self, note: Note) -> Path:
        """Write a note's Markdown content. Returns the created file path."""
        document = export_markdown(note.content)
        return self._write(document, build_markdown_filename(note.title))

    def _write(self, document: ExportedDocument, filename: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / _unique_filename(filename, self._seen)
        file_path.write_bytes(document.data)
        logger.info("Wrote %s (%s, %d bytes)", file_path, document.mime_type, len(document.data))
        return file_path


def _unique_filename(filename: str, seen: dict[str, int]) -> str:
    """Number repeated filenames: 'Notes.docx', 'Notes (2).docx', ..."""
    key = filename.lower()
    if key not in seen:
        seen[key] = 1
        return filename

    path = Path(filename)
    while True:
        seen[key] += 1
        candidate = f"{path.stem} ({seen[key]}){path.suffix}"
        if candidate.lower() not in seen:
            break
    # Numbered names are taken too, so a later title that matches one is renumbered.
    seen[candidate.lower()] = 1
    return candidate
