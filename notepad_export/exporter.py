"""Top-level export operations for note content.

Pure transformations: they return bytes and never touch the filesystem.
Saving the result is up to the caller (see ``NoteWriter``).
"""

import logging
from dataclasses import replace
from datetime import datetime

from notepad_export.archive.zip_writer import write_archive
from notepad_export.converter.package import build_package_parts
from notepad_export.model.package import ExportedDocument, NoteMetadata

logger = logging.getLogger(__name__)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MARKDOWN_MIME = "text/markdown;charset=utf-8"


def export_markdown_to_docx(
    content: str | None,
    metadata: NoteMetadata | None = None,
) -> ExportedDocument:
    """Convert Markdown text into a .docx archive.

    The same timestamp is used for the document properties and the
    archive headers, so a fixed ``metadata.timestamp`` makes the output
    byte-for-byte reproducible.
    """
    metadata = metadata or NoteMetadata()
    if metadata.timestamp is None:
        metadata = replace(metadata, timestamp=datetime.now().astimezone())

    parts = build_package_parts(content, metadata)
    data = write_archive(parts, metadata.timestamp)
    logger.debug("Exported %r as docx (%d bytes)", metadata.title, len(data))
    return ExportedDocument(data=data, mime_type=DOCX_MIME)


def export_markdown(content: str | None) -> ExportedDocument:
    """Export the note content unchanged as UTF-8 Markdown."""
    text = "" if content is None else str(content)
    return ExportedDocument(data=text.encode("utf-8"), mime_type=MARKDOWN_MIME)
