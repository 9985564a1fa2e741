"""Export Markdown notes to Word (.docx) documents."""

from notepad_export.exporter import (
    DOCX_MIME,
    MARKDOWN_MIME,
    export_markdown,
    export_markdown_to_docx,
)

__all__ = [
    "DOCX_MIME",
    "MARKDOWN_MIME",
    "export_markdown",
    "export_markdown_to_docx",
]
