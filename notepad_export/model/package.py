"""Package parts, archive entries and export results."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PackagePart:
    """A named part of an OOXML package."""
    name: str
    data: bytes = b""


@dataclass(frozen=True)
class ZipEntry:
    """An archive entry with its derived checksum and header offset."""
    name: str
    data: bytes
    crc: int
    size: int
    offset: int


@dataclass(frozen=True)
class NoteMetadata:
    """Document properties supplied alongside the note content."""
    title: str = ""
    timestamp: datetime | None = None  # None means "now"


@dataclass(frozen=True)
class ExportedDocument:
    """Exported bytes tagged with their MIME type."""
    data: bytes
    mime_type: str
