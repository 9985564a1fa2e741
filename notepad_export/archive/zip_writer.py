"""Write-only ZIP container builder for stored (uncompressed) entries.

Produces, in order: a local file header plus raw data for every entry,
one central directory record per entry, and the end of central
directory record.  Output depends only on the entries and the
timestamp, so identical inputs give identical bytes.

All header fields are fixed width.  Inputs that do not fit raise
``ArchiveError`` instead of being truncated.
"""

import io
import logging
import struct
from datetime import datetime
from typing import Iterable

from notepad_export.archive.crc32 import crc32
from notepad_export.model.package import PackagePart, ZipEntry

logger = logging.getLogger(__name__)

LOCAL_HEADER_SIGNATURE = 0x04034B50
CENTRAL_HEADER_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIR_SIGNATURE = 0x06054B50

VERSION = 20
# Bit 11: file names are UTF-8
FLAG_UTF8 = 0x0800
METHOD_STORED = 0

MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF

# signature, version needed, flags, method, time, date, crc,
# compressed size, uncompressed size, name length, extra length
_LOCAL_HEADER = struct.Struct("<IHHHHHIIIHH")
# signature, version made by, version needed, flags, method, time, date,
# crc, compressed size, uncompressed size, name length, extra length,
# comment length, disk start, internal attrs, external attrs, offset
_CENTRAL_HEADER = struct.Struct("<IHHHHHHIIIHHHHHII")
# signature, disk number, central dir disk, entries on disk,
# total entries, central dir size, central dir offset, comment length
_END_RECORD = struct.Struct("<IHHHHIIH")

_MIN_DOS_DATETIME = datetime(1980, 1, 1)
_MAX_DOS_DATETIME = datetime(2107, 12, 31, 23, 59, 58)


class ArchiveError(ValueError):
    """Raised when entries cannot be represented in a ZIP container."""


def dos_datetime(timestamp: datetime) -> tuple[int, int]:
    """Pack a timestamp into ZIP ``(time, date)`` words.

    Wall-clock fields are used as-is.  Dates outside 1980..2107 are
    clamped to the nearest representable value.
    """
    wall = timestamp.replace(tzinfo=None)
    if wall < _MIN_DOS_DATETIME:
        wall = _MIN_DOS_DATETIME
    elif wall > _MAX_DOS_DATETIME:
        wall = _MAX_DOS_DATETIME

    dos_time = (wall.hour << 11) | (wall.minute << 5) | (wall.second // 2)
    dos_date = ((wall.year - 1980) << 9) | (wall.month << 5) | wall.day
    return dos_time, dos_date


def _as_pair(entry: PackagePart | tuple[str, bytes]) -> tuple[str, bytes]:
    if isinstance(entry, PackagePart):
        return entry.name, entry.data
    name, data = entry
    return name, bytes(data or b"")


def plan_entries(entries: Iterable[PackagePart | tuple[str, bytes]]) -> list[ZipEntry]:
    """Compute CRC, size and local header offset for each entry.

    Raises ArchiveError for duplicate names or fields that overflow
    their header width.
    """
    planned: list[ZipEntry] = []
    seen: set[str] = set()
    offset = 0

    for entry in entries:
        name, data = _as_pair(entry)
        if name in seen:
            raise ArchiveError(f"Duplicate archive entry name: {name!r}")
        seen.add(name)

        name_bytes = name.encode("utf-8")
        if len(name_bytes) > MAX_UINT16:
            raise ArchiveError(f"Entry name too long ({len(name_bytes)} bytes): {name[:40]!r}...")
        if len(data) > MAX_UINT32:
            raise ArchiveError(f"Entry {name!r} is {len(data)} bytes, exceeds 4 GiB - 1")
        if offset > MAX_UINT32:
            raise ArchiveError(f"Entry {name!r} starts beyond the 32-bit offset range")

        planned.append(
            ZipEntry(
                name=name,
                data=data,
                crc=crc32(data),
                size=len(data),
                offset=offset,
            )
        )
        offset += _LOCAL_HEADER.size + len(name_bytes) + len(data)

    if len(planned) > MAX_UINT16:
        raise ArchiveError(f"Too many entries for a ZIP archive: {len(planned)}")
    if offset > MAX_UINT32:
        raise ArchiveError("Central directory starts beyond the 32-bit offset range")

    return planned


def end_of_central_directory(count: int, central_size: int, central_offset: int) -> bytes:
    """Pack the end of central directory record for a single-disk archive."""
    if count > MAX_UINT16:
        raise ArchiveError(f"Too many entries for a ZIP archive: {count}")
    if central_size > MAX_UINT32:
        raise ArchiveError(f"Central directory is {central_size} bytes, exceeds 4 GiB - 1")
    if central_offset > MAX_UINT32:
        raise ArchiveError("Central directory starts beyond the 32-bit offset range")
    return _END_RECORD.pack(
        END_OF_CENTRAL_DIR_SIGNATURE,
        0,
        0,
        count,
        count,
        central_size,
        central_offset,
        0,
    )


def write_archive(
    entries: Iterable[PackagePart | tuple[str, bytes]],
    timestamp: datetime,
) -> bytes:
    """Package named byte payloads into a stored ZIP archive."""
    planned = plan_entries(entries)
    dos_time, dos_date = dos_datetime(timestamp)
    out = io.BytesIO()

    for entry in planned:
        name_bytes = entry.name.encode("utf-8")
        out.write(
            _LOCAL_HEADER.pack(
                LOCAL_HEADER_SIGNATURE,
                VERSION,
                FLAG_UTF8,
                METHOD_STORED,
                dos_time,
                dos_date,
                entry.crc,
                entry.size,
                entry.size,
                len(name_bytes),
                0,
            )
        )
        out.write(name_bytes)
        out.write(entry.data)

    central_offset = out.tell()
    for entry in planned:
        name_bytes = entry.name.encode("utf-8")
        out.write(
            _CENTRAL_HEADER.pack(
                CENTRAL_HEADER_SIGNATURE,
                VERSION,
                VERSION,
                FLAG_UTF8,
                METHOD_STORED,
                dos_time,
                dos_date,
                entry.crc,
                entry.size,
                entry.size,
                len(name_bytes),
                0,
                0,
                0,
                0,
                0,
                entry.offset,
            )
        )
        out.write(name_bytes)
    central_size = out.tell() - central_offset

    out.write(end_of_central_directory(len(planned), central_size, central_offset))

    logger.debug(
        "Wrote archive: %d entries, central directory %d bytes at offset %d",
        len(planned),
        central_size,
        central_offset,
    )
    return out.getvalue()
