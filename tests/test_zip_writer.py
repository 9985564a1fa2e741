"""Tests for notepad_export.archive module."""

import binascii
import io
import os
import struct
import zipfile
import zlib
from datetime import datetime

import pytest

from notepad_export.archive.crc32 import CRC32_TABLE, crc32
from notepad_export.archive.zip_writer import (
    ArchiveError,
    dos_datetime,
    end_of_central_directory,
    plan_entries,
    write_archive,
)
from notepad_export.model.package import PackagePart

STAMP = datetime(2024, 3, 15, 13, 45, 30)


def _reference_crc32(data: bytes) -> int:
    """Bitwise CRC-32 with no lookup table."""
    crc = 0xFFFFFFFF
    for byte in data:
        crc ^= byte
        for _ in range(8):
            crc = (crc >> 1) ^ 0xEDB88320 if crc & 1 else crc >> 1
    return crc ^ 0xFFFFFFFF


def _end_record(archive: bytes) -> tuple:
    return struct.unpack("<IHHHHIIH", archive[-22:])


class TestCrc32:
    """Tests for crc32."""

    def test_check_value(self):
        assert crc32(b"123456789") == 0xCBF43926

    def test_empty(self):
        assert crc32(b"") == 0

    def test_table(self):
        assert len(CRC32_TABLE) == 256
        assert CRC32_TABLE[0] == 0
        assert CRC32_TABLE[1] == 0x77073096
        assert CRC32_TABLE[255] == 0x2D02EF8D

    @pytest.mark.parametrize(
        "data",
        [
            b"a",
            b"hello world",
            bytes(range(256)),
            b"\xff" * 1000,
            "Grüße 世界".encode("utf-8"),
        ],
    )
    def test_matches_references(self, data):
        assert crc32(data) == _reference_crc32(data)
        assert crc32(data) == zlib.crc32(data)
        assert crc32(data) == binascii.crc32(data)

    def test_random_data(self):
        data = os.urandom(4096)
        assert crc32(data) == zlib.crc32(data)


class TestDosDateTime:
    """Tests for dos_datetime."""

    def test_packing(self):
        dos_time, dos_date = dos_datetime(STAMP)
        assert dos_time == (13 << 11) | (45 << 5) | 15
        assert dos_date == (44 << 9) | (3 << 5) | 15

    def test_odd_seconds_rounded_down(self):
        dos_time, _ = dos_datetime(datetime(2024, 1, 1, 0, 0, 59))
        assert dos_time & 0x1F == 29

    def test_before_1980_clamped(self):
        assert dos_datetime(datetime(1970, 1, 1)) == (0, (1 << 5) | 1)

    def test_after_2107_clamped(self):
        dos_time, dos_date = dos_datetime(datetime(2200, 6, 1))
        assert dos_date == (127 << 9) | (12 << 5) | 31
        assert dos_time == (23 << 11) | (59 << 5) | 29


class TestPlanEntries:
    """Tests for plan_entries."""

    def test_offsets_are_cumulative(self):
        planned = plan_entries([("a.xml", b"x" * 10), ("bb.xml", b""), ("c.xml", b"yz")])
        assert [e.offset for e in planned] == [0, 30 + 5 + 10, 30 + 5 + 10 + 30 + 6]
        assert [e.size for e in planned] == [10, 0, 2]
        assert planned[2].crc == zlib.crc32(b"yz")

    def test_accepts_package_parts(self):
        planned = plan_entries([PackagePart("a.xml", b"abc")])
        assert planned[0].name == "a.xml"
        assert planned[0].data == b"abc"

    def test_duplicate_name_rejected(self):
        with pytest.raises(ArchiveError, match="Duplicate"):
            plan_entries([("a.xml", b"1"), ("a.xml", b"2")])

    def test_oversized_entry_rejected(self):
        class HugeBytes(bytes):
            def __len__(self):
                return 0x1_0000_0000

        with pytest.raises(ArchiveError, match="4 GiB"):
            plan_entries([PackagePart("big.bin", HugeBytes(b"x"))])

    def test_long_name_rejected(self):
        with pytest.raises(ArchiveError, match="too long"):
            plan_entries([("n" * 70000, b"")])

    def test_archive_error_is_value_error(self):
        assert issubclass(ArchiveError, ValueError)


class TestEndOfCentralDirectory:
    """Tests for end_of_central_directory."""

    def test_layout(self):
        record = end_of_central_directory(2, 102, 80)
        assert struct.unpack("<IHHHHIIH", record) == (0x06054B50, 0, 0, 2, 2, 102, 80, 0)

    def test_oversized_central_directory_rejected(self):
        with pytest.raises(ArchiveError, match="Central directory is"):
            end_of_central_directory(1, 0x1_0000_0000, 0)

    def test_offset_beyond_32_bits_rejected(self):
        with pytest.raises(ArchiveError, match="offset range"):
            end_of_central_directory(1, 46, 0x1_0000_0000)

    def test_too_many_entries_rejected(self):
        with pytest.raises(ArchiveError, match="Too many entries"):
            end_of_central_directory(0x1_0000, 0, 0)


class TestWriteArchive:
    """Tests for write_archive."""

    def test_two_entry_layout(self):
        archive = write_archive([("a.xml", b"0123456789"), ("b.xml", b"")], STAMP)
        signature, disk, cd_disk, on_disk, total, cd_size, cd_offset, comment = _end_record(archive)
        assert signature == 0x06054B50
        assert (disk, cd_disk, comment) == (0, 0, 0)
        assert on_disk == total == 2
        assert cd_offset == (30 + 5 + 10) + (30 + 5 + 0)
        assert cd_size == 2 * (46 + 5)
        assert len(archive) == cd_offset + cd_size + 22

    def test_local_header_fields(self):
        archive = write_archive([("a.xml", b"0123456789")], STAMP)
        fields = struct.unpack("<IHHHHHIIIHH", archive[:30])
        dos_time, dos_date = dos_datetime(STAMP)
        assert fields == (
            0x04034B50,
            20,
            0x0800,
            0,
            dos_time,
            dos_date,
            zlib.crc32(b"0123456789"),
            10,
            10,
            5,
            0,
        )
        assert archive[30:35] == b"a.xml"
        assert archive[35:45] == b"0123456789"

    def test_central_offsets_point_at_local_headers(self):
        entries = [("one.txt", b"1" * 7), ("dir/two.txt", b"22"), ("three", b"")]
        archive = write_archive(entries, STAMP)
        cd_offset = _end_record(archive)[6]
        position = cd_offset
        for name, data in entries:
            record = struct.unpack("<IHHHHHHIIIHHHHHII", archive[position:position + 46])
            assert record[0] == 0x02014B50
            assert record[7] == zlib.crc32(data)
            assert record[8] == record[9] == len(data)
            local_offset = record[16]
            assert archive[local_offset:local_offset + 4] == b"PK\x03\x04"
            name_len = record[10]
            assert archive[position + 46:position + 46 + name_len] == name.encode("utf-8")
            assert archive[local_offset + 30:local_offset + 30 + name_len] == name.encode("utf-8")
            position += 46 + name_len

    def test_deterministic(self):
        entries = [("a.xml", b"<a/>"), ("b.xml", b"<b/>")]
        assert write_archive(entries, STAMP) == write_archive(entries, STAMP)

    def test_empty_archive(self):
        archive = write_archive([], STAMP)
        assert len(archive) == 22
        assert _end_record(archive) == (0x06054B50, 0, 0, 0, 0, 0, 0, 0)

    def test_readable_by_zipfile(self):
        entries = [("docs/ünïcode.txt", "héllo".encode("utf-8")), ("empty", b"")]
        archive = write_archive(entries, STAMP)
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            assert zf.namelist() == ["docs/ünïcode.txt", "empty"]
            assert zf.testzip() is None
            info = zf.getinfo("docs/ünïcode.txt")
            assert info.compress_type == zipfile.ZIP_STORED
            assert info.date_time == (2024, 3, 15, 13, 45, 30)
            assert zf.read("docs/ünïcode.txt") == "héllo".encode("utf-8")
            assert zf.read("empty") == b""

    def test_duplicate_rejected(self):
        with pytest.raises(ArchiveError):
            write_archive([("a", b""), ("a", b"")], STAMP)
