"""Tests for notepad_export.model module."""

from notepad_export.model.block import (
    CodeBlock,
    HeadingBlock,
    OrderedListBlock,
    ParagraphBlock,
)
from notepad_export.model.note import Note
from notepad_export.model.package import ExportedDocument, NoteMetadata, PackagePart
from notepad_export.model.run import Run, RunStyle


class TestRunStyle:
    """Tests for RunStyle dataclass."""

    def test_defaults(self):
        style = RunStyle()
        assert style.bold is False
        assert style.italic is False
        assert style.underline is False
        assert style.color == ""
        assert style.font == ""
        assert style.size == 0

    def test_frozen(self):
        style = RunStyle()
        try:
            style.bold = True
            assert False, "RunStyle should be frozen"
        except AttributeError:
            pass

    def test_merge_overlays_set_fields(self):
        base = RunStyle(bold=True, size=32)
        merged = base.merge(RunStyle(italic=True, size=20))
        assert merged == RunStyle(bold=True, italic=True, size=20)

    def test_merge_keeps_base_for_unset_fields(self):
        base = RunStyle(italic=True, color="666666")
        assert base.merge(RunStyle()) == base


class TestRun:
    """Tests for Run dataclass."""

    def test_default_style_is_plain(self):
        run = Run(text="hello")
        assert run.text == "hello"
        assert run.style == RunStyle()

    def test_equality(self):
        assert Run("x", RunStyle(bold=True)) == Run("x", RunStyle(bold=True))
        assert Run("x", RunStyle(bold=True)) != Run("x")


class TestBlocks:
    """Tests for Block dataclasses."""

    def test_heading_defaults(self):
        heading = HeadingBlock()
        assert heading.level == 1
        assert heading.text == ""

    def test_blocks_are_immutable(self):
        block = ParagraphBlock(lines=("a",))
        try:
            block.lines = ("b",)
            assert False, "ParagraphBlock should be frozen"
        except AttributeError:
            pass

    def test_list_and_code_hold_tuples(self):
        assert OrderedListBlock(items=("a", "b")).items == ("a", "b")
        assert CodeBlock().lines == ()


class TestPackageModels:
    """Tests for PackagePart, NoteMetadata and ExportedDocument."""

    def test_package_part(self):
        part = PackagePart("word/document.xml", b"<x/>")
        assert part.name == "word/document.xml"
        assert part.data == b"<x/>"

    def test_metadata_defaults(self):
        meta = NoteMetadata()
        assert meta.title == ""
        assert meta.timestamp is None

    def test_exported_document(self):
        doc = ExportedDocument(data=b"abc", mime_type="text/plain")
        assert doc.data == b"abc"
        assert doc.mime_type == "text/plain"


class TestNote:
    """Tests for Note dataclass."""

    def test_defaults(self):
        note = Note()
        assert note.title == ""
        assert note.content == ""
        assert note.source_path == ""
