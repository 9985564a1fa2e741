"""CLI entry point for the notepad Markdown exporter."""

import argparse
import logging
import sys
from pathlib import Path

from notepad_export.converter.writer import NoteWriter
from notepad_export.utils import discover_markdown_files, read_note


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the notepad-export CLI."""
    parser = argparse.ArgumentParser(
        prog="notepad-export",
        description="Export Markdown notes to Word (.docx) documents",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Markdown file, or directory searched recursively for .md files",
    )
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output directory for exported files",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=("docx", "md"),
        default="docx",
        help="Export format (default: docx)",
    )
    parser.add_argument(
        "--title",
        default="",
        help="Document title (single-file input only; defaults to the file name)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (very verbose)",
    )

    args = parser.parse_args(argv)

    # Configure logging
    if args.debug:
        log_level = logging.DEBUG
    elif args.verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(levelname)s: %(message)s",
    )

    input_path = Path(args.input).resolve()
    output_dir = Path(args.output).resolve()

    if input_path.is_file():
        note_files = [input_path]
    elif input_path.is_dir():
        note_files = discover_markdown_files(input_path)
        if args.title:
            logging.warning("--title is ignored for directory input")
    else:
        print(f"Error: Input does not exist: {input_path}", file=sys.stderr)
        return 1

    if not note_files:
        print(f"No Markdown files found in {input_path}", file=sys.stderr)
        return 1

    print(f"Found {len(note_files)} note(s) in {input_path}")

    writer = NoteWriter(output_dir)
    single_title = args.title if input_path.is_file() else ""
    total_files = 0
    errors: list[str] = []

    for note_file in note_files:
        try:
            note = read_note(note_file, title=single_title)
            if args.format == "md":
                written = writer.write_markdown(note)
            else:
                written = writer.write_docx(note)
            total_files += 1
            print(f"  {note_file.name} -> {written.name}")
        except Exception as e:
            error_msg = f"  ERROR: {note_file.name}: {e}"
            print(error_msg, file=sys.stderr)
            errors.append(error_msg)
            logging.debug("Full traceback:", exc_info=True)

    # Summary
    print(f"\n{'=' * 50}")
    print("Export complete:")
    print(f"  Notes read:    {len(note_files)}")
    print(f"  Files written: {total_files}")
    print(f"  Output:        {output_dir}")

    if errors:
        print(f"\n  Errors ({len(errors)}):")
        for err in errors:
            print(f"    {err}")
        return 2 if total_files == 0 else 0

    return 0


if __name__ == "__main__":
    sys.exit(main())
