"""Rendering of parsed Markdown into OOXML parts, and note writing."""
