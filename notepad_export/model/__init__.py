"""Data model for notes, parsed Markdown and package parts."""
