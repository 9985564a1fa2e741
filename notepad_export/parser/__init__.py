"""Markdown parsing: block structure and inline runs."""
