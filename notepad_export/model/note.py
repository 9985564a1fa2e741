"""Note model representing a single Markdown note."""

from dataclasses import dataclass


@dataclass
class Note:
    """A note read from disk (or supplied by a notes service)."""

    title: str = ""
    content: str = ""
    source_path: str = ""
