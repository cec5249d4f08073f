"""Exceptions raised by docstamp."""

from __future__ import annotations

from pathlib import Path


class DocstampError(Exception):
    """Base class for every user-facing docstamp failure."""


class PermalinkFormatError(DocstampError, ValueError):
    """The permalink is not 24 hex digits or carries no valid timestamp."""


class ResolutionError(DocstampError):
    """An output directory could not be translated into an alias path."""


class NoAnchorError(ResolutionError):
    def __init__(self, path: Path | str, anchor_name: str = "sdoc") -> None:
        self.path = Path(path)
        self.anchor_name = anchor_name
        super().__init__(f"No '{anchor_name}' directory found in path: {self.path}")


class MapFileMissingError(ResolutionError):
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Alias map file not found: {self.path}")


class UnmappedSegmentError(ResolutionError):
    def __init__(self, segment: str) -> None:
        self.segment = segment
        super().__init__(f"No alias defined for directory '{segment}'")


class DocumentFormatError(DocstampError):
    """A markdown document has missing or unreadable front matter."""


class TemplateNotFoundError(DocstampError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")
