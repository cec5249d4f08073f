"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def iter_markdown_paths(inputs: Iterable[Path], *, recursive: bool = False) -> Iterator[Path]:
    """Yield markdown paths from input paths, listing directories one level deep."""
    for item in inputs:
        if item.is_dir():
            pattern = item.rglob("*.md") if recursive else item.glob("*.md")
            yield from iter_markdown_paths(sorted(child for child in pattern if child.is_file()))
        elif item.is_file() and item.suffix.lower() == ".md":
            yield item


def ensure_directory(path: Path) -> bool:
    """Create ``path`` if needed; return True when it was created."""
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True
