"""Reading and inserting YAML front matter."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import frontmatter
import yaml

from docstamp.errors import DocumentFormatError
from docstamp.models import DocumentMetadata

LOGGER = logging.getLogger(__name__)

_BLOCK_PATTERN = re.compile(r"^---\r?\n(.*?)\r?\n---", re.DOTALL)


def has_front_matter(text: str) -> bool:
    return text.lstrip().startswith("---")


def extract_front_matter_block(text: str) -> str:
    """Return the leading ``---`` delimited block of ``text``, delimiters included."""
    match = _BLOCK_PATTERN.match(text)
    if match is None:
        return ""
    return f"---\n{match.group(1)}\n---"


def _text(value: object) -> str | None:
    if value is None:
        return None
    if hasattr(value, "strftime"):
        return f"{value:%Y-%m-%d %H:%M:%S}"
    return str(value)


def read_metadata(path: Path) -> DocumentMetadata:
    """Load the docstamp fields from a markdown file's front matter."""
    try:
        post = frontmatter.load(str(path))
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentFormatError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise DocumentFormatError(f"Invalid front matter in {path}: {exc}") from exc

    metadata = post.metadata
    if not metadata:
        raise DocumentFormatError(f"No front matter found in {path}")
    permalink = _text(metadata.get("permalink"))
    if not permalink:
        raise DocumentFormatError(f"No permalink in front matter of {path}")

    extra = metadata.get("tdoc") or {}
    if not isinstance(extra, dict):
        extra = {}
    return DocumentMetadata(
        path=path,
        title=_text(metadata.get("title")) or "",
        date=_text(metadata.get("date")) or "",
        permalink=permalink,
        detail_date=_text(extra.get("detailDate")),
        full_uuid=_text(extra.get("fulluuid")),
        used_uuid=_text(extra.get("useduuid")),
    )


def prepend_front_matter(path: Path, block: str) -> bool:
    """Insert ``block`` at the top of ``path``; return False if it already has one."""
    content = path.read_text(encoding="utf-8")
    if has_front_matter(content):
        LOGGER.info("Front matter already present in %s", path)
        return False
    updated = f"{block}\n\n{content}\n".replace("\r\n", "\n")
    path.write_text(updated, encoding="utf-8", newline="\n")
    return True
