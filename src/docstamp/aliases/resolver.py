"""Translate output directories into alias paths for permalinks."""

from __future__ import annotations

import logging
from pathlib import Path

from docstamp.aliases.store import find_anchor, load_alias_map
from docstamp.config import DEFAULT_ANCHOR_NAME, DEFAULT_FALLBACK_ROOT_NAME, DEFAULT_MAP_FILENAME
from docstamp.errors import MapFileMissingError, NoAnchorError, UnmappedSegmentError

LOGGER = logging.getLogger(__name__)


def default_map_file(anchor: Path, filename: str = DEFAULT_MAP_FILENAME) -> Path:
    return anchor / filename


def resolve(
    output_dir: Path | str,
    map_file: Path | str | None = None,
    *,
    anchor_name: str = DEFAULT_ANCHOR_NAME,
    map_filename: str = DEFAULT_MAP_FILENAME,
    fallback_name: str | None = DEFAULT_FALLBACK_ROOT_NAME,
) -> str:
    """Return the aliased form of ``output_dir``, starting at the anchor.

    Every directory below the anchor must have an alias; the first one
    without raises :class:`UnmappedSegmentError` and nothing is returned.
    Paths without the anchor fall back to a ``fallback_name`` segment, the
    other root ``docstamp map`` writes a map file under.
    """
    target = Path(output_dir).resolve()
    root_name = anchor_name
    anchor = find_anchor(target, anchor_name)
    if anchor is None and fallback_name:
        root_name = fallback_name
        anchor = find_anchor(target, fallback_name)
    if anchor is None:
        raise NoAnchorError(target, anchor_name)

    if map_file is not None:
        source = Path(map_file).resolve()
    else:
        source = default_map_file(anchor, map_filename)
    if not source.exists():
        raise MapFileMissingError(source)

    aliases = load_alias_map(source)
    LOGGER.debug("Loaded %d aliases from %s", len(aliases), source)

    segments = [root_name]
    for name in target.relative_to(anchor).parts:
        alias = aliases.get(name)
        if alias is None:
            raise UnmappedSegmentError(name)
        segments.append(alias)
    return "/".join(segments)
