"""Directory alias table stored as a generated ``path-map.js`` file."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, Mapping

from docstamp.config import (
    DEFAULT_ALIAS,
    DEFAULT_ANCHOR_NAME,
    DEFAULT_FALLBACK_ROOT_NAME,
    DEFAULT_MAP_FILENAME,
)
from docstamp.errors import NoAnchorError

LOGGER = logging.getLogger(__name__)

_ENTRY_PATTERN = re.compile(
    r'^\s*("(?:[^"\\\n]|\\.)+")\s*:\s*("(?:[^"\\\n]|\\.)+")', re.MULTILINE
)

_HEADER = (
    "/**\n"
    " * Generated by `docstamp map`.\n"
    " * Maps directory names to the aliases used inside permalinks.\n"
    " * Edit the values by hand; they are kept when the file is regenerated.\n"
    " */\n\n"
)


@dataclass(frozen=True, slots=True)
class AliasMap:
    """Directory name to alias lookup table."""

    entries: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str | None:
        return self.entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


def find_anchor(path: Path, anchor_name: str = DEFAULT_ANCHOR_NAME) -> Path | None:
    """Return ``path`` cut after its first ``anchor_name`` segment, if any."""
    parts = path.parts
    if anchor_name not in parts:
        return None
    return Path(*parts[: parts.index(anchor_name) + 1])


def locate_map_root(
    path: Path,
    *,
    explicit: bool = False,
    anchor_name: str = DEFAULT_ANCHOR_NAME,
    fallback_name: str = DEFAULT_FALLBACK_ROOT_NAME,
) -> Path:
    """Find the directory whose subtree the alias map covers."""
    path = path.resolve()
    if explicit and path.name in (anchor_name, fallback_name):
        return path

    anchor = find_anchor(path, anchor_name)
    if anchor is not None:
        return anchor

    fallback = path / fallback_name
    if fallback.is_dir():
        return fallback

    raise NoAnchorError(path, anchor_name)


def scan_directories(root: Path, excluded: Iterable[str] = ()) -> Dict[str, str]:
    """Map every directory name under ``root`` to its path relative to ``root``.

    Excluded names and asset folders (a ``<name>.md`` file sits next to
    them) are skipped together with their subtree. Names are not unique
    across the tree; the last one found wins.
    """
    excluded = set(excluded)
    found: Dict[str, str] = {}

    def _walk(directory: Path) -> None:
        for child in sorted(directory.iterdir()):
            if not child.is_dir() or child.name in excluded:
                continue
            if (directory / f"{child.name}.md").exists():
                LOGGER.debug("Skipping asset folder %s", child)
                continue
            found[child.name] = child.relative_to(root).as_posix()
            _walk(child)

    _walk(root)
    return found


def load_alias_map(path: Path) -> AliasMap:
    """Read the ``"name": "alias"`` pairs of a generated map file."""
    if not path.exists():
        return AliasMap()
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("Could not read alias map %s: %s", path, exc)
        return AliasMap()
    entries: Dict[str, str] = {}
    for raw_name, raw_alias in _ENTRY_PATTERN.findall(content):
        try:
            entries[json.loads(raw_name)] = json.loads(raw_alias)
        except json.JSONDecodeError:
            LOGGER.warning("Skipping malformed alias entry %s: %s in %s", raw_name, raw_alias, path)
    return AliasMap(entries)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def render_alias_map(
    scanned: Mapping[str, str], existing: AliasMap, *, default_alias: str = DEFAULT_ALIAS
) -> str:
    lines = [_HEADER, "export default {\n"]
    for name, relative in scanned.items():
        alias = existing.get(name) or default_alias
        lines.append(f"  {_quote(name)}: {_quote(alias)}, // {relative}\n")
    lines.append("};\n")
    return "".join(lines)


def write_alias_map(
    root: Path,
    scanned: Mapping[str, str],
    existing: AliasMap,
    *,
    filename: str = DEFAULT_MAP_FILENAME,
    default_alias: str = DEFAULT_ALIAS,
) -> Path:
    """Write the map file under ``root``, keeping aliases already chosen."""
    output = root / filename
    content = render_alias_map(scanned, existing, default_alias=default_alias)
    output.write_text(content, encoding="utf-8")
    LOGGER.info("Wrote %d alias entries to %s", len(scanned), output)
    return output


def generate_alias_map(
    root: Path,
    excluded: Iterable[str] = (),
    *,
    filename: str = DEFAULT_MAP_FILENAME,
    default_alias: str = DEFAULT_ALIAS,
) -> Path:
    """Rescan ``root`` and regenerate its map file."""
    scanned = scan_directories(root, excluded)
    existing = load_alias_map(root / filename)
    return write_alias_map(root, scanned, existing, filename=filename, default_alias=default_alias)
