"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_PERMALINK_PREFIX = "docs"
DEFAULT_ANCHOR_NAME = "sdoc"
DEFAULT_FALLBACK_ROOT_NAME = "src"
DEFAULT_MAP_FILENAME = "path-map.js"
DEFAULT_ALIAS = "default"
# Build and static-asset folders of the documentation site
DEFAULT_EXCLUDED_DIRS: Tuple[str, ...] = (".vitepress", "public")


@dataclass(slots=True)
class AppConfig:
    permalink_prefix: str = DEFAULT_PERMALINK_PREFIX
    anchor_name: str = DEFAULT_ANCHOR_NAME
    fallback_root_name: str = DEFAULT_FALLBACK_ROOT_NAME
    map_filename: str = DEFAULT_MAP_FILENAME
    default_alias: str = DEFAULT_ALIAS
    excluded_dirs: Tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    output_dir: Path = Path("test")
    template: str = "post"

    def resolve_output_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.output_dir).is_absolute() or base_dir is None:
            return Path(self.output_dir)
        return base_dir / self.output_dir

    def excluded_with(self, extra: str | None) -> set[str]:
        """Merge the default excluded directory names with a comma separated list."""
        excluded = set(self.excluded_dirs)
        if extra:
            excluded.update(name.strip() for name in extra.split(",") if name.strip())
        return excluded
