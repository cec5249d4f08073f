"""Create and annotate markdown documents with permalinks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from docstamp.aliases.resolver import resolve
from docstamp.config import AppConfig
from docstamp.markdown.front_matter import extract_front_matter_block, prepend_front_matter
from docstamp.markdown.templates import load_template, render, template_for
from docstamp.models import PermalinkData
from docstamp.permalink.codec import generate_permalink
from docstamp.utils.files import ensure_directory

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class AliasOptions:
    """Whether and how to prefix permalinks with an alias path."""

    enabled: bool = False
    map_file: Path | None = None


@dataclass(slots=True)
class GeneratedDocument:
    path: Path
    template: str
    moment: datetime
    permalink: PermalinkData


def build_permalink(
    output_dir: Path,
    config: AppConfig,
    aliases: AliasOptions | None = None,
    *,
    moment: datetime | None = None,
    entropy: str | None = None,
) -> PermalinkData:
    """Encode a permalink for a document in ``output_dir``.

    With aliases enabled the alias path replaces the configured prefix;
    resolution errors propagate before anything is written.
    """
    prefix = config.permalink_prefix
    if aliases is not None and aliases.enabled:
        prefix = resolve(
            output_dir,
            aliases.map_file,
            anchor_name=config.anchor_name,
            map_filename=config.map_filename,
            fallback_name=config.fallback_root_name,
        )
    return generate_permalink(moment, prefix=prefix, entropy=entropy)


def render_document(
    name: str,
    output_dir: Path,
    template_name: str,
    permalink: PermalinkData,
    moment: datetime,
) -> str:
    template = load_template(template_name)
    title = output_dir.name if template_name == "index" else name
    return render(template, title=title, moment=moment, permalink=permalink)


def create_document(
    name: str,
    output_dir: Path,
    config: AppConfig,
    *,
    template: str | None = None,
    aliases: AliasOptions | None = None,
    overwrite: bool = False,
    moment: datetime | None = None,
    entropy: str | None = None,
) -> GeneratedDocument:
    """Write ``output_dir/name.md`` from a scaffold.

    Raises :class:`FileExistsError` when the target exists and ``overwrite``
    is not set.
    """
    moment = moment or datetime.now()
    template_name = template_for(name, template or config.template)
    permalink = build_permalink(output_dir, config, aliases, moment=moment, entropy=entropy)
    content = render_document(name, output_dir, template_name, permalink, moment)

    output_path = output_dir / f"{name}.md"
    if output_path.exists() and not overwrite:
        raise FileExistsError(output_path)

    if ensure_directory(output_dir):
        LOGGER.info("Created directory %s", output_dir)
    output_path.write_text(content, encoding="utf-8")
    LOGGER.info("Generated %s with permalink %s", output_path, permalink.permalink)
    return GeneratedDocument(output_path, template_name, moment, permalink)


def add_front_matter(
    path: Path,
    config: AppConfig,
    *,
    aliases: AliasOptions | None = None,
    moment: datetime | None = None,
    entropy: str | None = None,
) -> GeneratedDocument | None:
    """Prepend generated front matter to an existing markdown file.

    Returns ``None`` when the file already starts with front matter.
    """
    moment = moment or datetime.now()
    name = path.stem
    output_dir = path.parent
    template_name = template_for(name, "post")
    permalink = build_permalink(output_dir, config, aliases, moment=moment, entropy=entropy)
    block = extract_front_matter_block(
        render_document(name, output_dir, template_name, permalink, moment)
    )
    if not prepend_front_matter(path, block):
        return None
    LOGGER.info("Added front matter to %s", path)
    return GeneratedDocument(path, template_name, moment, permalink)
