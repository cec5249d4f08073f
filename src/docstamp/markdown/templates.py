"""Markdown scaffolds and placeholder substitution."""

from __future__ import annotations

import json
from datetime import datetime
from importlib.resources import files

from docstamp.errors import TemplateNotFoundError
from docstamp.models import PermalinkData

INDEX_NAME = "index"


def template_for(name: str, requested: str = "post") -> str:
    """``index`` documents always use the index scaffold."""
    return INDEX_NAME if name.lower() == INDEX_NAME else requested


def load_template(name: str) -> str:
    template = files("docstamp.scaffolds").joinpath(f"{name}.md")
    if not template.is_file():
        raise TemplateNotFoundError(name)
    return template.read_text(encoding="utf-8")


def format_date(moment: datetime) -> str:
    return f"{moment:%Y-%m-%d %H:%M:%S}"


def format_detail_date(moment: datetime) -> str:
    return f"{format_date(moment)}.{moment.microsecond // 1000:03d}"


def quote_scalar(value: str) -> str:
    """Double-quote ``value`` so YAML reads it back as the same string."""
    return json.dumps(value, ensure_ascii=False)


def render(template: str, *, title: str, moment: datetime, permalink: PermalinkData) -> str:
    replacements = {
        "{{ title }}": quote_scalar(title),
        "{{ date }}": format_date(moment),
        "{{ permalink }}": permalink.permalink,
        "{{ detailDate }}": format_detail_date(moment),
        "{{ fulluuid }}": permalink.full_entropy,
        "{{ useduuid }}": permalink.used_entropy,
    }
    for placeholder, value in replacements.items():
        template = template.replace(placeholder, value)
    return template
