"""Command line interface for docstamp."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from docstamp.aliases.store import generate_alias_map, locate_map_root
from docstamp.config import AppConfig
from docstamp.errors import DocstampError
from docstamp.markdown.documents import AliasOptions, add_front_matter, create_document
from docstamp.markdown.front_matter import read_metadata
from docstamp.markdown.templates import format_detail_date
from docstamp.models import ParsedPermalink
from docstamp.permalink.codec import decode
from docstamp.utils.files import iter_markdown_paths


console = Console()
app = typer.Typer(help="docstamp - permalink stamping for markdown documentation")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


def _time_table(parsed: ParsedPermalink) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Timestamp", parsed.timestamp)
    table.add_row("Local", parsed.local)
    table.add_row("ISO", parsed.iso)
    table.add_row("Date", f"{parsed.year}-{parsed.month:02d}-{parsed.day:02d}")
    table.add_row(
        "Time",
        f"{parsed.hour:02d}:{parsed.minute:02d}:{parsed.second:02d}.{parsed.millisecond:03d}",
    )
    return table


@app.command()
def new(
    name: str = typer.Argument(..., help="Document name without the .md extension"),
    directory: Path = typer.Option(None, "--dir", "-d", help="Output directory"),
    template: str = typer.Option(AppConfig().template, "--template", "-t", help="Scaffold name"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite without asking"),
    use_map: bool = typer.Option(False, "--map", "-m", help="Prefix the permalink with the alias path"),
    map_file: Optional[Path] = typer.Option(None, "--map-file", help="Alias map file (implies --map)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Create a markdown document stamped with a permalink."""
    _setup_logging(verbose)
    config = AppConfig(output_dir=directory if directory is not None else AppConfig().output_dir)
    output_dir = config.resolve_output_dir(Path.cwd())
    aliases = AliasOptions(enabled=use_map or map_file is not None, map_file=map_file)

    overwrite = force
    target = output_dir / f"{name}.md"
    if target.exists():
        if force:
            console.print(f"[yellow]Overwriting existing file:[/yellow] {target}")
        elif not typer.confirm(f"File already exists: {target}. Overwrite?", default=False):
            console.print("Cancelled.")
            return
        overwrite = True

    try:
        document = create_document(
            name, output_dir, config, template=template, aliases=aliases, overwrite=overwrite
        )
    except DocstampError as exc:
        raise _fail(exc) from exc

    console.print(f"Created [bold]{document.path}[/bold]")
    console.print(f"Template: {document.template}")
    console.print(f"Generated at: {format_detail_date(document.moment)}")
    console.print(f"Permalink: {document.permalink.permalink}")


@app.command()
def add(
    target: Path = typer.Argument(..., help="Markdown file, or directory with --dir"),
    directory: bool = typer.Option(False, "--dir", "-d", help="Process every .md file in TARGET"),
    use_map: bool = typer.Option(False, "--map", "-m", help="Prefix the permalink with the alias path"),
    map_file: Optional[Path] = typer.Option(None, "--map-file", help="Alias map file (implies --map)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Add front matter to markdown files that have none."""
    _setup_logging(verbose)
    if not target.exists():
        raise typer.BadParameter(f"Path not found: {target}")
    if target.is_dir() and not directory:
        console.print(f"[yellow]{target} is a directory, pass --dir to process it.[/yellow]")
        return
    if target.is_file() and target.suffix.lower() != ".md":
        console.print(f"[yellow]Not a markdown file:[/yellow] {target}")
        return

    config = AppConfig()
    aliases = AliasOptions(enabled=use_map or map_file is not None, map_file=map_file)
    added = 0
    for path in iter_markdown_paths([target]):
        try:
            document = add_front_matter(path, config, aliases=aliases)
        except DocstampError as exc:
            raise _fail(exc) from exc
        if document is None:
            console.print(f"[yellow]Front matter already present:[/yellow] {path}")
            continue
        added += 1
        console.print(f"Added front matter to {path} ({document.permalink.permalink})")
    console.print(f"Updated {added} file(s).")


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Markdown file with docstamp front matter"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the front matter of a document and the time encoded in its permalink."""
    _setup_logging(verbose)
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {path}")
    try:
        metadata = read_metadata(path)
        parsed = decode(metadata.permalink)
    except DocstampError as exc:
        raise _fail(exc) from exc

    console.print(f"File: [bold]{path}[/bold]")
    console.print(f"Title: {metadata.title}")
    console.print(f"Date: {metadata.date}")
    console.print(f"Permalink: {metadata.permalink}")
    if metadata.detail_date:
        console.print(f"Detail date: {metadata.detail_date}")
    if metadata.full_uuid:
        console.print(f"Full UUID: {metadata.full_uuid}")
    if metadata.used_uuid:
        console.print(f"Used UUID: {metadata.used_uuid}")
    console.print(_time_table(parsed))


@app.command("decode")
def decode_command(
    permalink: str = typer.Argument(..., help="Permalink, with or without prefix"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Decode the time stored in a permalink."""
    _setup_logging(verbose)
    try:
        parsed = decode(permalink)
    except DocstampError as exc:
        raise _fail(exc) from exc
    console.print(_time_table(parsed))


@app.command("map")
def map_command(
    path: Optional[Path] = typer.Argument(None, help="Directory to analyse"),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Directory to scan"),
    exclude: Optional[str] = typer.Option(None, "--exclude", "-e", help="Comma separated names to skip"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Scan the documentation tree and (re)generate the alias map file."""
    _setup_logging(verbose)
    config = AppConfig()
    scan_path = (directory or path or Path(".")).resolve()
    if not scan_path.is_dir():
        raise typer.BadParameter(f"Not a directory: {scan_path}")

    try:
        root = locate_map_root(
            scan_path,
            explicit=directory is not None or path is not None,
            anchor_name=config.anchor_name,
            fallback_name=config.fallback_root_name,
        )
    except DocstampError as exc:
        raise _fail(exc) from exc

    excluded = config.excluded_with(exclude)
    console.print(f"Root directory: [bold]{root}[/bold]")
    console.print(f"Excluded: {', '.join(sorted(excluded))}")
    output = generate_alias_map(
        root, excluded, filename=config.map_filename, default_alias=config.default_alias
    )
    console.print(f"Wrote [bold]{output}[/bold]")
