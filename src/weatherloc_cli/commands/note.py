"""
note.py - Render a template and insert it into a document.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from weatherloc_core.config import PluginConfig
from weatherloc_core.errors import WeatherLocError
from weatherloc_ops.notes import RenderedNote, insert_note, render_note, resolve_template_text
from weatherloc_ops.services import create_location_service, create_weather_service

from ..util import fail, load_config


def _render(
    config: PluginConfig,
    *,
    builtin: Optional[str],
    template_file: Optional[Path],
    city: Optional[str],
) -> RenderedNote:
    template = resolve_template_text(config, builtin=builtin, template_file=template_file)
    weather_service = create_weather_service(config)
    location_service = None if city else create_location_service(config)
    return render_note(config, weather_service, location_service, template=template, city=city)


def render(
    builtin: Optional[str] = typer.Option(None, "--builtin", "-b", help="Built-in template name"),
    template_file: Optional[Path] = typer.Option(
        None, "--template-file", "-t", help="Template file to render", exists=True, dir_okay=False
    ),
    city: Optional[str] = typer.Option(None, "--city", help="Saved city to use instead of the current location"),
):
    """Render the template and print the result."""
    try:
        config = load_config()
        note = _render(config, builtin=builtin, template_file=template_file, city=city)
    except WeatherLocError as e:
        fail(e)
    typer.echo(note.text.rstrip("\n"))


def insert(
    document: Path = typer.Argument(..., help="Markdown document to insert into", dir_okay=False),
    block: Optional[str] = typer.Option(None, "--block", help="Insert after the block marked ^BLOCK"),
    replace: bool = typer.Option(False, "--replace", help="Replace the addressed block instead"),
    builtin: Optional[str] = typer.Option(None, "--builtin", "-b", help="Built-in template name"),
    template_file: Optional[Path] = typer.Option(
        None, "--template-file", "-t", help="Template file to render", exists=True, dir_okay=False
    ),
    city: Optional[str] = typer.Option(None, "--city", help="Saved city to use instead of the current location"),
):
    """Render the template and insert it into DOCUMENT."""
    if replace and not block:
        typer.echo("❌ --replace requires --block", err=True)
        raise typer.Exit(2)
    try:
        config = load_config()
        note = _render(config, builtin=builtin, template_file=template_file, city=city)
        result = insert_note(document, note, block_id=block, replace=replace)
    except WeatherLocError as e:
        fail(e)
    where = f"block ^{result.block_id}" if result.block_id else "end of document"
    typer.echo(f"✓ Inserted into {result.path} ({result.mode}, {where}, line {result.line})")
