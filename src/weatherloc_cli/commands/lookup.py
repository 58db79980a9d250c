"""
lookup.py - Show raw weather and location data.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weatherloc_core.errors import WeatherLocError
from weatherloc_core.template_engine import to_text
from weatherloc_ops.favorites import require_favorite
from weatherloc_ops.services import create_location_service, create_weather_service

from ..util import fail, load_config

console = Console()


def _print_mapping(title: str, data: Dict[str, Any]) -> None:
    table = Table(title=title)
    table.add_column("Variable", style="cyan")
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, escape(to_text(value)))
    console.print(table)


def weather(
    city: Optional[str] = typer.Option(None, "--city", help="Saved city to use instead of the current location"),
):
    """Show the current weather reading."""
    try:
        config = load_config()
        if city:
            target = require_favorite(config, city).to_location()
        else:
            target = create_location_service(config).get_current_location()
        reading = create_weather_service(config).get_weather(target.lat, target.lon)
    except WeatherLocError as e:
        fail(e)
    _print_mapping(f"weather @ {target.city}", reading.to_context())


def location():
    """Show the current location fix."""
    try:
        config = load_config()
        fix = create_location_service(config).get_current_location()
    except WeatherLocError as e:
        fail(e)
    _print_mapping("location", fix.to_context())
