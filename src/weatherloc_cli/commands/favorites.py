from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weatherloc_core.config import ConfigLoader
from weatherloc_core.errors import WeatherLocError
from weatherloc_core.location import geocode_city
from weatherloc_core.models import FavoriteCity
from weatherloc_ops.favorites import MAX_FAVORITE_CITIES, add_favorite, remove_favorite

from ..util import fail, get_global_config_file, load_config, load_raw_config

app = typer.Typer()
console = Console()


@app.command("list")
def list_favorites():
    """List saved cities."""
    try:
        config = load_raw_config()
    except WeatherLocError as e:
        fail(e)
    if not config.favorite_cities:
        typer.echo("No favorite cities saved.")
        return
    table = Table(title=f"Favorite cities ({len(config.favorite_cities)}/{MAX_FAVORITE_CITIES})")
    table.add_column("Name", style="cyan")
    table.add_column("Lat", justify="right")
    table.add_column("Lon", justify="right")
    for city in config.favorite_cities:
        table.add_row(escape(city.name), f"{city.lat:.4f}", f"{city.lon:.4f}")
    console.print(table)


@app.command()
def add(
    name: str = typer.Argument(..., help="City name"),
    lat: Optional[float] = typer.Argument(None, help="Latitude (looked up from NAME when omitted)"),
    lon: Optional[float] = typer.Argument(None, help="Longitude (looked up from NAME when omitted)"),
):
    """Save a city (replaces an existing entry with the same name)."""
    if (lat is None) != (lon is None):
        typer.echo("❌ Pass both LAT and LON, or neither to look the city up", err=True)
        raise typer.Exit(2)
    try:
        if lat is None:
            city = geocode_city(load_config(), name)
        else:
            city = FavoriteCity(name=name, lat=lat, lon=lon)
    except WeatherLocError as e:
        fail(e)
    except ValueError as e:
        typer.echo(f"❌ Invalid city: {e}", err=True)
        raise typer.Exit(1)
    try:
        config = add_favorite(load_raw_config(), city)
        ConfigLoader.save(config, get_global_config_file())
    except WeatherLocError as e:
        fail(e)
    typer.echo(f"✓ Saved {city.name} ({city.lat:.4f}, {city.lon:.4f})")


@app.command()
def remove(name: str = typer.Argument(..., help="City name")):
    """Forget a saved city."""
    try:
        config = remove_favorite(load_raw_config(), name)
        ConfigLoader.save(config, get_global_config_file())
    except WeatherLocError as e:
        fail(e)
    typer.echo(f"✓ Removed {name}")
