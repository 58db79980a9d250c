from __future__ import annotations

import typer

from weatherloc_core.config import SCALAR_FIELDS, ConfigLoader, PluginConfig, mask_secrets
from weatherloc_core.errors import WeatherLocError

from ..util import config_path, fail, get_global_config_file, load_config

app = typer.Typer(help="Configuration inspection and editing")


@app.command()
def path():
    """Print the config file location."""
    typer.echo(str(config_path()))


@app.command()
def show(
    reveal: bool = typer.Option(False, "--reveal", help="Print API keys unmasked"),
):
    """Print the effective config (file + environment) as TOML."""
    try:
        config = load_config()
    except WeatherLocError as e:
        fail(e)
    if not reveal:
        config = PluginConfig.model_validate(mask_secrets(config.model_dump(mode="json")))
    typer.echo(ConfigLoader.to_toml(config).rstrip("\n"))


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a config file populated with defaults."""
    target = config_path()
    if target.exists() and not force:
        typer.echo(f"❌ Config already exists: {target}", err=True)
        typer.echo("Hint: pass --force to overwrite", err=True)
        raise typer.Exit(1)
    try:
        written = ConfigLoader.save(PluginConfig(), get_global_config_file())
    except WeatherLocError as e:
        fail(e)
    typer.echo(f"✓ Wrote default config to {written}")


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help=f"One of: {', '.join(SCALAR_FIELDS)}"),
    value: str = typer.Argument(..., help="New value (use env:VAR for secrets)"),
):
    """Update one setting in the config file."""
    try:
        ConfigLoader.set_value(get_global_config_file(), key, value)
    except WeatherLocError as e:
        fail(e)
    typer.echo(f"✓ {key} updated")
