from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .util import configure_logging, configure_stdio, set_global_config_file

app = typer.Typer(help="weatherloc: Insert weather and location notes rendered from templates")


@app.callback()
def _init(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        help="Path to the config file (default: $WEATHERLOC_CONFIG or ~/.config/weatherloc/config.toml)",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    configure_stdio()
    configure_logging(verbose)
    set_global_config_file(config_file)


from .commands import config_cmd as config_cmd  # noqa: E402
from .commands import favorites as favorites_cmd  # noqa: E402
from .commands import templates as templates_cmd  # noqa: E402
from .commands.lookup import location as location_fn, weather as weather_fn  # noqa: E402
from .commands.note import insert as insert_fn, render as render_fn  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Config inspection and editing")
app.add_typer(favorites_cmd.app, name="favorites", help="Saved city operations")
app.add_typer(templates_cmd.app, name="templates", help="Built-in templates and variable reference")
app.command(name="render")(render_fn)
app.command(name="insert")(insert_fn)
app.command(name="weather")(weather_fn)
app.command(name="location")(location_fn)


def main():
    app()
