from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weatherloc_core.errors import WeatherLocError
from weatherloc_core.templates import get_builtin_template, list_builtin_templates, variable_help

from ..util import fail

app = typer.Typer()
console = Console()


@app.command("list")
def list_templates():
    """List built-in templates."""
    table = Table(title="Built-in templates")
    table.add_column("Name", style="cyan")
    table.add_column("First line")
    for name in list_builtin_templates():
        first_line = get_builtin_template(name).strip().split("\n", 1)[0]
        table.add_row(name, escape(first_line))
    console.print(table)


@app.command()
def show(name: str = typer.Argument(..., help="Template name")):
    """Print a built-in template."""
    try:
        text = get_builtin_template(name)
    except WeatherLocError as e:
        fail(e)
    typer.echo(text.rstrip("\n"))


@app.command("help")
def help_cmd():
    """Print the template variable reference."""
    typer.echo(variable_help())
