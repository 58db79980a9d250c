from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from weatherloc_core.config import ConfigLoader, PluginConfig
from weatherloc_core.errors import WeatherLocError

# Global variable to store custom config file path
_global_config_file: Optional[Path] = None


def set_global_config_file(config_file: Optional[Path]) -> None:
    """Set the global config file path for use by utility functions."""
    global _global_config_file
    _global_config_file = config_file.expanduser().resolve() if config_file else None


def get_global_config_file() -> Optional[Path]:
    """Get the global config file path if set."""
    return _global_config_file


def configure_stdio() -> None:
    """Make CLI output robust across Windows console encodings.

    Templates and reports contain emoji and CJK text. On consoles with a
    non-UTF8 encoding (e.g., cp1252) printing them raises UnicodeEncodeError,
    so replace unencodable characters instead of crashing.
    """

    if os.name != "nt":
        return

    for stream in (sys.stdout, sys.stderr):
        try:
            # Keep the current encoding, but make encoding errors non-fatal.
            stream.reconfigure(errors="replace")
        except Exception:
            continue


def configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def config_path() -> Path:
    return ConfigLoader.resolve_config_path(get_global_config_file())


def load_config() -> PluginConfig:
    """Effective config (file + environment)."""
    return ConfigLoader.load(get_global_config_file())


def load_raw_config() -> PluginConfig:
    """Config as stored on disk, for commands that write it back."""
    return ConfigLoader.load_raw(get_global_config_file())


def fail(error: WeatherLocError) -> NoReturn:
    typer.echo(f"❌ {error.message}", err=True)
    if error.suggestion:
        typer.echo(f"Hint: {error.suggestion}", err=True)
    raise typer.Exit(1)
