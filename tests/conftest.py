from pathlib import Path
from typing import Optional

import pytest
from hypothesis import settings

from weatherloc_core.config import ENV_CONFIG_PATH, ENV_PREFIX

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("weatherloc-tests", database=None)
settings.load_profile("weatherloc-tests")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop WEATHERLOC_* variables leaking in from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX) or key == ENV_CONFIG_PATH:
            monkeypatch.delenv(key, raising=False)


def write_config(
    path: Path,
    *,
    weather_provider: str = "mock",
    location_provider: str = "mock",
    extra: Optional[str] = None,
) -> Path:
    """Write a config TOML that uses the offline mock providers.

    Args:
        path: Target config file.
        weather_provider: Provider id written to the file.
        location_provider: Provider id written to the file.
        extra: Additional raw TOML appended verbatim.

    Returns:
        Path to the written config file.
    """
    lines = [
        f'weather_provider = "{weather_provider}"',
        f'location_provider = "{location_provider}"',
    ]
    if extra:
        lines.append(extra.strip())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
