"""Configuration loading and persistence for weatherloc.

The settings blob lives in a single TOML file. Layer order (later wins):
1) Built-in defaults (PluginConfig field defaults)
2) The config file (``--config-file``, ``$WEATHERLOC_CONFIG`` or
   ``~/.config/weatherloc/config.toml``)
3) Environment overrides ``WEATHERLOC_<FIELD>`` for scalar settings

String values of the form ``env:VAR`` are resolved from the environment when
the effective config is built, so API keys need not be stored in the file.
The "raw" config (layers 1-2, unresolved) is what gets written back.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .models import FavoriteCity
from .templates import DEFAULT_TEMPLATE

# Conditional TOML import: stdlib tomllib (3.11+) or fallback tomli (<3.11)
try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore

import tomli_w

logger = logging.getLogger(__name__)

ENV_PREFIX = "WEATHERLOC_"
ENV_CONFIG_PATH = f"{ENV_PREFIX}CONFIG"
ENV_REF_PREFIX = "env:"

DEFAULT_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

_SECRET_SUFFIXES = ("_key",)


class PluginConfig(BaseModel):
    """Persisted plugin settings."""

    weather_api_key: str = Field(default="", description="OpenWeatherMap API key or env:VAR")
    weather_provider: Literal["openweather", "amap", "mock"] = "openweather"
    location_provider: Literal["ip", "amap", "manual", "mock"] = "ip"
    manual_location: str = Field(default="", description='"city,lat,lon" or "city,country,lat,lon"')
    template: str = DEFAULT_TEMPLATE
    amap_key: str = Field(default="", description="Amap web service key or env:VAR")
    favorite_cities: List[FavoriteCity] = Field(default_factory=list)
    time_format: str = DEFAULT_TIME_FORMAT
    request_timeout: float = Field(default=5.0, gt=0)
    weather_cache_ttl: float = Field(default=15 * 60, gt=0)
    location_cache_ttl: float = Field(default=30 * 60, gt=0)

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


SCALAR_FIELDS = [name for name in PluginConfig.model_fields if name != "favorite_cities"]


def resolve_env_ref(value: Any) -> Any:
    """Resolve ``env:VAR`` references; other values pass through."""
    if not isinstance(value, str):
        return value
    s = value.strip()
    if not s.startswith(ENV_REF_PREFIX):
        return value
    var = s[len(ENV_REF_PREFIX) :].strip()
    if not var:
        raise ConfigError("Invalid env reference: 'env:' must include a variable name")
    resolved = os.environ.get(var)
    if resolved is None or not resolved.strip():
        raise ConfigError(f"Missing env var for secret reference: {var}")
    return resolved


def mask_secrets(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``data`` with API keys partially hidden for display."""
    masked: Dict[str, Any] = {}
    for key, value in data.items():
        if key.endswith(_SECRET_SUFFIXES) and isinstance(value, str) and value:
            if value.startswith(ENV_REF_PREFIX):
                masked[key] = value
            else:
                masked[key] = value[:4] + "*" * max(0, len(value) - 4)
        else:
            masked[key] = value
    return masked


class ConfigLoader:
    """Load, resolve and persist PluginConfig."""

    @staticmethod
    def default_config_path() -> Path:
        return Path.home() / ".config" / "weatherloc" / "config.toml"

    @staticmethod
    def resolve_config_path(explicit: Optional[Path] = None) -> Path:
        if explicit is not None:
            return Path(explicit).expanduser()
        env_path = os.environ.get(ENV_CONFIG_PATH, "").strip()
        if env_path:
            return Path(env_path).expanduser()
        return ConfigLoader.default_config_path()

    @staticmethod
    def _read_toml_optional(path: Path) -> Dict[str, Any]:
        """Read TOML config file; return {} if not found."""
        if not path.exists():
            return {}
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load TOML from {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigError(f"Config TOML must be a table: {path}")
        return data

    @staticmethod
    def _validate(data: Dict[str, Any], source: str) -> PluginConfig:
        try:
            return PluginConfig.model_validate(data)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            error_list = "\n".join(f"  - {msg}" for msg in errors)
            raise ConfigError(f"Invalid configuration in {source}:\n{error_list}")

    @staticmethod
    def env_overrides(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for name in SCALAR_FIELDS:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in env:
                overrides[name] = env[key]
        return overrides

    @staticmethod
    def load_raw(path: Optional[Path] = None) -> PluginConfig:
        """Defaults + file, with env references left unresolved."""
        config_path = ConfigLoader.resolve_config_path(path)
        data = ConfigLoader._read_toml_optional(config_path)
        return ConfigLoader._validate(data, str(config_path))

    @staticmethod
    def load(path: Optional[Path] = None) -> PluginConfig:
        """Effective config: defaults + file + environment, secrets resolved."""
        config_path = ConfigLoader.resolve_config_path(path)
        data = ConfigLoader._read_toml_optional(config_path)
        overrides = ConfigLoader.env_overrides()
        if overrides:
            logger.debug(f"Applying environment overrides: {sorted(overrides)}")
        merged = {**data, **overrides}
        resolved = {key: resolve_env_ref(value) for key, value in merged.items()}
        return ConfigLoader._validate(resolved, str(config_path))

    @staticmethod
    def to_toml(config: PluginConfig) -> str:
        return tomli_w.dumps(config.model_dump(mode="json"), multiline_strings=True)

    @staticmethod
    def save(config: PluginConfig, path: Optional[Path] = None) -> Path:
        config_path = ConfigLoader.resolve_config_path(path)
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(ConfigLoader.to_toml(config), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write config to {config_path}: {e}")
        logger.info(f"Saved config to {config_path}")
        return config_path

    @staticmethod
    def set_value(path: Optional[Path], key: str, value: str) -> PluginConfig:
        """Update one scalar setting in the raw config file and persist it."""
        if key not in SCALAR_FIELDS:
            raise ConfigError(
                f"Unknown or non-scalar setting: {key}",
                suggestion=f"Settable keys: {', '.join(SCALAR_FIELDS)}",
            )
        raw = ConfigLoader.load_raw(path)
        data = raw.model_dump(mode="json")
        data[key] = value
        updated = ConfigLoader._validate(data, key)
        ConfigLoader.save(updated, path)
        return updated
