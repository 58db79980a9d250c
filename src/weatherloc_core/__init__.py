"""weatherloc core - template engine, data models and providers for weather notes."""

from .__version__ import __version__, __version_info__

from .template_engine import TemplateEngine, is_truthy, render_template, resolve_path, to_text
from .templates import (
    BUILTIN_TEMPLATES,
    DEFAULT_TEMPLATE,
    get_builtin_template,
    list_builtin_templates,
    variable_help,
)
from .models import FavoriteCity, LocationFix, WeatherReading
from .config import ConfigLoader, PluginConfig
from .cache import TTLCache
from .errors import (
    BlockNotFoundError,
    ConfigError,
    FavoriteLimitError,
    LocationError,
    ProviderError,
    TemplateNotFoundError,
    WeatherError,
    WeatherLocError,
)

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Template engine
    "TemplateEngine",
    "is_truthy",
    "render_template",
    "resolve_path",
    "to_text",
    # Built-in templates
    "BUILTIN_TEMPLATES",
    "DEFAULT_TEMPLATE",
    "get_builtin_template",
    "list_builtin_templates",
    "variable_help",
    # Models
    "FavoriteCity",
    "LocationFix",
    "WeatherReading",
    # Config
    "ConfigLoader",
    "PluginConfig",
    # Cache
    "TTLCache",
    # Errors
    "BlockNotFoundError",
    "ConfigError",
    "FavoriteLimitError",
    "LocationError",
    "ProviderError",
    "TemplateNotFoundError",
    "WeatherError",
    "WeatherLocError",
]
