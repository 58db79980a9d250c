from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ConfigError
from .adapter import WeatherProvider
from .mock import MockWeatherProvider

if TYPE_CHECKING:
    from ..config import PluginConfig


def resolve_weather_provider(config: "PluginConfig") -> WeatherProvider:
    """Resolve the weather adapter selected by configuration."""

    provider = config.weather_provider.strip().lower()

    if provider == "mock":
        return MockWeatherProvider()

    if provider == "openweather":
        if not config.weather_api_key:
            raise ConfigError(
                "OpenWeatherMap requires an API key",
                suggestion="Set weather_api_key (or WEATHERLOC_WEATHER_API_KEY), or use weather_provider = \"mock\"",
            )
        from .openweather import OpenWeatherProvider

        return OpenWeatherProvider(api_key=config.weather_api_key, timeout=config.request_timeout)

    if provider == "amap":
        if not config.amap_key:
            raise ConfigError(
                "Amap weather requires an API key",
                suggestion="Set amap_key (or WEATHERLOC_AMAP_KEY)",
            )
        from .amap import AmapWeatherProvider

        return AmapWeatherProvider(api_key=config.amap_key, timeout=config.request_timeout)

    raise ConfigError(f"Unknown weather provider: {provider}")
