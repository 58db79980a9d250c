"""
services.py - Cached access to the weather and location providers.

Providers are called at most once per cache window: weather readings are
keyed by provider and coordinates rounded to two decimals, the current
location is cached as a single entry.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from weatherloc_core.cache import TTLCache
from weatherloc_core.config import PluginConfig
from weatherloc_core.location import LocationProvider, resolve_location_provider
from weatherloc_core.models import LocationFix, WeatherReading
from weatherloc_core.weather import WeatherProvider, resolve_weather_provider

logger = logging.getLogger(__name__)

WEATHER_CACHE_SECONDS = 15 * 60
LOCATION_CACHE_SECONDS = 30 * 60

_CURRENT_LOCATION_KEY = "current"


class WeatherService:
    def __init__(
        self,
        provider: WeatherProvider,
        ttl_seconds: float = WEATHER_CACHE_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.provider = provider
        self._cache = TTLCache(ttl_seconds=ttl_seconds, clock=clock or time.time)

    def get_weather(self, lat: float, lon: float) -> WeatherReading:
        key = f"{self.provider.provider_id}-{lat:.2f}-{lon:.2f}"
        return self._cache.get_or_set(key, lambda: self.provider.get_weather(lat, lon))

    def clear_cache(self) -> None:
        self._cache.clear()
        clear = getattr(self.provider, "clear_cache", None)
        if callable(clear):
            clear()
        logger.info("Weather cache cleared")


class LocationService:
    def __init__(
        self,
        provider: LocationProvider,
        ttl_seconds: float = LOCATION_CACHE_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.provider = provider
        self._cache = TTLCache(ttl_seconds=ttl_seconds, clock=clock or time.time)

    def get_current_location(self) -> LocationFix:
        return self._cache.get_or_set(_CURRENT_LOCATION_KEY, self.provider.locate)

    def clear_cache(self) -> None:
        self._cache.clear()
        logger.info("Location cache cleared")


def create_weather_service(config: PluginConfig) -> WeatherService:
    return WeatherService(resolve_weather_provider(config), ttl_seconds=config.weather_cache_ttl)


def create_location_service(config: PluginConfig) -> LocationService:
    return LocationService(resolve_location_provider(config), ttl_seconds=config.location_cache_ttl)
