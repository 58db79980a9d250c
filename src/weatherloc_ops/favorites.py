"""
favorites.py - Saved cities that can stand in for the current location.
"""

from __future__ import annotations

import logging
from typing import Optional

from weatherloc_core.config import PluginConfig
from weatherloc_core.errors import FavoriteLimitError, WeatherLocError
from weatherloc_core.models import FavoriteCity

logger = logging.getLogger(__name__)

MAX_FAVORITE_CITIES = 5


def _same_name(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def find_favorite(config: PluginConfig, name: str) -> Optional[FavoriteCity]:
    for city in config.favorite_cities:
        if _same_name(city.name, name):
            return city
    return None


def require_favorite(config: PluginConfig, name: str) -> FavoriteCity:
    city = find_favorite(config, name)
    if city is None:
        raise WeatherLocError(
            f"Favorite city not found: {name}",
            suggestion="Use 'weatherloc favorites list' to see saved cities",
        )
    return city


def add_favorite(config: PluginConfig, city: FavoriteCity) -> PluginConfig:
    """Return a copy of ``config`` with ``city`` saved.

    Re-adding an existing name replaces its coordinates in place.
    """
    cities = list(config.favorite_cities)
    for idx, existing in enumerate(cities):
        if _same_name(existing.name, city.name):
            cities[idx] = city
            logger.info(f"Updated favorite city {city.name}")
            return config.model_copy(update={"favorite_cities": cities})

    if len(cities) >= MAX_FAVORITE_CITIES:
        raise FavoriteLimitError(MAX_FAVORITE_CITIES)
    cities.append(city)
    logger.info(f"Added favorite city {city.name}")
    return config.model_copy(update={"favorite_cities": cities})


def remove_favorite(config: PluginConfig, name: str) -> PluginConfig:
    require_favorite(config, name)
    cities = [c for c in config.favorite_cities if not _same_name(c.name, name)]
    logger.info(f"Removed favorite city {name}")
    return config.model_copy(update={"favorite_cities": cities})
