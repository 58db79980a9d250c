"""Assemble the data context a note template is rendered against."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from weatherloc_core.config import DEFAULT_TIME_FORMAT
from weatherloc_core.models import FavoriteCity, LocationFix, WeatherReading

from .services import LocationService, WeatherService


def build_template_context(
    weather: WeatherReading,
    location: LocationFix,
    *,
    now: Optional[datetime] = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> Dict[str, Any]:
    """Return ``{"weather": ..., "location": ..., "time": ...}``."""
    stamp = (now or datetime.now()).strftime(time_format)
    return {
        "weather": weather.to_context(),
        "location": location.to_context(),
        "time": stamp,
    }


def collect_template_context(
    weather_service: WeatherService,
    location_service: LocationService,
    *,
    now: Optional[datetime] = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> Dict[str, Any]:
    """Context for the current location. Provider errors propagate."""
    location = location_service.get_current_location()
    weather = weather_service.get_weather(location.lat, location.lon)
    return build_template_context(weather, location, now=now, time_format=time_format)


def collect_city_context(
    weather_service: WeatherService,
    city: FavoriteCity,
    *,
    now: Optional[datetime] = None,
    time_format: str = DEFAULT_TIME_FORMAT,
) -> Dict[str, Any]:
    """Context for a saved city; address fields beyond the name are empty."""
    weather = weather_service.get_weather(city.lat, city.lon)
    return build_template_context(weather, city.to_location(), now=now, time_format=time_format)
