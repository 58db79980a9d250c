"""Static location parsed from the ``manual_location`` setting."""

import logging
import math
from typing import Tuple

from ..errors import LocationError
from ..models import LocationFix
from .adapter import LocationProvider, is_valid_coordinate

logger = logging.getLogger(__name__)

MANUAL_FORMAT_HINT = 'Use "city,lat,lon" or "city,country,lat,lon", e.g. "长沙,28.23,112.94"'


def _parse_float(text: str) -> float:
    value = float(text.strip())
    if math.isnan(value):
        raise ValueError("NaN coordinate")
    return value


def parse_manual_location(value: str) -> Tuple[str, str, float, float]:
    """Split a manual location string into ``(city, country, lat, lon)``."""
    parts = [p.strip() for p in value.split(",")]
    if len(parts) < 3:
        raise LocationError("manual", "Manual location needs coordinates", suggestion=MANUAL_FORMAT_HINT)

    city = parts[0]
    country = ""
    try:
        if len(parts) >= 4:
            country = parts[1]
            lat, lon = _parse_float(parts[2]), _parse_float(parts[3])
        else:
            lat, lon = _parse_float(parts[1]), _parse_float(parts[2])
    except ValueError:
        logger.warning(f"Could not parse manual location: {value!r}")
        raise LocationError("manual", f"Invalid coordinates in {value!r}", suggestion=MANUAL_FORMAT_HINT)

    if not city:
        raise LocationError("manual", "Manual location needs a city name", suggestion=MANUAL_FORMAT_HINT)
    if not is_valid_coordinate(lat, lon):
        raise LocationError("manual", f"Coordinates out of range: {lat}, {lon}")
    return city, country, lat, lon


class ManualLocationProvider(LocationProvider):
    provider_id = "manual"

    def __init__(self, value: str):
        self._value = value

    def locate(self) -> LocationFix:
        city, country, lat, lon = parse_manual_location(self._value)
        return LocationFix(
            city=city,
            country=country,
            lat=lat,
            lon=lon,
            formatted_address=f"{city}, {country}" if country else city,
            source="manual",
        )
