"""City name to coordinates lookup for saving favourite cities.

One geocoder is used per configuration: Amap ``geocode/geo`` when an Amap key
is configured, OpenStreetMap Nominatim otherwise.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Tuple

from ..errors import LocationError
from ..http import DEFAULT_TIMEOUT, get_json
from ..models import FavoriteCity
from .adapter import is_valid_coordinate

if TYPE_CHECKING:
    from ..config import PluginConfig

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
AMAP_GEO_URL = "https://restapi.amap.com/v3/geocode/geo"


class CityGeocoder(ABC):
    provider_id: str = "abstract"

    @abstractmethod
    def lookup(self, name: str) -> Tuple[float, float]:
        """Return ``(lat, lon)`` for the best match; raise LocationError otherwise."""
        raise NotImplementedError

    def geocode_city(self, name: str) -> FavoriteCity:
        query = name.strip()
        if not query:
            raise LocationError(self.provider_id, "City name is empty")
        lat, lon = self.lookup(query)
        if not is_valid_coordinate(lat, lon):
            raise LocationError(self.provider_id, f"No usable coordinates for {query}")
        logger.info(f"Geocoded {query} to {lat:.4f}, {lon:.4f}")
        return FavoriteCity(name=query, lat=lat, lon=lon)

    def _not_found(self, name: str) -> LocationError:
        return LocationError(
            self.provider_id,
            f"City not found: {name}",
            suggestion="Pass LAT and LON explicitly, e.g. 'weatherloc favorites add 长沙 28.23 112.94'",
        )


def _to_float(value: Any) -> float:
    return float(str(value).strip())


class NominatimGeocoder(CityGeocoder):
    provider_id = "nominatim"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout

    def lookup(self, name: str) -> Tuple[float, float]:
        logger.info("Calling Nominatim search API")
        status, data = get_json(
            self.provider_id,
            NOMINATIM_URL,
            params={"format": "json", "q": name, "limit": 1},
            timeout=self._timeout,
            error_cls=LocationError,
        )
        if status >= 400:
            raise LocationError(self.provider_id, f"Geocoding failed: {status}", status_code=status)
        if not isinstance(data, list) or not data:
            raise self._not_found(name)
        try:
            return _to_float(data[0]["lat"]), _to_float(data[0]["lon"])
        except (KeyError, TypeError, ValueError):
            raise LocationError(self.provider_id, "Malformed geocoding result")


class AmapGeocoder(CityGeocoder):
    provider_id = "amap"

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        if not api_key:
            raise ValueError("api_key must be non-empty")
        self._api_key = api_key
        self._timeout = timeout

    def lookup(self, name: str) -> Tuple[float, float]:
        logger.info("Calling Amap geocoding API")
        _, data = get_json(
            self.provider_id,
            AMAP_GEO_URL,
            params={"key": self._api_key, "address": name},
            timeout=self._timeout,
            error_cls=LocationError,
        )
        if not isinstance(data, dict) or data.get("status") != "1":
            info = data.get("info") if isinstance(data, dict) else None
            raise LocationError(self.provider_id, f"Geocoding failed: {info or 'no result'}")
        geocodes = data.get("geocodes") or []
        if not geocodes:
            raise self._not_found(name)
        # Amap reports "lon,lat"
        location = geocodes[0].get("location")
        try:
            lon_text, lat_text = str(location).split(",", 1)
            return _to_float(lat_text), _to_float(lon_text)
        except ValueError:
            raise LocationError(self.provider_id, "Malformed geocoding result")


def resolve_geocoder(config: "PluginConfig") -> CityGeocoder:
    if config.amap_key:
        return AmapGeocoder(api_key=config.amap_key, timeout=config.request_timeout)
    return NominatimGeocoder(timeout=config.request_timeout)


def geocode_city(config: "PluginConfig", name: str) -> FavoriteCity:
    """Resolve ``name`` to a favourite city with the configured geocoder."""
    return resolve_geocoder(config).geocode_city(name)
