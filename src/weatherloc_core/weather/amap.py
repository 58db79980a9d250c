"""Amap (高德地图) weather adapter.

Amap forecasts are keyed by administrative code, so a lookup first reverse
geocodes the coordinates to an adcode. Adcodes are cached for an hour per
coordinate pair rounded to two decimals.
"""

import logging
from typing import Any, Dict, Optional

from ..cache import TTLCache
from ..errors import WeatherError
from ..http import DEFAULT_TIMEOUT, get_json
from ..models import WeatherReading
from .adapter import WeatherProvider
from .units import parse_wind_speed

logger = logging.getLogger(__name__)

REGEO_URL = "https://restapi.amap.com/v3/geocode/regeo"
WEATHER_URL = "https://restapi.amap.com/v3/weather/weatherInfo"

# Amap does not report these for forecasts.
DEFAULT_HUMIDITY = 60
DEFAULT_PRESSURE = 1013
DEFAULT_VISIBILITY = 10


def _to_int(value: Any, default: int) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


class AmapWeatherProvider(WeatherProvider):
    """Weather adapter for the Amap v3 weather API."""

    provider_id = "amap"

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        adcode_ttl_seconds: float = 3600,
    ):
        if not api_key:
            raise ValueError("api_key must be non-empty")
        self._api_key = api_key
        self._timeout = timeout
        self._adcodes = TTLCache(ttl_seconds=adcode_ttl_seconds)

    def clear_cache(self) -> None:
        self._adcodes.clear()

    def resolve_adcode(self, lat: float, lon: float) -> str:
        key = f"{lat:.2f},{lon:.2f}"
        adcode = self._adcodes.get(key)
        if adcode:
            logger.debug(f"Using cached Amap adcode: {adcode}")
            return adcode

        logger.info("Calling Amap reverse geocoding API")
        _, data = get_json(
            self.provider_id,
            REGEO_URL,
            params={"key": self._api_key, "location": f"{lon},{lat}", "extensions": "base"},
            timeout=self._timeout,
            error_cls=WeatherError,
        )
        if not isinstance(data, dict) or data.get("status") != "1" or not data.get("regeocode"):
            raise WeatherError(self.provider_id, "Reverse geocoding failed")

        component = data["regeocode"].get("addressComponent") or {}
        adcode = component.get("adcode") or ""
        if not isinstance(adcode, str) or not adcode:
            raise WeatherError(self.provider_id, "Reverse geocoding returned no adcode")

        self._adcodes.set(key, adcode)
        return adcode

    def get_weather(self, lat: float, lon: float) -> WeatherReading:
        adcode = self.resolve_adcode(lat, lon)

        logger.info("Calling Amap weather API")
        _, data = get_json(
            self.provider_id,
            WEATHER_URL,
            params={"key": self._api_key, "city": adcode, "extensions": "all"},
            timeout=self._timeout,
            error_cls=WeatherError,
        )
        if not isinstance(data, dict) or data.get("status") != "1" or not data.get("forecasts"):
            raise WeatherError(self.provider_id, "Weather API returned no forecast")

        casts = data["forecasts"][0].get("casts") or []
        today: Optional[Dict[str, Any]] = casts[0] if casts else None
        return self._from_cast(today)

    @staticmethod
    def _from_cast(today: Optional[Dict[str, Any]]) -> WeatherReading:
        today = today or {}
        power = str(today.get("daypower") or "3")
        day_temp = _to_int(today.get("daytemp"), 25)

        return WeatherReading(
            description=today.get("dayweather") or "晴朗",
            temperature=day_temp,
            humidity=DEFAULT_HUMIDITY,
            wind_speed=parse_wind_speed(power),
            pressure=DEFAULT_PRESSURE,
            visibility=DEFAULT_VISIBILITY,
            icon="",
            temp_min=_to_int(today.get("nighttemp"), 20),
            temp_max=_to_int(today.get("daytemp"), 28),
            wind_direction=today.get("daywind") or "东南风",
            wind_power=f"{power}级",
        )
