"""OpenWeatherMap current-weather adapter."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..errors import WeatherError
from ..http import DEFAULT_TIMEOUT, get_json
from ..models import WeatherReading
from .adapter import WeatherProvider
from .units import translate_description, wind_direction, wind_power

logger = logging.getLogger(__name__)

API_URL = "https://api.openweathermap.org/data/2.5/weather"


def _format_clock(timestamp: Optional[int]) -> Optional[str]:
    if not timestamp:
        return None
    return datetime.fromtimestamp(timestamp).strftime("%H:%M:%S")


def _rounded(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(round(float(value)))


class OpenWeatherProvider(WeatherProvider):
    """Weather adapter for the OpenWeatherMap 2.5 API."""

    provider_id = "openweather"

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT):
        if not api_key:
            raise ValueError("api_key must be non-empty")
        self._api_key = api_key
        self._timeout = timeout

    def get_weather(self, lat: float, lon: float) -> WeatherReading:
        params = {
            "lat": lat,
            "lon": lon,
            "appid": self._api_key,
            "units": "metric",
            "lang": "zh_cn",
        }
        logger.info("Calling OpenWeatherMap API")
        status, data = get_json(
            self.provider_id, API_URL, params=params, timeout=self._timeout, error_cls=WeatherError
        )

        if status == 401:
            raise WeatherError(
                self.provider_id,
                "Invalid API key",
                status_code=status,
                suggestion="Check weather_api_key in the config file",
            )
        if status == 404:
            raise WeatherError(self.provider_id, "No weather data for this location", status_code=status)
        if status >= 400:
            raise WeatherError(self.provider_id, f"API error: {status}", status_code=status)

        return self._parse(data)

    def _parse(self, data: Any) -> WeatherReading:
        if not isinstance(data, dict) or not data.get("weather"):
            raise WeatherError(self.provider_id, "Malformed weather payload")

        condition: Dict[str, Any] = data["weather"][0] or {}
        main: Dict[str, Any] = data.get("main") or {}
        wind: Dict[str, Any] = data.get("wind") or {}
        sys_info: Dict[str, Any] = data.get("sys") or {}

        speed = float(wind.get("speed") or 0)
        visibility = data.get("visibility")

        return WeatherReading(
            description=translate_description(condition.get("description") or "未知"),
            temperature=_rounded(main.get("temp")) or 0,
            humidity=main.get("humidity") or 0,
            wind_speed=speed,
            pressure=main.get("pressure") or 0,
            visibility=visibility / 1000 if visibility else 10,
            icon=condition.get("icon") or "",
            feels_like=_rounded(main.get("feels_like")),
            temp_min=_rounded(main.get("temp_min")),
            temp_max=_rounded(main.get("temp_max")),
            sunrise=_format_clock(sys_info.get("sunrise")),
            sunset=_format_clock(sys_info.get("sunset")),
            wind_direction=wind_direction(float(wind.get("deg") or 0)),
            wind_power=wind_power(speed),
        )
