from __future__ import annotations

from ..models import WeatherReading
from .adapter import WeatherProvider


class MockWeatherProvider(WeatherProvider):
    """Deterministic provider for offline use and tests.

    Returns the same fair-weather reading for every coordinate.
    """

    provider_id = "mock"

    def __init__(self, reading: WeatherReading | None = None):
        self._reading = reading or WeatherReading(
            description="晴朗",
            temperature=25,
            humidity=60,
            wind_speed=3.5,
            pressure=1013,
            visibility=10,
            icon="01d",
            feels_like=26,
            temp_min=20,
            temp_max=28,
            wind_direction="东南风",
            wind_power="3级",
        )
        self.calls = 0

    def get_weather(self, lat: float, lon: float) -> WeatherReading:
        self.calls += 1
        return self._reading.model_copy()
