from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import WeatherReading


class WeatherProvider(ABC):
    """Abstract base class for weather data sources."""

    provider_id: str = "abstract"

    @abstractmethod
    def get_weather(self, lat: float, lon: float) -> WeatherReading:
        """Return the current reading at the coordinates; raise WeatherError on failure."""
        raise NotImplementedError
