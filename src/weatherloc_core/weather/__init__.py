from .adapter import WeatherProvider
from .factory import resolve_weather_provider
from .mock import MockWeatherProvider
from .units import parse_wind_speed, translate_description, wind_direction, wind_power

__all__ = [
    "WeatherProvider",
    "MockWeatherProvider",
    "resolve_weather_provider",
    "parse_wind_speed",
    "translate_description",
    "wind_direction",
    "wind_power",
]
