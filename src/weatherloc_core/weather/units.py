"""Unit conversions and vocabulary shared by the weather providers."""

import math
from typing import Dict

_DIRECTIONS = ["北风", "东北风", "东风", "东南风", "南风", "西南风", "西风", "西北风"]

# (upper bound in m/s, label); Beaufort scale
_WIND_POWER_LEVELS = [
    (0.3, "无风"),
    (1.6, "1级"),
    (3.4, "2级"),
    (5.5, "3级"),
    (8.0, "4级"),
    (10.8, "5级"),
    (13.9, "6级"),
    (17.2, "7级"),
    (20.8, "8级"),
    (24.5, "9级"),
    (28.5, "10级"),
    (32.7, "11级"),
]

# Approximate mid-range wind speed (m/s) for an Amap power level.
_LEVEL_SPEEDS: Dict[int, float] = {
    0: 0, 1: 1.5, 2: 3, 3: 5, 4: 7, 5: 9, 6: 12, 7: 15, 8: 19, 9: 23,
}

_DESCRIPTIONS: Dict[str, str] = {
    "clear sky": "晴朗",
    "few clouds": "少云",
    "scattered clouds": "多云",
    "broken clouds": "阴天",
    "shower rain": "阵雨",
    "rain": "雨",
    "light rain": "小雨",
    "moderate rain": "中雨",
    "heavy rain": "大雨",
    "thunderstorm": "雷雨",
    "snow": "雪",
    "mist": "雾",
    "overcast clouds": "阴",
    "light snow": "小雪",
    "heavy snow": "大雪",
}


def wind_direction(deg: float) -> str:
    """8-point compass name for a meteorological wind bearing."""
    index = int(math.floor(deg / 45 + 0.5)) % 8
    return _DIRECTIONS[index]


def wind_power(speed: float) -> str:
    for bound, label in _WIND_POWER_LEVELS:
        if speed < bound:
            return label
    return "12级"


def parse_wind_speed(power: str) -> float:
    """Convert an Amap wind power string ("≤3", "4", "5-6") to m/s."""
    text = power.strip()
    if "≤" in text:
        return 2.0
    if "-" in text:
        try:
            low, high = (float(p) for p in text.split("-", 1))
        except ValueError:
            return 3.0
        return (low + high) / 2
    try:
        level = int(text)
    except ValueError:
        return 3.0
    return _LEVEL_SPEEDS.get(level) or float(level * 2)


def translate_description(description: str) -> str:
    return _DESCRIPTIONS.get(description.lower(), description)
