"""Data models for the weather and location parts of a template context."""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class WeatherReading(BaseModel):
    """A single current-weather observation."""

    description: str = Field(..., description="Human readable condition, e.g. 晴朗")
    temperature: float = Field(..., description="Current temperature (°C)")
    humidity: float = Field(..., description="Relative humidity (%)")
    wind_speed: float = Field(..., alias="windSpeed", description="Wind speed (m/s)")
    pressure: float = Field(..., description="Pressure (hPa)")
    visibility: float = Field(..., description="Visibility (km)")
    icon: str = Field(default="", description="Provider icon code")
    feels_like: Optional[float] = Field(None, alias="feelsLike")
    temp_min: Optional[float] = Field(None, alias="tempMin")
    temp_max: Optional[float] = Field(None, alias="tempMax")
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    wind_direction: Optional[str] = Field(None, alias="windDirection")
    wind_power: Optional[str] = Field(None, alias="windPower")

    model_config = ConfigDict(populate_by_name=True)

    def to_context(self) -> Dict[str, Any]:
        """Template-facing mapping; missing optionals are left out entirely."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LocationFix(BaseModel):
    """Best-effort geographic fix."""

    city: str
    country: str = ""
    lat: float
    lon: float
    ip: Optional[str] = None
    timezone: Optional[str] = None
    formatted_address: Optional[str] = None
    source: Optional[Literal["gps", "ip", "manual", "mock"]] = None

    # Address hierarchy as reported by reverse geocoding
    province: str = ""
    district: str = ""
    township: str = ""
    street: str = ""
    street_number: str = Field(default="", alias="streetNumber")

    # Older templates use region for the province
    region: str = ""

    model_config = ConfigDict(populate_by_name=True)

    def to_context(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class FavoriteCity(BaseModel):
    """A saved city that can be used instead of the current location."""

    name: str = Field(..., min_length=1)
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_location(self) -> LocationFix:
        return LocationFix(
            city=self.name,
            lat=self.lat,
            lon=self.lon,
            formatted_address="",
            source="manual",
        )
