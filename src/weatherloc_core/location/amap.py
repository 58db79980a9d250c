"""Reverse geocoding of configured coordinates via Amap (高德地图).

There is no device geolocation outside the host application, so the
coordinates come from the ``manual_location`` setting and Amap fills in the
address hierarchy down to street number.
"""

import logging
from typing import Any

from ..errors import LocationError
from ..http import DEFAULT_TIMEOUT, get_json
from ..models import LocationFix
from .adapter import LocationProvider
from .manual import parse_manual_location

logger = logging.getLogger(__name__)

REGEO_URL = "https://restapi.amap.com/v3/geocode/regeo"


def _text(value: Any) -> str:
    # Amap encodes empty fields as []
    return value if isinstance(value, str) else ""


class AmapLocationProvider(LocationProvider):
    provider_id = "amap"

    def __init__(self, api_key: str, manual_location: str, timeout: float = DEFAULT_TIMEOUT):
        if not api_key:
            raise ValueError("api_key must be non-empty")
        self._api_key = api_key
        self._manual_location = manual_location
        self._timeout = timeout

    def locate(self) -> LocationFix:
        _, _, lat, lon = parse_manual_location(self._manual_location)

        logger.info("Calling Amap reverse geocoding API (detailed address)")
        _, data = get_json(
            self.provider_id,
            REGEO_URL,
            params={"key": self._api_key, "location": f"{lon},{lat}", "extensions": "all"},
            timeout=self._timeout,
            error_cls=LocationError,
        )
        if not isinstance(data, dict) or data.get("status") != "1" or not data.get("regeocode"):
            info = data.get("info") if isinstance(data, dict) else None
            raise LocationError(self.provider_id, f"Reverse geocoding failed: {info or 'no result'}")

        regeocode = data["regeocode"]
        address = regeocode.get("addressComponent") or {}
        street_number = address.get("streetNumber")
        if isinstance(street_number, dict):
            street = _text(street_number.get("street"))
            number = _text(street_number.get("number"))
        else:
            street = _text(address.get("street"))
            number = _text(street_number) or _text(address.get("number"))

        province = _text(address.get("province"))
        return LocationFix(
            city=_text(address.get("city")) or province or "未知",
            country="中国",
            lat=lat,
            lon=lon,
            formatted_address=_text(regeocode.get("formatted_address")),
            source="gps",
            province=province,
            district=_text(address.get("district")),
            township=_text(address.get("township")),
            street=street,
            street_number=number,
            region=province,
        )
