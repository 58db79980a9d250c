"""IP geolocation via ipinfo.io."""

import logging
from typing import Any, Optional, Tuple

from ..errors import LocationError
from ..http import get_json
from ..models import LocationFix
from .adapter import LocationProvider, is_valid_coordinate
from .names import translate_city_name

logger = logging.getLogger(__name__)

API_URL = "https://ipinfo.io/json"
DEFAULT_TIMEOUT = 3.0


def _parse_loc(loc: Any) -> Optional[Tuple[float, float]]:
    if not isinstance(loc, str) or "," not in loc:
        return None
    lat_text, lon_text = loc.split(",", 1)
    try:
        return float(lat_text), float(lon_text)
    except ValueError:
        return None


class IpInfoLocationProvider(LocationProvider):
    """Locate by public IP. Accuracy is city level and suffers behind proxies."""

    provider_id = "ip"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout

    def locate(self) -> LocationFix:
        logger.info("Calling ipinfo.io")
        status, data = get_json(self.provider_id, API_URL, timeout=self._timeout, error_cls=LocationError)
        if status >= 400 or not isinstance(data, dict):
            raise LocationError(self.provider_id, f"ipinfo.io failed: {status}", status_code=status)

        coords = _parse_loc(data.get("loc"))
        if coords is None or not is_valid_coordinate(*coords):
            raise LocationError(
                self.provider_id,
                "ipinfo.io returned no usable coordinates",
                suggestion='Configure a manual location, e.g. manual_location = "长沙,28.23,112.94"',
            )
        lat, lon = coords

        city = translate_city_name(data.get("city") or "未知")
        region = translate_city_name(data.get("region") or "")
        country = data.get("country") or ""
        address = ", ".join(p for p in (city, region, country) if p)

        fix = LocationFix(
            city=city,
            country=country or "未知",
            lat=lat,
            lon=lon,
            ip=data.get("ip") or "",
            timezone=data.get("timezone") or "",
            formatted_address=address,
            source="ip",
            province=region,
            region=region,
        )
        logger.info(f"ipinfo.io located {fix.city}")
        return fix
