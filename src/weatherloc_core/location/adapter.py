from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import LocationFix


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Range check that also rejects the (0, 0) placeholder some services return."""
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        return False
    return not (lat == 0 and lon == 0)


class LocationProvider(ABC):
    """Abstract base class for location sources."""

    provider_id: str = "abstract"

    @abstractmethod
    def locate(self) -> LocationFix:
        """Return the best-effort current fix; raise LocationError on failure."""
        raise NotImplementedError
