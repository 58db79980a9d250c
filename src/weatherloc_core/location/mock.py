from typing import Optional

from ..models import LocationFix
from .adapter import LocationProvider


class MockLocationProvider(LocationProvider):
    """Deterministic fix for offline use and tests."""

    provider_id = "mock"

    def __init__(self, fix: Optional[LocationFix] = None):
        self._fix = fix or LocationFix(
            city="长沙",
            country="中国",
            lat=28.23,
            lon=112.94,
            formatted_address="湖南省长沙市岳麓区",
            source="mock",
            province="湖南省",
            district="岳麓区",
            region="湖南省",
        )
        self.calls = 0

    def locate(self) -> LocationFix:
        self.calls += 1
        return self._fix.model_copy()
