from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ConfigError
from .adapter import LocationProvider
from .mock import MockLocationProvider

if TYPE_CHECKING:
    from ..config import PluginConfig


def resolve_location_provider(config: "PluginConfig") -> LocationProvider:
    """Resolve the location adapter selected by configuration."""

    provider = config.location_provider.strip().lower()

    if provider == "mock":
        return MockLocationProvider()

    if provider == "ip":
        from .ipinfo import IpInfoLocationProvider

        return IpInfoLocationProvider(timeout=min(config.request_timeout, 3.0))

    if provider in {"manual", "amap"} and not config.manual_location.strip():
        raise ConfigError(
            f"Location provider '{provider}' requires manual_location",
            suggestion='Set manual_location = "city,lat,lon"',
        )

    if provider == "manual":
        from .manual import ManualLocationProvider

        return ManualLocationProvider(config.manual_location)

    if provider == "amap":
        if not config.amap_key:
            raise ConfigError(
                "Amap location requires an API key",
                suggestion="Set amap_key (or WEATHERLOC_AMAP_KEY)",
            )
        from .amap import AmapLocationProvider

        return AmapLocationProvider(
            api_key=config.amap_key,
            manual_location=config.manual_location,
            timeout=config.request_timeout,
        )

    raise ConfigError(f"Unknown location provider: {provider}")
