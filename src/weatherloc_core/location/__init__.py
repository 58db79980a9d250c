from .adapter import LocationProvider, is_valid_coordinate
from .factory import resolve_location_provider
from .geocode import AmapGeocoder, CityGeocoder, NominatimGeocoder, geocode_city, resolve_geocoder
from .manual import ManualLocationProvider, parse_manual_location
from .mock import MockLocationProvider
from .names import translate_city_name

__all__ = [
    "AmapGeocoder",
    "CityGeocoder",
    "NominatimGeocoder",
    "geocode_city",
    "resolve_geocoder",
    "LocationProvider",
    "ManualLocationProvider",
    "MockLocationProvider",
    "is_valid_coordinate",
    "parse_manual_location",
    "resolve_location_provider",
    "translate_city_name",
]
