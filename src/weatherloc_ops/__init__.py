"""
weatherloc_ops - Use-case functions for weather notes.

CLI commands delegate to these functions; this is an import-only package.

Modules:
    services: cached weather/location lookups
    context: template context assembly
    favorites: saved cities
    document: markdown block insertion
    notes: template selection, rendering and insertion
"""

from .services import (
    LocationService,
    WeatherService,
    create_location_service,
    create_weather_service,
)
from .context import build_template_context, collect_city_context, collect_template_context
from .favorites import (
    MAX_FAVORITE_CITIES,
    add_favorite,
    find_favorite,
    remove_favorite,
    require_favorite,
)
from .document import InsertResult, find_block, insert_content
from .notes import RenderedNote, insert_note, render_note, resolve_template_text

__all__ = [
    "LocationService",
    "WeatherService",
    "create_location_service",
    "create_weather_service",
    "build_template_context",
    "collect_city_context",
    "collect_template_context",
    "MAX_FAVORITE_CITIES",
    "add_favorite",
    "find_favorite",
    "remove_favorite",
    "require_favorite",
    "InsertResult",
    "find_block",
    "insert_content",
    "RenderedNote",
    "insert_note",
    "render_note",
    "resolve_template_text",
]
