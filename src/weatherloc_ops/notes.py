"""
notes.py - Render note fragments from configuration and live data.

CLI commands (and any future host integration) delegate here: pick the
template, collect the context, render, optionally insert into a document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from weatherloc_core.config import PluginConfig
from weatherloc_core.errors import WeatherLocError
from weatherloc_core.template_engine import TemplateEngine
from weatherloc_core.templates import get_builtin_template

from .context import collect_city_context, collect_template_context
from .document import InsertResult, insert_content
from .favorites import require_favorite
from .services import LocationService, WeatherService

logger = logging.getLogger(__name__)


@dataclass
class RenderedNote:
    text: str
    context: Dict[str, Any]
    unresolved: List[str] = field(default_factory=list)


def resolve_template_text(
    config: PluginConfig,
    *,
    builtin: Optional[str] = None,
    template_file: Optional[Path] = None,
) -> str:
    """Template precedence: file, then built-in name, then the configured template."""
    if builtin and template_file:
        raise WeatherLocError("Choose either a built-in template or a template file, not both")
    if template_file is not None:
        try:
            return template_file.read_text(encoding="utf-8")
        except OSError as e:
            raise WeatherLocError(f"Cannot read template file {template_file}: {e}")
    if builtin:
        return get_builtin_template(builtin)
    return config.template


def render_note(
    config: PluginConfig,
    weather_service: WeatherService,
    location_service: Optional[LocationService] = None,
    *,
    template: Optional[str] = None,
    city: Optional[str] = None,
    now: Optional[datetime] = None,
) -> RenderedNote:
    """Render ``template`` (default: the configured one) for the current location or a saved city."""
    text = config.template if template is None else template

    if city:
        favorite = require_favorite(config, city)
        context = collect_city_context(
            weather_service, favorite, now=now, time_format=config.time_format
        )
    else:
        if location_service is None:
            raise ValueError("location_service is required without a city")
        context = collect_template_context(
            weather_service, location_service, now=now, time_format=config.time_format
        )

    unresolved: List[str] = []
    engine = TemplateEngine(on_unresolved=unresolved.append)
    rendered = engine.render(text, context)
    if unresolved:
        logger.warning(f"Template left {len(unresolved)} variable(s) unresolved: {', '.join(sorted(set(unresolved)))}")
    return RenderedNote(text=rendered, context=context, unresolved=unresolved)


def insert_note(
    document: Path,
    note: RenderedNote,
    *,
    block_id: Optional[str] = None,
    replace: bool = False,
) -> InsertResult:
    if not note.text.strip():
        raise WeatherLocError("Rendered note is empty; nothing to insert")
    return insert_content(document, note.text, block_id=block_id, replace=replace)
