"""
template_engine.py - Minimal zero-dependency template engine for note fragments.

Supports:
- {{variable}} replacement against top-level context keys
- {{a.b.c}} replacement by walking nested mappings
- {{#if path}} ... {{else}} ... {{/if}} conditionals (not nested)
- {{#each path}} ... {{/each}} loops with @index, @item and @item.<field>

Rendering is a fixed four-pass pipeline: simple variables, path variables,
conditionals, loops. Each pass only sees the output of the passes before it.
Unresolved variables are left verbatim in the output; the engine never raises
for template content.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

UnresolvedCallback = Callable[[str], None]


def is_truthy(value: Any) -> bool:
    """Map a resolved context value to a branch decision."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, Mapping):
        return len(value) > 0
    return True


def to_text(value: Any) -> str:
    """Default string form used when a value is substituted into text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    if isinstance(value, Mapping):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


def resolve_path(context: Any, path: str) -> Tuple[bool, Any]:
    """Walk ``path`` (dot separated) from ``context``.

    Returns ``(found, value)``. ``found`` is False as soon as a segment is
    missing or the value holding it is not a mapping.
    """
    curr = context
    for part in path.split("."):
        if not isinstance(curr, Mapping) or part not in curr:
            return False, None
        curr = curr[part]
    return True, curr


class TemplateEngine:
    _SIMPLE_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")
    _PATH_RE = re.compile(r"\{\{([A-Za-z0-9_.]+)\}\}")
    _IF_RE = re.compile(r"\{\{#if\s+([A-Za-z0-9_.]+)\}\}(.*?)\{\{/if\}\}", re.DOTALL | re.ASCII)
    _EACH_RE = re.compile(r"\{\{#each\s+([A-Za-z0-9_.]+)\}\}(.*?)\{\{/each\}\}", re.DOTALL | re.ASCII)
    _ELSE = "{{else}}"

    def __init__(self, on_unresolved: Optional[UnresolvedCallback] = None):
        self._on_unresolved = on_unresolved

    def render(self, template: str, context: Optional[Mapping[str, Any]]) -> str:
        """Render ``template`` against ``context``.

        An empty template or a missing (None) context renders to "".
        """
        if not template or context is None:
            return ""

        result = self._replace_simple_variables(template, context)
        result = self._replace_path_variables(result, context)
        result = self._replace_conditionals(result, context)
        result = self._replace_loops(result, context)
        return result

    def _unresolved(self, match: re.Match[str]) -> str:
        directive = match.group(0)
        logger.debug(f"Unresolved template variable: {directive}")
        if self._on_unresolved is not None:
            self._on_unresolved(directive)
        return directive

    def _replace_simple_variables(self, template: str, context: Mapping[str, Any]) -> str:
        def replacer(match: re.Match[str]) -> str:
            found, value = resolve_path(context, match.group(1))
            return to_text(value) if found else self._unresolved(match)

        return self._SIMPLE_RE.sub(replacer, template)

    def _replace_path_variables(self, template: str, context: Mapping[str, Any]) -> str:
        def replacer(match: re.Match[str]) -> str:
            path = match.group(1)
            if "." not in path:
                # Simple variables were handled (or left) by the previous pass.
                return match.group(0)
            found, value = resolve_path(context, path)
            return to_text(value) if found else self._unresolved(match)

        return self._PATH_RE.sub(replacer, template)

    def _replace_conditionals(self, template: str, context: Mapping[str, Any]) -> str:
        def replacer(match: re.Match[str]) -> str:
            _, value = resolve_path(context, match.group(1))
            parts = match.group(2).split(self._ELSE)
            if is_truthy(value):
                return parts[0]
            return parts[1] if len(parts) > 1 else ""

        return self._IF_RE.sub(replacer, template)

    def _replace_loops(self, template: str, context: Mapping[str, Any]) -> str:
        def replacer(match: re.Match[str]) -> str:
            _, items = resolve_path(context, match.group(1))
            if not isinstance(items, (list, tuple)) or not items:
                return ""
            body = match.group(2)
            return "".join(self._render_iteration(body, index, item) for index, item in enumerate(items))

        return self._EACH_RE.sub(replacer, template)

    @staticmethod
    def _render_iteration(body: str, index: int, item: Any) -> str:
        out = body.replace("@index", str(index))
        fields = {str(k): v for k, v in item.items()} if isinstance(item, Mapping) else {}
        # Longest names first so @item.ab is not clobbered by @item.a
        names = sorted(fields, key=len, reverse=True)
        alternatives = "|".join(re.escape(name) for name in names)
        pattern = re.compile(rf"@item(?:\.({alternatives}))?" if names else r"@item")

        def replacer(match: re.Match[str]) -> str:
            name = match.group(1) if names else None
            return to_text(fields[name]) if name is not None else to_text(item)

        # One pass, so substituted values are never rescanned.
        return pattern.sub(replacer, out)


_default_engine = TemplateEngine()


def render_template(template: str, context: Optional[Mapping[str, Any]]) -> str:
    """Render with a shared engine that has no diagnostic callback."""
    return _default_engine.render(template, context)
