"""Thin JSON-over-HTTP helper shared by the providers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Type

import requests

from .errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
USER_AGENT = "weatherloc/0.1"


def get_json(
    provider_id: str,
    url: str,
    *,
    params: Optional[Dict[str, Any]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    headers: Optional[Dict[str, str]] = None,
    error_cls: Type[ProviderError] = ProviderError,
) -> Tuple[int, Any]:
    """GET ``url`` and decode the JSON body.

    Returns ``(status_code, payload)``; callers map non-2xx statuses to their
    own messages. Transport failures and undecodable bodies raise ``error_cls``.
    """
    merged_headers = {"User-Agent": USER_AGENT}
    if headers:
        merged_headers.update(headers)

    logger.debug(f"GET {url} ({provider_id})")
    try:
        response = requests.get(url, params=params, headers=merged_headers, timeout=timeout)
    except requests.Timeout as e:
        raise error_cls(provider_id, f"Request timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise error_cls(
            provider_id,
            f"Request failed: {e}",
            suggestion="Check the network connection or proxy settings",
        ) from e

    try:
        payload = response.json()
    except ValueError as e:
        if not response.ok:
            return response.status_code, None
        raise error_cls(
            provider_id,
            "Response is not valid JSON",
            status_code=response.status_code,
        ) from e
    return response.status_code, payload
