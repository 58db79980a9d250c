"""Exception taxonomy for weatherloc-core."""

from pathlib import Path
from typing import Optional


class WeatherLocError(Exception):
    """Base exception for all weatherloc errors."""

    def __init__(self, message: str, suggestion: Optional[str] = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(message)


# Config errors


class ConfigError(WeatherLocError):
    """Failed to load, validate or persist configuration."""

    pass


# Provider errors


class ProviderError(WeatherLocError):
    """A weather or location provider call failed."""

    def __init__(
        self,
        provider_id: str,
        message: str,
        status_code: Optional[int] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.provider_id = provider_id
        self.status_code = status_code
        super().__init__(f"[{provider_id}] {message}", suggestion=suggestion)


class WeatherError(ProviderError):
    """Weather lookup failed."""

    pass


class LocationError(ProviderError):
    """Location lookup failed."""

    pass


# Template and document errors


class TemplateNotFoundError(WeatherLocError):
    """Built-in template name is unknown."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Template not found: {name}",
            suggestion="Use 'weatherloc templates list' to see available templates",
        )


class BlockNotFoundError(WeatherLocError):
    """Addressed block does not exist in the document."""

    def __init__(self, path: Path, block_id: str) -> None:
        self.path = path
        self.block_id = block_id
        super().__init__(f"Block ^{block_id} not found in {path}")


class FavoriteLimitError(WeatherLocError):
    """Favourite city list is full."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"At most {limit} favorite cities are allowed",
            suggestion="Remove a city with 'weatherloc favorites remove NAME' first",
        )
