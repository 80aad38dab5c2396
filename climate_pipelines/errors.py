"""Exceptions raised by the weather data source."""
from typing import Optional


class CityNotFoundError(ValueError):
    """Raised when geocoding returns no match for a city name."""


class WeatherFetchError(RuntimeError):
    """Raised when an archive request fails or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(WeatherFetchError):
    """Raised when the archive API answers with HTTP 429."""


class NormalsUnavailableError(ValueError):
    """Raised when the normals source returned no usable series."""
