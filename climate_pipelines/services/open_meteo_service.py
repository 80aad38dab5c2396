"""Service for fetching geocoding and ERA5 archive data from Open-Meteo."""
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple
import requests

from climate_pipelines.config import (
    ARCHIVE_URL,
    DAILY_VARIABLES,
    GEOCODING_URL,
    HOURLY_VARIABLES,
    NORMALS_END_DATE,
    NORMALS_START_DATE,
    NORMALS_TIMEOUT_SECONDS,
    NORMALS_VARIABLE,
    REQUEST_TIMEOUT_SECONDS,
    USER_AGENT,
)
from climate_pipelines.errors import (
    CityNotFoundError,
    NormalsUnavailableError,
    RateLimitedError,
    WeatherFetchError,
)
from climate_pipelines.models.location import Location
from climate_pipelines.models.weather import DailyWeather, HourlyWeather
from climate_pipelines.utils.calendar_utils import enumerate_dates
from climate_pipelines.utils.series_utils import to_number_or_none

logger = logging.getLogger(__name__)


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


class OpenMeteoService:
    """Client for the Open-Meteo geocoding and ERA5 archive APIs (no API key)."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        geocoding_url: str = GEOCODING_URL,
        archive_url: str = ARCHIVE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """
        Initialize the client.

        Args:
            session: Shared HTTP session (one is created if omitted)
            geocoding_url: Geocoding search endpoint
            archive_url: ERA5 archive endpoint
            timeout: Per-request timeout in seconds
        """
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)
        self.geocoding_url = geocoding_url
        self.archive_url = archive_url
        self.timeout = timeout

    def _get_json(self, url: str, params: dict, what: str, timeout: Optional[float] = None) -> dict:
        """GET a JSON document, translating HTTP failures into WeatherFetchError."""
        try:
            resp = self.session.get(url, params=params, timeout=timeout or self.timeout)
        except requests.RequestException as exc:
            raise WeatherFetchError(f"Failed to load {what}: {exc}") from exc

        if resp.status_code == 429:
            raise RateLimitedError(
                "Too many requests. Please wait a moment and try again.",
                status_code=429,
            )
        if not resp.ok:
            raise WeatherFetchError(
                f"Failed to load {what} ({resp.status_code})",
                status_code=resp.status_code,
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            raise WeatherFetchError(f"Invalid JSON in {what} response") from exc
        return payload if isinstance(payload, dict) else {}

    # --- Geocoding ---

    def suggest_cities(self, name: str, limit: int = 8) -> List[Location]:
        """Return up to `limit` geocoding matches for a free-text city name."""
        if not name or not name.strip():
            return []
        payload = self._get_json(
            self.geocoding_url,
            {"name": name.strip(), "count": limit, "language": "en"},
            "city suggestions",
        )
        return [Location.from_geocoding_result(r) for r in _as_list(payload.get("results"))]

    def search_city(self, name: str) -> Location:
        """Return the best geocoding match for a city name."""
        matches = self.suggest_cities(name, limit=1)
        if not matches:
            raise CityNotFoundError(f"City not found: {name}")
        return matches[0]

    # --- Archive ---

    def fetch_daily(self, latitude: float, longitude: float, start: str, end: str) -> DailyWeather:
        """
        Fetch daily min/mean/max temperature, precipitation and max wind.

        The request end is clamped to today. The result has one entry for
        every date from start to end; dates the archive does not cover
        hold None.
        """
        today = date.today().isoformat()
        actual_end = today if end > today else end
        payload = self._get_json(
            self.archive_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start,
                "end_date": actual_end,
                "daily": ",".join(DAILY_VARIABLES),
                "timezone": "UTC",
            },
            "daily data",
        )
        by_date = self._build_daily_map(payload.get("daily") or {})

        result = DailyWeather()
        for d in enumerate_dates(start, end):
            entry = by_date.get(d, {})
            result.dates.append(d)
            result.tmin.append(entry.get("tmin"))
            result.tmean.append(entry.get("tmean"))
            result.tmax.append(entry.get("tmax"))
            result.precip.append(entry.get("precip"))
            result.wind_max.append(entry.get("wind_max"))
        return result

    def _build_daily_map(self, daily: dict) -> Dict[str, Dict[str, Optional[float]]]:
        columns = {
            "tmin": _as_list(daily.get("temperature_2m_min")),
            "tmean": _as_list(daily.get("temperature_2m_mean")),
            "tmax": _as_list(daily.get("temperature_2m_max")),
            "precip": _as_list(daily.get("precipitation_sum")),
            "wind_max": _as_list(daily.get("windspeed_10m_max")),
        }
        by_date = {}
        for i, d in enumerate(_as_list(daily.get("time"))):
            by_date[d] = {
                key: to_number_or_none(values[i]) if i < len(values) else None
                for key, values in columns.items()
            }
        return by_date

    def fetch_hourly(self, latitude: float, longitude: float, start: str, end: str) -> HourlyWeather:
        """Fetch hourly relative humidity and wind speed."""
        today = date.today().isoformat()
        actual_end = today if end > today else end
        payload = self._get_json(
            self.archive_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": start,
                "end_date": actual_end,
                "hourly": ",".join(HOURLY_VARIABLES),
                "timezone": "UTC",
            },
            "hourly data",
        )
        hourly = payload.get("hourly") or {}
        return HourlyWeather(
            time=_as_list(hourly.get("time")),
            humidity=_as_list(hourly.get("relative_humidity_2m")),
            wind=_as_list(hourly.get("windspeed_10m")),
        )

    def fetch_normals_series(self, latitude: float, longitude: float) -> Tuple[List[str], list]:
        """
        Fetch the 30-year daily mean temperature series used for normals.

        Raises:
            NormalsUnavailableError: if the payload has no series or the
                date and value arrays differ in length
            WeatherFetchError: if the request itself fails
        """
        payload = self._get_json(
            self.archive_url,
            {
                "latitude": latitude,
                "longitude": longitude,
                "start_date": NORMALS_START_DATE,
                "end_date": NORMALS_END_DATE,
                "daily": NORMALS_VARIABLE,
                "timezone": "UTC",
            },
            "climate normals",
            timeout=NORMALS_TIMEOUT_SECONDS,
        )
        daily = payload.get("daily") or {}
        times = daily.get("time")
        temps = daily.get(NORMALS_VARIABLE)
        if not isinstance(times, list) or not isinstance(temps, list) or len(times) != len(temps):
            raise NormalsUnavailableError("Climate normals unavailable for this location")

        logger.debug("Fetched %d normals samples for (%.4f, %.4f)", len(times), latitude, longitude)
        return times, temps
