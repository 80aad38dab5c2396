"""Tests for the Open-Meteo client."""
from datetime import date, timedelta

import pytest
import requests

from climate_pipelines.config import NORMALS_END_DATE, NORMALS_START_DATE, NORMALS_TIMEOUT_SECONDS
from climate_pipelines.errors import (
    CityNotFoundError,
    NormalsUnavailableError,
    RateLimitedError,
    WeatherFetchError,
)
from climate_pipelines.services.open_meteo_service import OpenMeteoService

BERLIN = {
    "id": 2950159,
    "name": "Berlin",
    "latitude": 52.52437,
    "longitude": 13.41053,
    "country": "Germany",
    "admin1": "Land Berlin",
}


class TestGeocoding:
    """Tests for city search and suggestions."""

    def test_search_city(self, fake_session, fake_response):
        session = fake_session(fake_response({"results": [BERLIN]}))
        location = OpenMeteoService(session=session).search_city("Berlin")

        assert location.name == "Berlin"
        assert location.location_id == 2950159
        assert location.cache_key == "city_2950159"
        assert location.label == "Berlin, Land Berlin, Germany"
        assert session.calls[0]["params"] == {"name": "Berlin", "count": 1, "language": "en"}

    def test_search_city_not_found(self, fake_session, fake_response):
        session = fake_session(fake_response({"generationtime_ms": 0.1}))
        with pytest.raises(CityNotFoundError):
            OpenMeteoService(session=session).search_city("Atlantis")

    def test_suggest_blank_name_skips_request(self, fake_session):
        session = fake_session()
        assert OpenMeteoService(session=session).suggest_cities("   ") == []
        assert session.calls == []

    def test_suggest_cities_limit(self, fake_session, fake_response):
        session = fake_session(fake_response({"results": [BERLIN, dict(BERLIN, id=1, name="Berlin NH")]}))
        matches = OpenMeteoService(session=session).suggest_cities(" Berlin ", limit=5)

        assert [m.name for m in matches] == ["Berlin", "Berlin NH"]
        assert session.calls[0]["params"]["count"] == 5
        assert session.calls[0]["params"]["name"] == "Berlin"

    def test_user_agent_set(self, fake_session):
        session = fake_session()
        OpenMeteoService(session=session)
        assert "User-Agent" in session.headers


class TestErrors:
    """Tests for HTTP failure translation."""

    def test_rate_limited(self, fake_session, fake_response):
        session = fake_session(fake_response({}, status_code=429))
        with pytest.raises(RateLimitedError) as exc_info:
            OpenMeteoService(session=session).fetch_hourly(0, 0, "2023-01-01", "2023-01-02")
        assert exc_info.value.status_code == 429

    def test_server_error(self, fake_session, fake_response):
        session = fake_session(fake_response({}, status_code=503))
        with pytest.raises(WeatherFetchError) as exc_info:
            OpenMeteoService(session=session).suggest_cities("Berlin")
        assert exc_info.value.status_code == 503
        assert not isinstance(exc_info.value, RateLimitedError)

    def test_transport_error(self, fake_session):
        session = fake_session(requests.ConnectionError("boom"))
        with pytest.raises(WeatherFetchError):
            OpenMeteoService(session=session).suggest_cities("Berlin")

    def test_invalid_json(self, fake_session, fake_response):
        session = fake_session(fake_response(ValueError("not json")))
        with pytest.raises(WeatherFetchError):
            OpenMeteoService(session=session).suggest_cities("Berlin")


class TestArchive:
    """Tests for daily, hourly and normals archive requests."""

    def test_fetch_daily_fills_missing_dates(self, fake_session, fake_response):
        session = fake_session(fake_response({
            "daily": {
                "time": ["2023-01-01", "2023-01-03"],
                "temperature_2m_min": [1.0, 3.0],
                "temperature_2m_mean": [2.0, None],
                "temperature_2m_max": [3.0, 5.0],
                "precipitation_sum": [0.0, 1.2],
                "windspeed_10m_max": [10.0],
            }
        }))
        daily = OpenMeteoService(session=session).fetch_daily(52.5, 13.4, "2023-01-01", "2023-01-03")

        assert daily.dates == ["2023-01-01", "2023-01-02", "2023-01-03"]
        assert daily.tmin == [1.0, None, 3.0]
        assert daily.tmean == [2.0, None, None]
        assert daily.precip == [0.0, None, 1.2]
        assert daily.wind_max == [10.0, None, None]

    def test_fetch_daily_clamps_end_to_today(self, fake_session, fake_response):
        session = fake_session(fake_response({"daily": {}}))
        today = date.today()
        future = (today + timedelta(days=10)).isoformat()
        daily = OpenMeteoService(session=session).fetch_daily(0, 0, today.isoformat(), future)

        assert session.calls[0]["params"]["end_date"] == today.isoformat()
        # Dates beyond today are still listed, without data
        assert len(daily.dates) == 11
        assert all(v is None for v in daily.tmean)

    def test_fetch_hourly(self, fake_session, fake_response):
        session = fake_session(fake_response({
            "hourly": {
                "time": ["2023-01-01T00:00", "2023-01-01T01:00"],
                "relative_humidity_2m": [80, 82],
                "windspeed_10m": [12.0, 14.0],
            }
        }))
        hourly = OpenMeteoService(session=session).fetch_hourly(0, 0, "2023-01-01", "2023-01-01")
        assert hourly.time == ["2023-01-01T00:00", "2023-01-01T01:00"]
        assert hourly.humidity == [80, 82]
        assert hourly.wind == [12.0, 14.0]

    def test_fetch_normals_series(self, fake_session, fake_response):
        session = fake_session(fake_response({
            "daily": {"time": ["1991-01-01", "1991-01-02"], "temperature_2m_mean": [0.5, None]}
        }))
        times, temps = OpenMeteoService(session=session).fetch_normals_series(52.5, 13.4)

        assert times == ["1991-01-01", "1991-01-02"]
        assert temps == [0.5, None]
        call = session.calls[0]
        assert call["params"]["start_date"] == NORMALS_START_DATE
        assert call["params"]["end_date"] == NORMALS_END_DATE
        assert call["timeout"] == NORMALS_TIMEOUT_SECONDS

    @pytest.mark.parametrize("daily", [
        {},
        {"time": ["1991-01-01"], "temperature_2m_mean": None},
        {"time": ["1991-01-01", "1991-01-02"], "temperature_2m_mean": [1.0]},
    ])
    def test_fetch_normals_series_unavailable(self, fake_session, fake_response, daily):
        session = fake_session(fake_response({"daily": daily}))
        with pytest.raises(NormalsUnavailableError):
            OpenMeteoService(session=session).fetch_normals_series(0, 0)
