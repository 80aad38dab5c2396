"""API routes for weather series and year-over-year progressions."""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException

from climate_backend.config import settings
from climate_backend.schemas.weather import (
    ProgressionResponse,
    SeriesData,
    StatsData,
    WeatherSeriesResponse,
)
from climate_backend.services.weather_service import WeatherService
from climate_backend.api.dependencies import get_weather_service
from climate_pipelines.errors import CityNotFoundError, RateLimitedError, WeatherFetchError
from climate_pipelines.services.series_service import PERIOD_TYPES

router = APIRouter(prefix="/weather", tags=["weather"])


def _raise_http_error(error: Exception):
    if isinstance(error, CityNotFoundError):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, RateLimitedError):
        raise HTTPException(status_code=429, detail=str(error))
    raise HTTPException(status_code=502, detail=str(error))


@router.get("/series", response_model=WeatherSeriesResponse)
def get_weather_series(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    start_date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Start date (YYYY-MM-DD)"),
    end_date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="End date (YYYY-MM-DD)"),
    smoothing: int = Query(
        settings.default_smoothing_days,
        ge=0,
        le=settings.max_smoothing_days,
        description="Moving average window in days (0 = off)",
    ),
    include_normals: bool = Query(True, description="Add the climate normal series"),
    location_id: Optional[int] = Query(None),
    weather_service: WeatherService = Depends(get_weather_service),
) -> WeatherSeriesResponse:
    """
    Get daily weather for a date range with summary statistics.

    When normals are unavailable the `norm` series and `climate_dev`
    statistic are null; the rest of the response is unaffected.
    """
    for value in (start_date, end_date):
        try:
            date.fromisoformat(value)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    try:
        series, stats = weather_service.get_series(
            latitude,
            longitude,
            start_date,
            end_date,
            smoothing=smoothing,
            include_normals=include_normals,
            location_id=location_id,
        )
    except (CityNotFoundError, WeatherFetchError) as e:
        _raise_http_error(e)

    return WeatherSeriesResponse(
        latitude=latitude,
        longitude=longitude,
        start_date=start_date,
        end_date=end_date,
        smoothing=smoothing,
        series=SeriesData(**series.to_dict()),
        stats=StatsData(**stats.to_dict()),
    )


@router.get("/progression", response_model=ProgressionResponse)
def get_weather_progression(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    period_type: str = Query("year", pattern=rf"^({'|'.join(PERIOD_TYPES)})$"),
    period_value: str = Query("", description="Season name, month number or MM-DD"),
    year_from: int = Query(..., ge=1940),
    year_to: Optional[int] = Query(None, description="Last year (defaults to the current year)"),
    include_normals: bool = Query(True),
    location_id: Optional[int] = Query(None),
    weather_service: WeatherService = Depends(get_weather_service),
) -> ProgressionResponse:
    """
    Compare one period across a range of years.

    Each year is reduced to a single point (mean temperatures, total
    precipitation), and the per-year statistics are aggregated.
    """
    year_to = year_to or date.today().year
    if year_from > year_to:
        raise HTTPException(status_code=400, detail="year_from must not be after year_to")

    try:
        years, series, yearly_stats, stats = weather_service.get_progression(
            latitude,
            longitude,
            period_type,
            period_value,
            year_from,
            year_to,
            include_normals=include_normals,
            location_id=location_id,
        )
    except ValueError as e:
        # Invalid period value, e.g. an unknown season
        raise HTTPException(status_code=400, detail=str(e))
    except WeatherFetchError as e:
        _raise_http_error(e)

    return ProgressionResponse(
        latitude=latitude,
        longitude=longitude,
        period_type=period_type,
        period_value=period_value,
        years=years,
        series=SeriesData(**series.to_dict()),
        yearly_stats=[StatsData(**s.to_dict()) for s in yearly_stats],
        stats=StatsData(**stats.to_dict()),
    )
