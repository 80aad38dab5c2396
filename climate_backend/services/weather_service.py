"""Service for weather series, statistics and year-over-year progressions."""
from typing import List, Optional, Tuple

from climate_backend.services.normals_service import NormalsService
from climate_pipelines.models.weather import WeatherSeries, WeatherStats
from climate_pipelines.services.hourly_aggregator import HourlyAggregator
from climate_pipelines.services.open_meteo_service import OpenMeteoService
from climate_pipelines.services.series_service import SeriesService
from climate_pipelines.utils.calendar_utils import add_days


class WeatherService:
    """Service for date-range weather series operations."""

    def __init__(
        self,
        data_service: OpenMeteoService = None,
        normals_service: NormalsService = None,
    ):
        self.data_service = data_service or OpenMeteoService()
        self.normals_service = normals_service or NormalsService(data_service=self.data_service)
        self.aggregator = HourlyAggregator()
        self.series_service = SeriesService()

    def _load_series(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
        normals,
    ) -> WeatherSeries:
        """Fetch daily and hourly data for a range and assemble the series."""
        daily = self.data_service.fetch_daily(latitude, longitude, start_date, end_date)
        hourly = self.data_service.fetch_hourly(latitude, longitude, start_date, end_date)
        humidity = self.aggregator.aggregate_daily(hourly.time, hourly.humidity)
        wind = self.aggregator.aggregate_daily(hourly.time, hourly.wind)
        return self.series_service.build_series(daily, humidity, wind, normals)

    def get_series(
        self,
        latitude: float,
        longitude: float,
        start_date: str,
        end_date: str,
        smoothing: int = 0,
        include_normals: bool = True,
        location_id: Optional[int] = None,
    ) -> Tuple[WeatherSeries, WeatherStats]:
        """
        Get the weather series and statistics for a date range.

        With smoothing, the range is padded by half the window on both sides
        before fetching, then trimmed back after the moving average.
        """
        half_window = smoothing // 2
        padded_start = add_days(start_date, -half_window) if smoothing > 0 else start_date
        padded_end = add_days(end_date, half_window) if smoothing > 0 else end_date

        normals = None
        if include_normals:
            normals = self.normals_service.get_normals(latitude, longitude, location_id)

        series = self._load_series(latitude, longitude, padded_start, padded_end, normals)
        if smoothing > 0:
            series = self.series_service.apply_smoothing_and_trim(series, smoothing, start_date, end_date)
        return series, self.series_service.compute_stats(series)

    def get_progression(
        self,
        latitude: float,
        longitude: float,
        period_type: str,
        period_value: str,
        year_from: int,
        year_to: int,
        include_normals: bool = True,
        location_id: Optional[int] = None,
    ) -> Tuple[List[int], WeatherSeries, List[WeatherStats], WeatherStats]:
        """
        Compare one period (year, season, month or day) across a range of years.

        Returns:
            (years, per-year series, per-year stats, aggregated stats)
        """
        normals = None
        if include_normals:
            normals = self.normals_service.get_normals(latitude, longitude, location_id)

        years = list(range(year_from, year_to + 1))
        all_series = []
        all_stats = []
        for year in years:
            start_date, end_date = self.series_service.get_period_dates(year, period_type, period_value)
            series = self._load_series(latitude, longitude, start_date, end_date, normals)
            all_series.append(series)
            all_stats.append(self.series_service.compute_stats(series))

        progression = self.series_service.aggregate_series_for_progression(
            all_series, [str(y) for y in years]
        )
        return years, progression, all_stats, self.series_service.aggregate_progression_stats(all_stats)
