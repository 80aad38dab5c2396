"""Service for assembling chart series and summary statistics."""
from typing import List, Optional, Sequence, Tuple
import pandas as pd

from climate_pipelines.config import PRECIP_DAY_THRESHOLD_MM
from climate_pipelines.models.normals import ClimateNormals, DailyMeans
from climate_pipelines.models.weather import DailyWeather, WeatherSeries, WeatherStats
from climate_pipelines.services.normals_projector import NormalsProjector
from climate_pipelines.utils.calendar_utils import days_in_month, is_leap_year, parse_iso_date
from climate_pipelines.utils.series_utils import (
    array_max,
    array_mean,
    array_min,
    array_sum,
    finite_values,
)

SEASONS = {
    "winter": (12, 2),
    "spring": (3, 5),
    "summer": (6, 8),
    "fall": (9, 11),
}
PERIOD_TYPES = ("year", "season", "month", "day")


def rolling_average(values: Sequence[Optional[float]], window: int) -> List[Optional[float]]:
    """
    Centred moving average that ignores missing values.

    The window spans window // 2 entries on each side and is truncated at
    the edges. Positions whose window holds no value stay missing.
    """
    if window <= 0 or not values:
        return list(values)

    half_window = window // 2
    series = pd.Series(values, dtype="float64")
    smoothed = series.rolling(window=2 * half_window + 1, center=True, min_periods=1).mean()
    return [None if pd.isna(v) else float(v) for v in smoothed]


class SeriesService:
    """Builds date-aligned series and statistics from archive data and normals."""

    def __init__(self, projector: NormalsProjector = None):
        self.projector = projector or NormalsProjector()

    def build_series(
        self,
        daily: DailyWeather,
        humidity: DailyMeans,
        wind: DailyMeans,
        normals: Optional[ClimateNormals],
    ) -> WeatherSeries:
        """
        Combine daily data, daily means of hourly data and projected normals.

        Humidity and wind means are aligned to the daily dates by day;
        dates without an hourly run get None.
        """
        return WeatherSeries(
            x=list(daily.dates),
            temp_min=list(daily.tmin),
            temp_mean=list(daily.tmean),
            temp_max=list(daily.tmax),
            precip=list(daily.precip),
            humidity=self._align(daily.dates, humidity),
            wind=self._align(daily.dates, wind),
            wind_max=list(daily.wind_max),
            norm=self.projector.project_series(daily.dates, normals),
        )

    def _align(self, dates: Sequence[str], means: DailyMeans) -> List[Optional[float]]:
        # A day with several runs keeps the last one
        by_day = dict(zip(means.days, means.means))
        return [by_day.get(d) for d in dates]

    def compute_stats(self, series: WeatherSeries) -> WeatherStats:
        """Summarize a series. Every statistic skips missing values."""
        wind_candidates = series.wind_max if series.wind_max else series.wind
        return WeatherStats(
            min_t=array_min(series.temp_min),
            max_t=array_max(series.temp_max),
            avg_t=array_mean(series.temp_mean),
            climate_dev=self.projector.mean_deviation(series.temp_mean, series.norm),
            precip_total=array_sum(series.precip),
            precip_days=sum(1 for v in finite_values(series.precip) if v > PRECIP_DAY_THRESHOLD_MM),
            precip_max=array_max(series.precip),
            hum_avg=array_mean(series.humidity),
            wind_avg=array_mean(series.wind),
            wind_max=array_max(wind_candidates),
            total_days=len(series.x),
        )

    def apply_smoothing_and_trim(
        self,
        series: WeatherSeries,
        window: int,
        start_date: str,
        end_date: str,
    ) -> WeatherSeries:
        """
        Smooth mean temperature and humidity, then trim to [start_date, end_date].

        The series is usually fetched with padding on both sides so the
        moving average is complete at the edges of the requested range.
        """
        if window <= 0:
            return series

        start_idx = next((i for i, d in enumerate(series.x) if d >= start_date), None)
        if start_idx is None:
            return series
        end_idx = next((i for i, d in enumerate(series.x) if d > end_date), len(series.x))

        def trim(values):
            return values[start_idx:end_idx] if values is not None else None

        return WeatherSeries(
            x=trim(series.x),
            temp_min=trim(series.temp_min),
            temp_mean=trim(rolling_average(series.temp_mean, window)),
            temp_max=trim(series.temp_max),
            precip=trim(series.precip),
            humidity=trim(rolling_average(series.humidity, window)),
            wind=trim(series.wind),
            wind_max=trim(series.wind_max),
            norm=trim(series.norm),
        )

    # --- Year-over-year progression ---

    def get_period_dates(self, year: int, period_type: str, value: str = "") -> Tuple[str, str]:
        """
        Get (start, end) ISO dates of a period within a year.

        Args:
            year: Calendar year
            period_type: "year", "season", "month" or "day"
            value: Season name, month number ("1".."12") or "MM-DD" day

        Winter runs from December of the previous year to the end of
        February.
        """
        if period_type == "year":
            return f"{year}-01-01", f"{year}-12-31"

        if period_type == "season":
            if value not in SEASONS:
                raise ValueError(f"Unknown season: {value}")
            start_month, end_month = SEASONS[value]
            start_year = year - 1 if value == "winter" else year
            end_day = days_in_month(end_month, is_leap_year(year))
            return f"{start_year}-{start_month:02d}-01", f"{year}-{end_month:02d}-{end_day:02d}"

        if period_type == "month":
            month = int(value)
            if not 1 <= month <= 12:
                raise ValueError(f"Invalid month: {value}")
            last_day = days_in_month(month, is_leap_year(year))
            return f"{year}-{month:02d}-01", f"{year}-{month:02d}-{last_day:02d}"

        if period_type == "day":
            day_date = f"{year}-{value}"
            parsed = parse_iso_date(day_date) if len(value) == 5 else None
            if parsed is None or parsed[2] > days_in_month(parsed[1], is_leap_year(year)):
                raise ValueError(f"Invalid day for {year}: {value}")
            return day_date, day_date

        raise ValueError(f"Unknown period type: {period_type}")

    def aggregate_progression_stats(self, stats_list: Sequence[WeatherStats]) -> WeatherStats:
        """Combine per-year statistics into one summary across years."""
        return WeatherStats(
            min_t=array_min(s.min_t for s in stats_list),
            max_t=array_max(s.max_t for s in stats_list),
            avg_t=array_mean(s.avg_t for s in stats_list),
            climate_dev=array_mean(s.climate_dev for s in stats_list),
            precip_total=array_sum(s.precip_total for s in stats_list),
            precip_days=sum(s.precip_days for s in stats_list),
            precip_max=array_max(s.precip_max for s in stats_list),
            hum_avg=array_mean(s.hum_avg for s in stats_list),
            wind_avg=array_mean(s.wind_avg for s in stats_list),
            wind_max=array_max(s.wind_max for s in stats_list),
            total_days=sum(s.total_days for s in stats_list),
        )

    def aggregate_series_for_progression(
        self,
        series_list: Sequence[WeatherSeries],
        labels: Sequence[str],
    ) -> WeatherSeries:
        """Reduce each period's series to one point per label (year)."""
        norm = None
        with_norm = next((s for s in series_list if s.norm), None)
        if with_norm is not None:
            norm_mean = array_mean(with_norm.norm)
            norm = [norm_mean for _ in labels]

        return WeatherSeries(
            x=list(labels),
            temp_min=[array_min(s.temp_min) for s in series_list],
            temp_mean=[array_mean(s.temp_mean) for s in series_list],
            temp_max=[array_max(s.temp_max) for s in series_list],
            precip=[array_sum(s.precip) for s in series_list],
            humidity=[array_mean(s.humidity) for s in series_list],
            wind=[array_mean(s.wind) for s in series_list],
            wind_max=[array_max(s.wind_max or s.wind) for s in series_list],
            norm=norm,
        )
