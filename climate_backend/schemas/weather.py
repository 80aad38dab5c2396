"""Pydantic schemas for weather series and statistics."""
from pydantic import BaseModel
from typing import List, Optional


class SeriesData(BaseModel):
    """Date-aligned series. `norm` is null when normals are unavailable."""

    x: List[str]
    temp_min: List[Optional[float]]
    temp_mean: List[Optional[float]]
    temp_max: List[Optional[float]]
    precip: List[Optional[float]]
    humidity: List[Optional[float]]
    wind: List[Optional[float]]
    wind_max: Optional[List[Optional[float]]] = None
    norm: Optional[List[Optional[float]]] = None


class StatsData(BaseModel):
    """Summary statistics. Null values render as "n/a"."""

    min_t: Optional[float] = None
    max_t: Optional[float] = None
    avg_t: Optional[float] = None
    climate_dev: Optional[float] = None
    precip_total: Optional[float] = None
    precip_days: int = 0
    precip_max: Optional[float] = None
    hum_avg: Optional[float] = None
    wind_avg: Optional[float] = None
    wind_max: Optional[float] = None
    total_days: int = 0


class WeatherSeriesResponse(BaseModel):
    """Response schema for a date-range weather series."""

    latitude: float
    longitude: float
    start_date: str
    end_date: str
    smoothing: int
    series: SeriesData
    stats: StatsData


class ProgressionResponse(BaseModel):
    """Response schema for one period compared across years."""

    latitude: float
    longitude: float
    period_type: str
    period_value: str
    years: List[int]
    series: SeriesData  # one point per year
    yearly_stats: List[StatsData]
    stats: StatsData  # aggregated across years
