"""Weather series data structures."""
from attrs import asdict, define, field
from typing import List, Optional


@define
class DailyWeather:
    """Daily archive observations, one entry per date."""

    dates: List[str] = field(factory=list)
    tmin: List[Optional[float]] = field(factory=list)
    tmean: List[Optional[float]] = field(factory=list)
    tmax: List[Optional[float]] = field(factory=list)
    precip: List[Optional[float]] = field(factory=list)
    wind_max: List[Optional[float]] = field(factory=list)


@define
class HourlyWeather:
    """Hourly archive observations."""

    time: List[str] = field(factory=list)
    humidity: List[Optional[float]] = field(factory=list)
    wind: List[Optional[float]] = field(factory=list)


@define
class WeatherSeries:
    """Date-aligned series ready for charting."""

    x: List[str]
    temp_min: List[Optional[float]]
    temp_mean: List[Optional[float]]
    temp_max: List[Optional[float]]
    precip: List[Optional[float]]
    humidity: List[Optional[float]]
    wind: List[Optional[float]]
    wind_max: Optional[List[Optional[float]]] = None
    norm: Optional[List[Optional[float]]] = None  # None when normals are unavailable

    def to_dict(self) -> dict:
        return asdict(self)


@define
class WeatherStats:
    """Summary statistics over one series. Missing values are None."""

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

    def to_dict(self) -> dict:
        return asdict(self)
