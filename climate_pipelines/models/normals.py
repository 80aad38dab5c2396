"""Data structures for daily aggregation and climate normals."""
from attrs import define, field
from typing import List, Optional
import numpy as np

from climate_pipelines.config import COMMON_YEAR_DAYS, LEAP_YEAR_DAYS

SOURCE_DAILY = "daily"
SOURCE_MONTHLY = "monthly"


@define
class DailyBucket:
    """Running sum and count of valid values for a single calendar day."""

    total: float = 0.0
    count: int = 0

    def add(self, value: float) -> None:
        self.total += value
        self.count += 1

    def mean(self) -> Optional[float]:
        """Mean of the accumulated values, or None if nothing was added."""
        return self.total / self.count if self.count else None


@define
class DailyMeans:
    """One mean per calendar-day run, aligned with the run's date."""

    days: List[str] = field(factory=list)
    means: List[Optional[float]] = field(factory=list)

    def to_dict(self) -> dict:
        return {"days": list(self.days), "means": list(self.means)}


def _profile_converter(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


@define
class ClimateNormals:
    """
    Canonical normal-year profiles.

    `common` holds 365 values and `leap` holds 366, indexed by day-of-year
    minus one. Every slot holds a real value.
    """

    common: np.ndarray = field(converter=_profile_converter)
    leap: np.ndarray = field(converter=_profile_converter)
    source: str = SOURCE_DAILY  # "daily" or "monthly"

    @common.validator
    def _check_common(self, attribute, value):
        if value.shape != (COMMON_YEAR_DAYS,):
            raise ValueError(f"common profile must have {COMMON_YEAR_DAYS} slots, got {value.shape}")

    @leap.validator
    def _check_leap(self, attribute, value):
        if value.shape != (LEAP_YEAR_DAYS,):
            raise ValueError(f"leap profile must have {LEAP_YEAR_DAYS} slots, got {value.shape}")

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "source": self.source,
            "common": self.common.tolist(),
            "leap": self.leap.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClimateNormals":
        """Create from dictionary."""
        return cls(
            common=data["common"],
            leap=data["leap"],
            source=data.get("source", SOURCE_DAILY),
        )
