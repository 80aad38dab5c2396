"""Service for building day-of-year climate normals from historical series."""
import logging
from typing import Optional, Sequence
import numpy as np

from climate_pipelines.config import (
    COMMON_YEAR_DAYS,
    CUM_MONTH_DAYS_COMMON,
    CUM_MONTH_DAYS_LEAP,
    LEAP_YEAR_DAYS,
)
from climate_pipelines.models.normals import ClimateNormals, SOURCE_DAILY, SOURCE_MONTHLY
from climate_pipelines.services.gap_filler import fill_missing
from climate_pipelines.utils.calendar_utils import day_of_year, days_in_month, parse_iso_date
from climate_pipelines.utils.series_utils import is_finite_number

logger = logging.getLogger(__name__)


class NormalsBuilder:
    """Builds the 365-day and 366-day normal-year profiles.

    Two input formats feed the same ClimateNormals representation:

    - a multi-year daily series (the canonical path), averaged per
      day-of-year slot
    - twelve monthly means (legacy sources), interpolated between
      mid-month anchors

    A None result means "normals unavailable"; nothing here raises for
    gaps in the data.
    """

    def build_normals(
        self,
        dates: Sequence[str],
        values: Sequence[Optional[float]],
    ) -> Optional[ClimateNormals]:
        """
        Average a daily series into common-year and leap-year profiles.

        Every valid sample is added to the leap profile. Samples not dated
        Feb-29 are also added to the common profile, which has no such day.
        Samples with a malformed date or a non-numeric value are skipped:
        upstream archives routinely contain holes and these must not fail
        the whole computation.

        Args:
            dates: ISO date strings ("YYYY-MM-DD")
            values: Daily values aligned with dates, None where missing

        Returns:
            Dense ClimateNormals, or None if the series holds no valid sample
            or the two sequences differ in length
        """
        if len(dates) != len(values):
            logger.warning(
                "Normals series length mismatch: %d dates, %d values",
                len(dates), len(values),
            )
            return None

        sums_common = np.zeros(COMMON_YEAR_DAYS, dtype=np.float64)
        counts_common = np.zeros(COMMON_YEAR_DAYS, dtype=np.int64)
        sums_leap = np.zeros(LEAP_YEAR_DAYS, dtype=np.float64)
        counts_leap = np.zeros(LEAP_YEAR_DAYS, dtype=np.int64)

        skipped = 0
        for date_str, value in zip(dates, values):
            parsed = parse_iso_date(date_str)
            if parsed is None or not is_finite_number(value):
                skipped += 1
                continue
            _, month, day = parsed

            idx_leap = day_of_year(month, day, leap=True) - 1
            sums_leap[idx_leap] += value
            counts_leap[idx_leap] += 1

            if month == 2 and day == 29:
                continue
            idx_common = day_of_year(month, day, leap=False) - 1
            sums_common[idx_common] += value
            counts_common[idx_common] += 1

        if skipped:
            logger.debug("Skipped %d of %d samples without a usable date or value", skipped, len(dates))

        common = fill_missing(self._finalize(sums_common, counts_common))
        leap = fill_missing(self._finalize(sums_leap, counts_leap))
        if common is None or leap is None:
            logger.info("No valid samples in normals series (%d entries)", len(dates))
            return None

        return ClimateNormals(common=common, leap=leap, source=SOURCE_DAILY)

    def build_from_monthly(
        self,
        monthly_means: Sequence[Optional[float]],
    ) -> Optional[ClimateNormals]:
        """
        Synthesize daily profiles from twelve monthly means.

        Each monthly mean is pinned to the middle of its month and the days
        in between are linearly interpolated, wrapping from December back
        to January.

        Args:
            monthly_means: Mean values for January..December

        Returns:
            ClimateNormals tagged "monthly", or None unless all twelve
            months hold a value
        """
        if len(monthly_means) != 12 or not all(is_finite_number(v) for v in monthly_means):
            logger.warning("Monthly normals need 12 numeric values, got %r", list(monthly_means))
            return None

        means = np.asarray(monthly_means, dtype=np.float64)
        return ClimateNormals(
            common=self._interpolate_monthly(means, leap=False),
            leap=self._interpolate_monthly(means, leap=True),
            source=SOURCE_MONTHLY,
        )

    def _finalize(self, sums: np.ndarray, counts: np.ndarray) -> np.ndarray:
        """Turn accumulators into means, NaN where a slot has no samples."""
        profile = np.full(sums.shape, np.nan, dtype=np.float64)
        has_data = counts > 0
        profile[has_data] = sums[has_data] / counts[has_data]
        return profile

    def _interpolate_monthly(self, means: np.ndarray, leap: bool) -> np.ndarray:
        """Interpolate monthly means over one year with cyclic wrap-around."""
        num_days = LEAP_YEAR_DAYS if leap else COMMON_YEAR_DAYS
        table = CUM_MONTH_DAYS_LEAP if leap else CUM_MONTH_DAYS_COMMON

        # 0-based slot of each month's midpoint
        anchors = np.array([
            table[m] + (days_in_month(m + 1, leap) - 1) / 2.0
            for m in range(12)
        ])
        return np.interp(np.arange(num_days), anchors, means, period=num_days)
