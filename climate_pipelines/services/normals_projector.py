"""Service for mapping calendar dates onto climate normals."""
from typing import List, Optional, Sequence

from climate_pipelines.models.normals import ClimateNormals
from climate_pipelines.utils.calendar_utils import day_of_year, is_leap_year, parse_iso_date
from climate_pipelines.utils.series_utils import is_finite_number


class NormalsProjector:
    """Looks up the expected value for a date in the matching normal-year profile."""

    def project_normal(
        self,
        iso_date: str,
        normals: Optional[ClimateNormals],
    ) -> Optional[float]:
        """
        Get the normal value for a calendar date.

        Leap years read from the 366-slot profile, all other years from the
        365-slot one.

        Returns:
            The normal value, or None for a malformed date, missing normals
            or an index outside the profile
        """
        if normals is None:
            return None
        parsed = parse_iso_date(iso_date)
        if parsed is None:
            return None

        year, month, day = parsed
        leap = is_leap_year(year)
        idx = day_of_year(month, day, leap) - 1
        profile = normals.leap if leap else normals.common
        if not 0 <= idx < len(profile):
            return None
        return float(profile[idx])

    def project_series(
        self,
        dates: Sequence[str],
        normals: Optional[ClimateNormals],
    ) -> Optional[List[Optional[float]]]:
        """Expected series aligned 1:1 with dates, or None without normals."""
        if normals is None:
            return None
        return [self.project_normal(d, normals) for d in dates]

    def mean_deviation(
        self,
        actual: Sequence[Optional[float]],
        expected: Optional[Sequence[Optional[float]]],
    ) -> Optional[float]:
        """
        Average of (actual - normal) over positions where both are present.

        Returns:
            Mean deviation, or None if there are no expected values or no
            valid pair
        """
        if expected is None:
            return None
        deltas = [
            a - e for a, e in zip(actual, expected)
            if is_finite_number(a) and is_finite_number(e)
        ]
        if not deltas:
            return None
        return sum(deltas) / len(deltas)
