"""Service for reducing sub-daily observations to daily means."""
import logging
from typing import Optional, Sequence

from climate_pipelines.models.normals import DailyBucket, DailyMeans
from climate_pipelines.utils.series_utils import is_finite_number

logger = logging.getLogger(__name__)


class HourlyAggregator:
    """
    Averages hourly (or any sub-daily) readings per calendar day.

    The input is scanned once, left to right. A new day starts whenever the
    10-character date prefix of the timestamp differs from the previous one,
    so a date that reappears later in the sequence opens a second bucket
    instead of merging into the first. Call sites rely on this streaming
    behaviour; it is not a group-by.
    """

    def aggregate_daily(
        self,
        timestamps: Sequence[str],
        values: Sequence[Optional[float]],
    ) -> DailyMeans:
        """
        Build one mean per contiguous run of timestamps sharing a date.

        Args:
            timestamps: Time-sorted timestamps, first 10 characters "YYYY-MM-DD"
            values: Readings aligned with timestamps; None/non-numeric = absent

        Returns:
            DailyMeans with one entry per run, mean None for runs without
            a valid reading
        """
        result = DailyMeans()
        current_day: Optional[str] = None
        bucket = DailyBucket()

        for i, timestamp in enumerate(timestamps):
            day = str(timestamp)[:10]
            if current_day is None:
                current_day = day
            if day != current_day:
                result.days.append(current_day)
                result.means.append(bucket.mean())
                current_day = day
                bucket = DailyBucket()

            value = values[i] if i < len(values) else None
            if is_finite_number(value):
                bucket.add(float(value))

        if current_day is not None:
            result.days.append(current_day)
            result.means.append(bucket.mean())

        if len(values) != len(timestamps):
            logger.debug(
                "Hourly values (%d) and timestamps (%d) differ in length",
                len(values), len(timestamps),
            )
        return result
