"""Calendar arithmetic on ISO date strings and day-of-year indices."""
from datetime import date, timedelta
from typing import List, Optional, Tuple

from climate_pipelines.config import CUM_MONTH_DAYS_COMMON, CUM_MONTH_DAYS_LEAP

_MONTH_LENGTHS_LEAP = [31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def day_of_year(month: int, day: int, leap: bool) -> int:
    """
    Return the 1-based day-of-year for a (month, day) pair.

    Month is 1-based. The caller guarantees that month and day are valid
    for the given leap-ness; nothing is range checked here.
    """
    table = CUM_MONTH_DAYS_LEAP if leap else CUM_MONTH_DAYS_COMMON
    return table[month - 1] + day


def days_in_month(month: int, leap: bool) -> int:
    """Number of days in a month of a leap or common year."""
    if month == 2 and not leap:
        return 28
    return _MONTH_LENGTHS_LEAP[month - 1]


def parse_iso_date(value) -> Optional[Tuple[int, int, int]]:
    """
    Parse the leading "YYYY-MM-DD" of a date or timestamp string.

    Returns (year, month, day), or None if the value is not a string, is
    malformed, or names a day that exists in no calendar year (Feb-29 is
    accepted regardless of the year).
    """
    if not isinstance(value, str) or len(value) < 10:
        return None
    if value[4] != "-" or value[7] != "-":
        return None
    year_str, month_str, day_str = value[0:4], value[5:7], value[8:10]
    if not (year_str.isdigit() and month_str.isdigit() and day_str.isdigit()):
        return None

    year, month, day = int(year_str), int(month_str), int(day_str)
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= _MONTH_LENGTHS_LEAP[month - 1]:
        return None
    return year, month, day


def _to_date(value: str) -> Optional[date]:
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    try:
        return date(*parsed)
    except ValueError:
        # Feb-29 of a common year
        return None


def enumerate_dates(start: str, end: str) -> List[str]:
    """List every ISO date from start to end inclusive; empty if either is invalid."""
    start_date = _to_date(start)
    end_date = _to_date(end)
    if start_date is None or end_date is None or start_date > end_date:
        return []

    num_days = (end_date - start_date).days + 1
    return [(start_date + timedelta(days=i)).isoformat() for i in range(num_days)]


def add_days(iso_date: str, days: int) -> str:
    """Shift an ISO date by a number of days."""
    return (date.fromisoformat(iso_date[:10]) + timedelta(days=days)).isoformat()
