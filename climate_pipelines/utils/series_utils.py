"""Null-tolerant helpers for plain numeric sequences."""
import math
from numbers import Real
from typing import Iterable, List, Optional


def is_finite_number(value) -> bool:
    """True for real, finite numbers. Booleans and NaN count as missing."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def to_number_or_none(value) -> Optional[float]:
    """Convert a finite number to float, anything else to None."""
    return float(value) if is_finite_number(value) else None


def finite_values(values: Iterable) -> List[float]:
    """Drop missing entries from a sequence."""
    return [float(v) for v in values if is_finite_number(v)]


def array_mean(values: Iterable) -> Optional[float]:
    filtered = finite_values(values)
    return sum(filtered) / len(filtered) if filtered else None


def array_sum(values: Iterable) -> Optional[float]:
    filtered = finite_values(values)
    return sum(filtered) if filtered else None


def array_max(values: Iterable) -> Optional[float]:
    filtered = finite_values(values)
    return max(filtered) if filtered else None


def array_min(values: Iterable) -> Optional[float]:
    filtered = finite_values(values)
    return min(filtered) if filtered else None
