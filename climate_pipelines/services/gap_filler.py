"""Gap filling for fixed-length day-of-year profiles."""
from typing import Optional
import numpy as np


def fill_missing(profile: np.ndarray) -> Optional[np.ndarray]:
    """
    Fill NaN slots by linear interpolation between the nearest known values.

    Slots before the first known value take that value, slots after the last
    known value take the last one. The input array is left untouched.

    Args:
        profile: 1D float array, NaN marks "no data"

    Returns:
        Dense copy of the profile, or None if no slot holds data
    """
    values = np.asarray(profile, dtype=np.float64)
    known = np.flatnonzero(~np.isnan(values))
    if known.size == 0:
        return None

    filled = values.copy()
    first_idx, last_idx = known[0], known[-1]
    filled[:first_idx] = filled[first_idx]

    for prev_idx, next_idx in zip(known[:-1], known[1:]):
        span = next_idx - prev_idx
        if span > 1:
            start, end = filled[prev_idx], filled[next_idx]
            steps = np.arange(1, span)
            filled[prev_idx + 1:next_idx] = start + ((end - start) * steps) / span

    filled[last_idx + 1:] = filled[last_idx]
    return filled
