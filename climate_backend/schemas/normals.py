"""Pydantic schemas for climate normals."""
from pydantic import BaseModel
from typing import List, Optional


class NormalsResponse(BaseModel):
    """Normal-year profiles for a location.

    When `available` is false the profiles are null and consumers should
    render without a normals comparison.
    """

    latitude: float
    longitude: float
    available: bool
    source: Optional[str] = None  # "daily" or "monthly"
    common: Optional[List[float]] = None  # 365 values
    leap: Optional[List[float]] = None  # 366 values


class ProjectedNormalResponse(BaseModel):
    """Normal value for a single date."""

    date: str
    normal: Optional[float] = None
