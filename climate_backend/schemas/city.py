"""Pydantic schemas for geocoded cities."""
from pydantic import BaseModel
from typing import Optional


class LocationResponse(BaseModel):
    """A geocoding match."""

    location_id: Optional[int] = None
    name: str
    country: Optional[str] = None
    admin1: Optional[str] = None
    latitude: float
    longitude: float
    cache_key: str
