"""API routes for city search."""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, HTTPException

from climate_backend.config import settings
from climate_backend.schemas.city import LocationResponse
from climate_backend.api.dependencies import get_data_service
from climate_pipelines.errors import RateLimitedError, WeatherFetchError
from climate_pipelines.services.open_meteo_service import OpenMeteoService

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("/search", response_model=List[LocationResponse])
def search_cities(
    name: str = Query(..., min_length=1, description="Free-text city name"),
    limit: Optional[int] = Query(None, ge=1, le=50, description="Maximum number of matches"),
    data_service: OpenMeteoService = Depends(get_data_service),
) -> List[LocationResponse]:
    """
    Search cities by name.

    Returns geocoding matches with the cache key under which their
    normals are stored.
    """
    try:
        matches = data_service.suggest_cities(name, limit=limit or settings.default_suggestion_limit)
    except RateLimitedError as e:
        raise HTTPException(status_code=429, detail=str(e))
    except WeatherFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return [
        LocationResponse(**location.to_dict(), cache_key=location.cache_key)
        for location in matches
    ]
