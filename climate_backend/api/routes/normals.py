"""API routes for climate normals."""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from climate_backend.schemas.normals import NormalsResponse, ProjectedNormalResponse
from climate_backend.services.normals_service import NormalsService
from climate_backend.api.dependencies import get_normals_service

router = APIRouter(prefix="/normals", tags=["normals"])


@router.get("", response_model=NormalsResponse)
def get_normals(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    location_id: Optional[int] = Query(None, description="Geocoding id, used as cache key"),
    normals_service: NormalsService = Depends(get_normals_service),
) -> NormalsResponse:
    """
    Get the 365-day and 366-day normal profiles for a location.

    Unavailable normals are not an error: the response has
    `available=false` and null profiles.
    """
    normals = normals_service.get_normals(latitude, longitude, location_id)
    if normals is None:
        return NormalsResponse(latitude=latitude, longitude=longitude, available=False)
    return NormalsResponse(
        latitude=latitude,
        longitude=longitude,
        available=True,
        **normals.to_dict(),
    )


@router.get("/project", response_model=ProjectedNormalResponse)
def project_normal(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Date (YYYY-MM-DD)"),
    location_id: Optional[int] = Query(None),
    normals_service: NormalsService = Depends(get_normals_service),
) -> ProjectedNormalResponse:
    """Get the normal value for a single date."""
    value = normals_service.project_normal(latitude, longitude, date, location_id)
    return ProjectedNormalResponse(date=date, normal=value)
