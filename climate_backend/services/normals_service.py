"""Service for climate normals lookups."""
import logging
from typing import Optional

from climate_backend.data.normals_repository import NormalsRepository
from climate_pipelines.errors import NormalsUnavailableError, WeatherFetchError
from climate_pipelines.models.normals import ClimateNormals
from climate_pipelines.services.normals_builder import NormalsBuilder
from climate_pipelines.services.normals_projector import NormalsProjector
from climate_pipelines.services.open_meteo_service import OpenMeteoService

logger = logging.getLogger(__name__)


def location_key(latitude: float, longitude: float, location_id: Optional[int] = None) -> str:
    """Cache key for a location: the geocoding id when known, else rounded coordinates."""
    if location_id:
        return f"city_{location_id}"
    return f"coords_{latitude:.4f}_{longitude:.4f}"


class NormalsService:
    """Service for building, caching and projecting climate normals."""

    def __init__(
        self,
        normals_repo: NormalsRepository = None,
        data_service: OpenMeteoService = None,
    ):
        self.normals_repo = normals_repo or NormalsRepository()
        self.data_service = data_service or OpenMeteoService()
        self.builder = NormalsBuilder()
        self.projector = NormalsProjector()

    def get_normals(
        self,
        latitude: float,
        longitude: float,
        location_id: Optional[int] = None,
    ) -> Optional[ClimateNormals]:
        """
        Get normals for a location, fetching and building them on a cache miss.

        Network and payload failures are logged and reported as None
        ("normals unavailable") so callers can carry on without them.
        """
        key = location_key(latitude, longitude, location_id)
        normals = self.normals_repo.get(key)
        if normals is not None:
            return normals

        try:
            dates, temps = self.data_service.fetch_normals_series(latitude, longitude)
        except (NormalsUnavailableError, WeatherFetchError) as e:
            logger.warning("Normals unavailable for %s: %s", key, e)
            return None

        normals = self.builder.build_normals(dates, temps)
        if normals is not None:
            self.normals_repo.put(key, normals)
        return normals

    def project_normal(
        self,
        latitude: float,
        longitude: float,
        iso_date: str,
        location_id: Optional[int] = None,
    ) -> Optional[float]:
        """Normal value for one date, or None if unavailable."""
        normals = self.get_normals(latitude, longitude, location_id)
        return self.projector.project_normal(iso_date, normals)
