"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from climate_backend.config import settings
from climate_backend.data.normals_repository import NormalsRepository
from climate_backend.services.normals_service import NormalsService
from climate_backend.services.weather_service import WeatherService
from climate_pipelines.services.open_meteo_service import OpenMeteoService


@lru_cache()
def get_data_service() -> OpenMeteoService:
    """Get cached Open-Meteo client instance."""
    return OpenMeteoService(timeout=settings.request_timeout_seconds)


@lru_cache()
def get_normals_repository() -> NormalsRepository:
    """Get cached normals repository instance."""
    return NormalsRepository()


@lru_cache()
def get_normals_service() -> NormalsService:
    """Get cached normals service instance."""
    return NormalsService(
        normals_repo=get_normals_repository(),
        data_service=get_data_service(),
    )


def get_weather_service() -> WeatherService:
    """Get weather service instance."""
    return WeatherService(
        data_service=get_data_service(),
        normals_service=get_normals_service(),
    )
