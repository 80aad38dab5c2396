"""Backend configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Data paths
    project_root: Path = Path(__file__).parent.parent
    data_dir: Path = project_root / "data"
    normals_dir: Path = data_dir / "normals"

    # API settings
    api_title: str = "Climate Normals API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]

    # Upstream requests
    request_timeout_seconds: float = 30.0
    normals_cache_size: int = 64

    # Default query values
    default_suggestion_limit: int = 8
    default_smoothing_days: int = 0
    max_smoothing_days: int = 31

    class Config:
        env_prefix = "CLIMATE_"


settings = Settings()
