"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from climate_pipelines import logging_config as _  # configure logging
from climate_backend.config import settings
from climate_backend.api.routes import cities, normals, weather
from climate_backend.api.dependencies import get_normals_repository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report the normals store on startup."""
    repo = get_normals_repository()
    logger.info("Serving normals from %s (%d stored)", repo.store.output_dir, len(repo.store.get_all_keys()))
    yield

# Create FastAPI app with orjson for faster JSON serialization
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    redirect_slashes=False,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(cities.router)
app.include_router(normals.router)
app.include_router(weather.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
