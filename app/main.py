"""FastAPI application entry point for the Wilderness Death Map."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import dashboard, deaths
from app.config import get_settings
from app.services.death_data import death_data_service
from app.services.map_image import map_image_service

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management."""
    # Startup
    logger.info("Starting Wilderness Death Map...")
    snapshot = death_data_service.load()
    await map_image_service.start()

    logger.info(f"Wilderness Death Map ready ({snapshot.stats.total_deaths} deaths)")

    yield

    # Shutdown
    logger.info("Shutting down Wilderness Death Map...")
    await map_image_service.stop()
    logger.info("Wilderness Death Map stopped")


app = FastAPI(
    title="Wilderness Death Map",
    description="Synthetic OSRS Wilderness death heatmap and analytics",
    version=VERSION,
    lifespan=lifespan,
)

# Include routers
app.include_router(deaths.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
    - status: API health status
    - data_loaded: Whether death records have been generated
    - total_deaths: Number of generated records (if loaded)
    - map_image: Background image fetch statistics
    """
    loaded = death_data_service.is_loaded
    return {
        "status": "healthy",
        "data_loaded": loaded,
        "total_deaths": death_data_service.snapshot.stats.total_deaths if loaded else None,
        "map_image": map_image_service.stats,
        "version": VERSION,
    }


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Wilderness Death Map",
        "description": "Synthetic OSRS Wilderness death heatmap and analytics",
        "version": VERSION,
        "endpoints": {
            "health": "/health",
            "deaths": "/api/v1/deaths",
            "positions": "/api/v1/deaths/positions",
            "stats": "/api/v1/deaths/stats",
            "hotspots": "/api/v1/hotspots",
            "dashboard": "/dashboard",
            "docs": "/docs",
        },
    }
