"""Wilderness death dashboard endpoints."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from app.config import get_settings
from app.core.hotspots import HOTSPOTS, PLANE_SIZE
from app.schemas.dashboard import DashboardResponse
from app.services.death_data import DeathSnapshot, get_snapshot
from app.services.map_image import map_image_service
from app.services.stats_formatter import build_dashboard

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

# Templates directory
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

# Shown on the canvas when the background image can't be loaded
FALLBACK_MESSAGE = "Map image unavailable - showing death data on grid background"


@router.get("/api/summary", response_model=DashboardResponse)
async def dashboard_summary(
    snapshot: Annotated[DeathSnapshot, Depends(get_snapshot)],
) -> DashboardResponse:
    """
    Display-ready dashboard data.

    Returns stat cards, ranked hotspots, bar chart data with relative
    heights, wealth range percentages and key findings.
    """
    return build_dashboard(snapshot.stats)


@router.get("/map-image")
async def map_image() -> Response:
    """
    Proxy the Wilderness background map.

    Returns 503 if the image can't be fetched; the dashboard page then
    draws a grid fallback instead.
    """
    image = await map_image_service.get_image()
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Map image unavailable",
        )
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    snapshot: Annotated[DeathSnapshot, Depends(get_snapshot)],
) -> HTMLResponse:
    """
    Serve the dashboard HTML page.

    Death positions and hotspots are embedded once in the page; the canvas
    redraws from them on resize without requesting new data.
    """
    dashboard_data = build_dashboard(snapshot.stats)

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "data": dashboard_data,
            "points": [[round(r.x, 2), round(r.y, 2)] for r in snapshot.records],
            "hotspots": [
                {"x": h.x, "y": h.y, "radius": h.radius, "name": h.name}
                for h in HOTSPOTS
            ],
            "plane_size": PLANE_SIZE,
            "fallback_message": FALLBACK_MESSAGE,
        },
    )
