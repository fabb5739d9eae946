"""Death record and statistics endpoints."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from app.core.hotspots import HOTSPOTS, PLANE_SIZE
from app.schemas.deaths import (
    AggregateStatsResponse,
    DeathRecordResponse,
    DeathsPage,
    HotspotResponse,
    PositionsResponse,
)
from app.services.death_data import DeathSnapshot, get_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["deaths"])


@router.get("/deaths", response_model=DeathsPage)
async def list_deaths(
    snapshot: Annotated[DeathSnapshot, Depends(get_snapshot)],
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[Optional[int], Query(ge=1, le=10_000)] = None,
) -> DeathsPage:
    """
    List generated death records in generation order.

    Omit `limit` to return every record from `offset` onward.
    """
    end = None if limit is None else offset + limit
    records = snapshot.records[offset:end]

    return DeathsPage(
        total=len(snapshot.records),
        offset=offset,
        limit=limit,
        items=[DeathRecordResponse.from_record(r) for r in records],
    )


@router.get("/deaths/positions", response_model=PositionsResponse)
async def death_positions(
    snapshot: Annotated[DeathSnapshot, Depends(get_snapshot)],
) -> PositionsResponse:
    """Death positions only, for heatmap point plotting."""
    return PositionsResponse(
        plane_size=PLANE_SIZE,
        points=[(r.x, r.y) for r in snapshot.records],
    )


@router.get("/deaths/stats", response_model=AggregateStatsResponse)
async def death_stats(
    snapshot: Annotated[DeathSnapshot, Depends(get_snapshot)],
) -> AggregateStatsResponse:
    """Summary statistics over all generated deaths."""
    return AggregateStatsResponse.from_stats(snapshot.stats)


@router.get("/hotspots", response_model=list[HotspotResponse])
async def list_hotspots() -> list[HotspotResponse]:
    """List the hotspot regions deaths cluster around."""
    return [HotspotResponse.from_region(h) for h in HOTSPOTS]
