"""Pydantic schemas for death record and statistics API responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.aggregator import AggregateStats
from app.core.hotspots import HotspotRegion
from app.core.sampler import DeathRecord


class HotspotResponse(BaseModel):
    """A hotspot region on the reference plane."""

    name: str
    x: float
    y: float
    radius: float = Field(..., gt=0)
    density: float = Field(..., description="Stated density weight (not used for sampling)")

    @classmethod
    def from_region(cls, region: HotspotRegion) -> "HotspotResponse":
        return cls(
            name=region.name,
            x=region.x,
            y=region.y,
            radius=region.radius,
            density=region.density,
        )


class DeathRecordResponse(BaseModel):
    """A single synthetic death event."""

    x: float = Field(..., ge=0, le=800, description="Reference plane x")
    y: float = Field(..., ge=0, le=800, description="Reference plane y")
    timestamp: datetime
    player_level: int = Field(..., ge=1, le=126)
    combat_level: int = Field(..., ge=1, le=126)
    wealth_lost: int = Field(..., ge=0, lt=100_000_000)
    hour_of_day: int = Field(..., ge=0, le=23)
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    hotspot: str = Field(..., description="Hotspot name or 'Random Location'")

    @classmethod
    def from_record(cls, record: DeathRecord) -> "DeathRecordResponse":
        return cls(
            x=record.x,
            y=record.y,
            timestamp=record.timestamp,
            player_level=record.player_level,
            combat_level=record.combat_level,
            wealth_lost=record.wealth_lost,
            hour_of_day=record.hour_of_day,
            day_of_week=record.day_of_week,
            hotspot=record.hotspot,
        )


class DeathsPage(BaseModel):
    """Paginated slice of the death records."""

    total: int = Field(..., description="Total records in the snapshot")
    offset: int
    limit: Optional[int] = Field(None, description="Page size, null for all remaining")
    items: list[DeathRecordResponse]


class PositionsResponse(BaseModel):
    """Compact death positions for point plotting."""

    plane_size: float = Field(..., description="Reference plane width/height")
    points: list[tuple[float, float]] = Field(..., description="[x, y] pairs")


class HotspotCount(BaseModel):
    """Death count for a hotspot label."""

    label: str
    count: int = Field(..., ge=0)


class AggregateStatsResponse(BaseModel):
    """Summary statistics over all death records."""

    total_deaths: int = Field(..., ge=0)
    total_wealth_lost: int = Field(..., ge=0)
    avg_wealth_lost: Optional[float] = Field(None, description="Null when no deaths")
    avg_player_level: Optional[float] = Field(None, description="Null when no deaths")
    avg_combat_level: Optional[float] = Field(None, description="Null when no deaths")
    hour_distribution: list[int] = Field(..., min_length=24, max_length=24)
    day_distribution: list[int] = Field(..., min_length=7, max_length=7)
    month_distribution: list[int] = Field(..., min_length=12, max_length=12)
    top_hotspots: list[HotspotCount] = Field(..., max_length=5)
    wealth_ranges: dict[str, int]
    hotspot_deaths: int = Field(0, ge=0, description="Deaths inside any named hotspot")

    @classmethod
    def from_stats(cls, stats: AggregateStats) -> "AggregateStatsResponse":
        return cls(
            total_deaths=stats.total_deaths,
            total_wealth_lost=stats.total_wealth_lost,
            avg_wealth_lost=stats.avg_wealth_lost,
            avg_player_level=stats.avg_player_level,
            avg_combat_level=stats.avg_combat_level,
            hour_distribution=list(stats.hour_distribution),
            day_distribution=list(stats.day_distribution),
            month_distribution=list(stats.month_distribution),
            top_hotspots=[
                HotspotCount(label=label, count=count)
                for label, count in stats.top_hotspots
            ],
            wealth_ranges=dict(stats.wealth_ranges),
            hotspot_deaths=stats.hotspot_deaths,
        )

    def to_stats(self) -> AggregateStats:
        """Rebuild core stats (used by clients reading the API)."""
        return AggregateStats(
            total_deaths=self.total_deaths,
            total_wealth_lost=self.total_wealth_lost,
            avg_wealth_lost=self.avg_wealth_lost,
            avg_player_level=self.avg_player_level,
            avg_combat_level=self.avg_combat_level,
            hour_distribution=tuple(self.hour_distribution),
            day_distribution=tuple(self.day_distribution),
            month_distribution=tuple(self.month_distribution),
            top_hotspots=tuple((h.label, h.count) for h in self.top_hotspots),
            wealth_ranges=tuple(self.wealth_ranges.items()),
            hotspot_deaths=self.hotspot_deaths,
        )
