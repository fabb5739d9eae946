"""Pydantic schemas for the Wilderness death dashboard."""

from typing import Literal

from pydantic import BaseModel, Field


class StatCard(BaseModel):
    """Headline statistic card."""

    label: str = Field(..., description="Card title")
    value: str = Field(..., description="Display-formatted value")
    accent: Literal["red", "green", "blue", "purple"] = Field(
        ..., description="Card accent color"
    )
    icon: str = Field(..., description="Emoji icon")


class BarDatum(BaseModel):
    """A single bar in a distribution chart."""

    label: str
    count: int = Field(..., ge=0)
    height_pct: float = Field(..., ge=0, le=100, description="Height relative to tallest bar")


class WealthRangeDatum(BaseModel):
    """Wealth lost bucket with its share of all deaths."""

    label: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)
    display: str = Field(..., description="Percentage with one decimal, e.g. '12.5%'")


class RankedHotspot(BaseModel):
    """Entry in the top hotspots list."""

    rank: int = Field(..., ge=1)
    label: str
    count: int = Field(..., ge=0)
    display: str = Field(..., description="Count with thousands separators")


class DashboardResponse(BaseModel):
    """Complete display-ready view of the death statistics."""

    title: str
    total_deaths: int = Field(..., ge=0)
    cards: list[StatCard]
    top_hotspots: list[RankedHotspot] = Field(default_factory=list)
    hour_bars: list[BarDatum]
    day_bars: list[BarDatum]
    month_bars: list[BarDatum]
    wealth_ranges: list[WealthRangeDatum]
    insights: list[str] = Field(
        default_factory=list, description="Data-driven key findings"
    )
