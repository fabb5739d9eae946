"""
Display formatting for the Wilderness death dashboard.

Turns AggregateStats into display-ready values: abbreviated wealth figures,
rounded levels, relative bar heights and range percentages. Absent means
(no deaths) are shown as neutral zero values.
"""

import math
from typing import Optional, Sequence

from app.config import get_settings
from app.core.aggregator import AggregateStats
from app.schemas.dashboard import (
    BarDatum,
    DashboardResponse,
    RankedHotspot,
    StatCard,
    WealthRangeDatum,
)
from app.services.insights import generate_insights

settings = get_settings()

DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
HOUR_LABELS = tuple(f"{hour}:00" for hour in range(24))
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_count(count: int) -> str:
    """Format a count with thousands separators."""
    return f"{count:,}"


def format_millions(amount: Optional[float]) -> str:
    """Format a gp amount in millions with one decimal, e.g. '12.3M'."""
    if not amount:
        return "0M"
    return f"{amount / 1_000_000:.1f}M"


def format_thousands(amount: Optional[float]) -> str:
    """Format a gp amount in whole thousands (half-up), e.g. '50K'."""
    if not amount:
        return "0K"
    return f"{math.floor(amount / 1_000 + 0.5)}K"


def format_level(level: Optional[float]) -> str:
    """Round a mean level half-up for display."""
    if not level:
        return "0"
    return str(math.floor(level + 0.5))


def bar_heights(counts: Sequence[int]) -> list[float]:
    """Bar heights as percent of the tallest bar (all zero if no data)."""
    tallest = max(max(counts, default=0), 1)
    return [round(count / tallest * 100, 1) for count in counts]


def build_bars(counts: Sequence[int], labels: Sequence[str]) -> list[BarDatum]:
    """Pair counts with labels and relative heights."""
    return [
        BarDatum(label=label, count=count, height_pct=height)
        for label, count, height in zip(labels, counts, bar_heights(counts))
    ]


def wealth_percentages(stats: AggregateStats) -> list[WealthRangeDatum]:
    """Share of deaths per wealth range, in bucket order."""
    data = []
    for label, count in stats.wealth_ranges:
        percentage = count / stats.total_deaths * 100 if stats.total_deaths else 0.0
        data.append(
            WealthRangeDatum(
                label=label,
                count=count,
                percentage=round(percentage, 1),
                display=f"{percentage:.1f}%",
            )
        )
    return data


def ranked_hotspots(stats: AggregateStats) -> list[RankedHotspot]:
    return [
        RankedHotspot(rank=i, label=label, count=count, display=format_count(count))
        for i, (label, count) in enumerate(stats.top_hotspots, start=1)
    ]


def build_cards(stats: AggregateStats) -> list[StatCard]:
    """Headline cards: total deaths, wealth lost, average level and wealth."""
    return [
        StatCard(
            label="Total Deaths",
            value=format_count(stats.total_deaths),
            accent="red",
            icon="💀",
        ),
        StatCard(
            label="Total Wealth Lost",
            value=format_millions(stats.total_wealth_lost),
            accent="green",
            icon="💰",
        ),
        StatCard(
            label="Avg Player Level",
            value=format_level(stats.avg_player_level),
            accent="blue",
            icon="⚔️",
        ),
        StatCard(
            label="Avg Wealth Lost",
            value=format_thousands(stats.avg_wealth_lost),
            accent="purple",
            icon="📊",
        ),
    ]


def build_dashboard(
    stats: AggregateStats, title: Optional[str] = None
) -> DashboardResponse:
    """Compose the full dashboard view model from aggregate statistics."""
    return DashboardResponse(
        title=title or settings.dashboard_title,
        total_deaths=stats.total_deaths,
        cards=build_cards(stats),
        top_hotspots=ranked_hotspots(stats),
        hour_bars=build_bars(stats.hour_distribution, HOUR_LABELS),
        day_bars=build_bars(stats.day_distribution, DAY_LABELS),
        month_bars=build_bars(stats.month_distribution, MONTH_LABELS),
        wealth_ranges=wealth_percentages(stats),
        insights=generate_insights(stats),
    )
