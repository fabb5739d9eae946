"""
Synthetic Wilderness death event sampler.

Generates mock death records biased toward a fixed set of hotspot regions:
- 80% of deaths land inside a hotspot disc (area-uniform placement)
- 20% of deaths land anywhere on the 800x800 reference plane

All descriptive fields (levels, wealth, hour, weekday) are independent draws.
Hour and weekday are NOT derived from the timestamp.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

import numpy as np

from app.core.hotspots import HOTSPOTS, PLANE_SIZE, UNASSIGNED_LABEL, HotspotRegion


@dataclass(frozen=True)
class DeathRecord:
    """A single synthetic death event."""

    x: float
    y: float
    timestamp: datetime
    player_level: int  # 1-126
    combat_level: int  # 1-126
    wealth_lost: int  # 0 to 100M (exclusive)
    hour_of_day: int  # 0-23
    day_of_week: int  # 0-6, Sunday first
    hotspot: str  # Hotspot name or UNASSIGNED_LABEL


# Share of deaths attributed to a hotspot
HOTSPOT_PROBABILITY = 0.8

# Timestamp window (one year)
WINDOW_START = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
WINDOW_END = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

MIN_LEVEL = 1
MAX_LEVEL = 126
MAX_WEALTH_LOST = 100_000_000


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator. seed=None gives run-to-run variation."""
    return np.random.default_rng(seed)


def _clamp(value: float, low: float = 0.0, high: float = PLANE_SIZE) -> float:
    return max(low, min(high, value))


def _sample_in_disc(
    rng: np.random.Generator, hotspot: HotspotRegion
) -> tuple[float, float]:
    """
    Sample a point uniformly by area within a hotspot disc.

    The sqrt on the radius draw keeps density even across the disc
    instead of clustering toward the center.
    """
    angle = rng.random() * 2 * math.pi
    r = hotspot.radius * math.sqrt(rng.random())
    return hotspot.x + r * math.cos(angle), hotspot.y + r * math.sin(angle)


def _sample_timestamp(rng: np.random.Generator) -> datetime:
    span_seconds = (WINDOW_END - WINDOW_START).total_seconds()
    return WINDOW_START + timedelta(seconds=rng.random() * span_seconds)


def _randint(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in [low, high)."""
    return int(rng.integers(low, high))


def generate_deaths(
    count: int,
    rng: Optional[np.random.Generator] = None,
    hotspots: Sequence[HotspotRegion] = HOTSPOTS,
) -> list[DeathRecord]:
    """
    Generate synthetic death records.

    Args:
        count: Number of records to generate (0 yields an empty list)
        rng: Random generator; a fresh unseeded one is used if omitted
        hotspots: Regions to cluster deaths around

    Returns:
        List of exactly `count` DeathRecords in generation order

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    if rng is None:
        rng = make_rng()

    deaths: list[DeathRecord] = []
    for _ in range(count):
        chosen: Optional[HotspotRegion] = None

        if rng.random() < HOTSPOT_PROBABILITY and hotspots:
            chosen = hotspots[_randint(rng, 0, len(hotspots))]
            x, y = _sample_in_disc(rng, chosen)
        else:
            x = rng.random() * PLANE_SIZE
            y = rng.random() * PLANE_SIZE

        deaths.append(
            DeathRecord(
                x=_clamp(float(x)),
                y=_clamp(float(y)),
                timestamp=_sample_timestamp(rng),
                player_level=_randint(rng, MIN_LEVEL, MAX_LEVEL + 1),
                combat_level=_randint(rng, MIN_LEVEL, MAX_LEVEL + 1),
                wealth_lost=_randint(rng, 0, MAX_WEALTH_LOST),
                hour_of_day=_randint(rng, 0, 24),
                day_of_week=_randint(rng, 0, 7),
                hotspot=chosen.name if chosen else UNASSIGNED_LABEL,
            )
        )

    return deaths
