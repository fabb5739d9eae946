"""
Summary statistics over a complete collection of death records.

The result is recomputed wholesale from the full collection and never
updated in place. Accumulation is sequential in input order so that the
same input always produces the same floating point means.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from app.core.hotspots import UNASSIGNED_LABEL
from app.core.sampler import DeathRecord


# Wealth histogram buckets: (label, inclusive upper bound). None = unbounded.
WEALTH_RANGES: tuple[tuple[str, Optional[int]], ...] = (
    ("0-10K", 10_000),
    ("10K-100K", 100_000),
    ("100K-1M", 1_000_000),
    ("1M-10M", 10_000_000),
    ("10M+", None),
)

TOP_HOTSPOT_LIMIT = 5

HOURS_PER_DAY = 24
DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class AggregateStats:
    """
    Derived statistics for display.

    Means are None when there are no records to average.
    """

    total_deaths: int = 0
    total_wealth_lost: int = 0
    avg_wealth_lost: Optional[float] = None
    avg_player_level: Optional[float] = None
    avg_combat_level: Optional[float] = None
    hour_distribution: tuple[int, ...] = (0,) * HOURS_PER_DAY
    day_distribution: tuple[int, ...] = (0,) * DAYS_PER_WEEK
    month_distribution: tuple[int, ...] = (0,) * MONTHS_PER_YEAR
    top_hotspots: tuple[tuple[str, int], ...] = ()
    # (label, count) pairs in WEALTH_RANGES order
    wealth_ranges: tuple[tuple[str, int], ...] = tuple(
        (label, 0) for label, _ in WEALTH_RANGES
    )
    # Deaths attributed to any named hotspot, before top-N truncation
    hotspot_deaths: int = 0


def wealth_bucket(wealth_lost: int) -> str:
    """Return the wealth range label for an amount (upper bounds inclusive)."""
    for label, upper in WEALTH_RANGES:
        if upper is None or wealth_lost <= upper:
            return label
    # Unreachable: the last bucket is unbounded
    return WEALTH_RANGES[-1][0]


def rank_hotspots(
    records: Sequence[DeathRecord], limit: int = TOP_HOTSPOT_LIMIT
) -> tuple[tuple[str, int], ...]:
    """
    Rank hotspot labels by death count, descending.

    Counter keeps first-seen order and sorted() is stable, so ties stay
    in the order each label first appeared in the records.
    """
    counts = Counter(record.hotspot for record in records)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return tuple(ranked[:limit])


def aggregate(records: Sequence[DeathRecord]) -> AggregateStats:
    """
    Compute summary statistics for a collection of death records.

    Args:
        records: Complete record collection, in generation order

    Returns:
        AggregateStats; a zeroed instance with absent means if records is empty
    """
    if not records:
        return AggregateStats()

    total_deaths = len(records)
    total_wealth = 0
    total_player_level = 0
    total_combat_level = 0

    hours = [0] * HOURS_PER_DAY
    days = [0] * DAYS_PER_WEEK
    months = [0] * MONTHS_PER_YEAR
    wealth_ranges = {label: 0 for label, _ in WEALTH_RANGES}
    hotspot_deaths = 0

    for record in records:
        total_wealth += record.wealth_lost
        total_player_level += record.player_level
        total_combat_level += record.combat_level

        hours[record.hour_of_day] += 1
        days[record.day_of_week] += 1
        months[record.timestamp.month - 1] += 1

        wealth_ranges[wealth_bucket(record.wealth_lost)] += 1
        if record.hotspot != UNASSIGNED_LABEL:
            hotspot_deaths += 1

    return AggregateStats(
        total_deaths=total_deaths,
        total_wealth_lost=total_wealth,
        avg_wealth_lost=total_wealth / total_deaths,
        avg_player_level=total_player_level / total_deaths,
        avg_combat_level=total_combat_level / total_deaths,
        hour_distribution=tuple(hours),
        day_distribution=tuple(days),
        month_distribution=tuple(months),
        top_hotspots=rank_hotspots(records),
        wealth_ranges=tuple(wealth_ranges.items()),
        hotspot_deaths=hotspot_deaths,
    )
