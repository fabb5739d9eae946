"""Data-driven key findings for the dashboard insights panel."""

from typing import Optional, Sequence

from app.core.aggregator import AggregateStats
from app.core.hotspots import HOTSPOTS, UNASSIGNED_LABEL

DAY_NAMES = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

# Peak hours are called out as evening activity when in this range
EVENING_START_HOUR = 18
EVENING_END_HOUR = 22


def _peak_index(counts: Sequence[int]) -> Optional[int]:
    """Index of the largest bucket (earliest on ties), None if all zero."""
    if not counts or max(counts) == 0:
        return None
    return counts.index(max(counts))


def _pct(part: int, total: int) -> str:
    return f"{part / total * 100:.1f}%"


def time_findings(stats: AggregateStats) -> list[str]:
    """Findings about when deaths happen."""
    explanations = []

    peak_hour = _peak_index(stats.hour_distribution)
    if peak_hour is not None:
        count = stats.hour_distribution[peak_hour]
        when = (
            "in the evening"
            if EVENING_START_HOUR <= peak_hour <= EVENING_END_HOUR
            else "outside evening hours"
        )
        explanations.append(
            f"Peak hour: most deaths occur around {peak_hour}:00 "
            f"({count:,} deaths), {when}."
        )

    busiest_day = _peak_index(stats.day_distribution)
    if busiest_day is not None:
        count = stats.day_distribution[busiest_day]
        weekend = " (weekend)" if busiest_day in (0, 6) else ""
        explanations.append(
            f"Busiest day: {DAY_NAMES[busiest_day]}{weekend} with {count:,} deaths."
        )

    return explanations


def generate_insights(stats: AggregateStats) -> list[str]:
    """
    Generate human-readable findings from aggregate statistics.

    Returns:
        List of findings; a single 'no data' line when there are no deaths
    """
    if stats.total_deaths == 0:
        return ["No death data available yet."]

    insights = time_findings(stats)

    if stats.wealth_ranges:
        label, count = max(stats.wealth_ranges, key=lambda item: item[1])
        insights.append(
            f"Wealth distribution: most losses fall in the {label} range "
            f"({_pct(count, stats.total_deaths)} of deaths)."
        )

    named = [(label, count) for label, count in stats.top_hotspots if label != UNASSIGNED_LABEL]
    if named:
        deadliest, deadliest_count = named[0]
        insights.append(
            f"Deadliest area: {deadliest} with {deadliest_count:,} deaths."
        )

    if stats.hotspot_deaths:
        insights.append(
            f"Hotspot concentration: {_pct(stats.hotspot_deaths, stats.total_deaths)} of deaths "
            f"occur within {len(HOTSPOTS)} major hotspots."
        )

    return insights
