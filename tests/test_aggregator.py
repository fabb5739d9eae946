"""Tests for death record aggregation."""

import dataclasses
import math
from collections import Counter
from datetime import datetime, timezone

import pytest

from app.core.aggregator import (
    TOP_HOTSPOT_LIMIT,
    WEALTH_RANGES,
    AggregateStats,
    aggregate,
    rank_hotspots,
    wealth_bucket,
)
from app.core.hotspots import UNASSIGNED_LABEL
from app.core.sampler import DeathRecord, generate_deaths, make_rng


def make_death(
    wealth_lost: int = 1000,
    hotspot: str = UNASSIGNED_LABEL,
    hour_of_day: int = 12,
    day_of_week: int = 3,
    month: int = 6,
    player_level: int = 50,
    combat_level: int = 60,
) -> DeathRecord:
    """Helper to create a test death record."""
    return DeathRecord(
        x=100.0,
        y=200.0,
        timestamp=datetime(2024, month, 15, 10, 30, tzinfo=timezone.utc),
        player_level=player_level,
        combat_level=combat_level,
        wealth_lost=wealth_lost,
        hour_of_day=hour_of_day,
        day_of_week=day_of_week,
        hotspot=hotspot,
    )


class TestEmptyInput:
    """Aggregating no records returns a zeroed result."""

    def test_empty_returns_zeroed_stats(self):
        stats = aggregate([])
        assert stats.total_deaths == 0
        assert stats.total_wealth_lost == 0
        assert stats.hour_distribution == (0,) * 24
        assert stats.day_distribution == (0,) * 7
        assert stats.month_distribution == (0,) * 12
        assert stats.top_hotspots == ()
        assert stats.wealth_ranges == tuple((label, 0) for label, _ in WEALTH_RANGES)
        assert stats.hotspot_deaths == 0

    def test_empty_means_are_absent_not_nan(self):
        stats = aggregate([])
        for mean in (stats.avg_wealth_lost, stats.avg_player_level, stats.avg_combat_level):
            assert mean is None

    def test_empty_equals_default(self):
        assert aggregate([]) == AggregateStats()


class TestWealthRanges:
    """Tests for the wealth lost histogram."""

    def test_three_record_scenario(self):
        stats = aggregate([
            make_death(wealth_lost=5000),
            make_death(wealth_lost=50000),
            make_death(wealth_lost=20_000_000),
        ])
        assert dict(stats.wealth_ranges) == {
            "0-10K": 1,
            "10K-100K": 1,
            "100K-1M": 0,
            "1M-10M": 0,
            "10M+": 1,
        }

    @pytest.mark.parametrize(
        "wealth,expected",
        [
            (0, "0-10K"),
            (10_000, "0-10K"),
            (10_001, "10K-100K"),
            (100_000, "10K-100K"),
            (100_001, "100K-1M"),
            (1_000_000, "100K-1M"),
            (1_000_001, "1M-10M"),
            (10_000_000, "1M-10M"),
            (10_000_001, "10M+"),
            (99_999_999, "10M+"),
        ],
    )
    def test_bucket_upper_bounds_inclusive(self, wealth, expected):
        assert wealth_bucket(wealth) == expected

    def test_bucket_order_preserved(self):
        stats = aggregate([make_death()])
        assert [label for label, _ in stats.wealth_ranges] == ["0-10K", "10K-100K", "100K-1M", "1M-10M", "10M+"]


class TestScalars:
    """Tests for totals and means."""

    def test_totals_and_means(self):
        stats = aggregate([
            make_death(wealth_lost=1000, player_level=10, combat_level=20),
            make_death(wealth_lost=3000, player_level=30, combat_level=40),
        ])
        assert stats.total_deaths == 2
        assert stats.total_wealth_lost == 4000
        assert stats.avg_wealth_lost == 2000
        assert stats.avg_player_level == 20
        assert stats.avg_combat_level == 30

    def test_single_record(self):
        stats = aggregate([make_death(wealth_lost=777)])
        assert stats.avg_wealth_lost == 777


class TestTimeDistributions:
    """Tests for hour, day and month buckets."""

    def test_exact_index_buckets(self):
        stats = aggregate([
            make_death(hour_of_day=0, day_of_week=0, month=1),
            make_death(hour_of_day=23, day_of_week=6, month=12),
            make_death(hour_of_day=23, day_of_week=6, month=12),
        ])
        assert stats.hour_distribution[0] == 1
        assert stats.hour_distribution[23] == 2
        assert stats.day_distribution[0] == 1
        assert stats.day_distribution[6] == 2
        assert stats.month_distribution[0] == 1
        assert stats.month_distribution[11] == 2

    def test_month_taken_from_timestamp(self):
        """Month comes from the timestamp, hour does not."""
        stats = aggregate([make_death(hour_of_day=3, month=2)])
        assert stats.month_distribution[1] == 1
        assert stats.hour_distribution[3] == 1
        assert stats.hour_distribution[10] == 0

    def test_distribution_sums_match_total(self):
        deaths = generate_deaths(1000, rng=make_rng(21))
        stats = aggregate(deaths)
        assert sum(stats.hour_distribution) == stats.total_deaths
        assert sum(stats.day_distribution) == stats.total_deaths
        assert sum(stats.month_distribution) == stats.total_deaths
        assert sum(count for _, count in stats.wealth_ranges) == stats.total_deaths


class TestTopHotspots:
    """Tests for hotspot ranking."""

    def test_sorted_descending(self):
        deaths = (
            [make_death(hotspot="A")] * 1
            + [make_death(hotspot="B")] * 3
            + [make_death(hotspot="C")] * 2
        )
        assert aggregate(deaths).top_hotspots == (("B", 3), ("C", 2), ("A", 1))

    def test_ties_keep_first_seen_order(self):
        deaths = [
            make_death(hotspot="Z"),
            make_death(hotspot="A"),
            make_death(hotspot="M"),
            make_death(hotspot="A"),
            make_death(hotspot="Z"),
            make_death(hotspot="M"),
        ]
        assert aggregate(deaths).top_hotspots == (("Z", 2), ("A", 2), ("M", 2))

    def test_truncated_to_five(self):
        deaths = [make_death(hotspot=f"H{i}") for i in range(8)]
        top = aggregate(deaths).top_hotspots
        assert len(top) == TOP_HOTSPOT_LIMIT
        assert [label for label, _ in top] == ["H0", "H1", "H2", "H3", "H4"]

    def test_unassigned_ranked_as_its_own_label(self):
        deaths = [make_death(hotspot=UNASSIGNED_LABEL)] * 2 + [make_death(hotspot="A")]
        assert aggregate(deaths).top_hotspots[0] == (UNASSIGNED_LABEL, 2)

    def test_counts_match_direct_recount(self):
        deaths = generate_deaths(1000, rng=make_rng(8))
        recount = Counter(d.hotspot for d in deaths)
        top = rank_hotspots(deaths)
        assert len(top) <= TOP_HOTSPOT_LIMIT
        for label, count in top:
            assert recount[label] == count


class TestHotspotDeaths:
    """Tests for the count of deaths inside any named hotspot."""

    def test_counts_every_named_hotspot(self):
        """Counted over all labels, not just the ranked top five."""
        deaths = (
            [make_death(hotspot=UNASSIGNED_LABEL)] * 10
            + [make_death(hotspot=f"H{i}") for i in range(8)]
        )
        stats = aggregate(deaths)
        assert len(stats.top_hotspots) == TOP_HOTSPOT_LIMIT
        assert stats.hotspot_deaths == 8

    def test_matches_sampled_records(self):
        deaths = generate_deaths(2000, rng=make_rng(0))
        stats = aggregate(deaths)
        expected = sum(1 for d in deaths if d.hotspot != UNASSIGNED_LABEL)
        assert stats.hotspot_deaths == expected


class TestImmutability:
    """Aggregate results cannot be changed after they are computed."""

    def test_wealth_ranges_cannot_be_mutated(self):
        stats = aggregate([make_death(wealth_lost=20_000_000)] * 10)
        with pytest.raises(TypeError):
            stats.wealth_ranges["10M+"] += 100
        assert sum(count for _, count in stats.wealth_ranges) == stats.total_deaths

    def test_fields_cannot_be_reassigned(self):
        stats = aggregate([make_death()])
        with pytest.raises(dataclasses.FrozenInstanceError):
            stats.wealth_ranges = ()

    def test_stats_are_hashable(self):
        deaths = [make_death(hotspot="A"), make_death(hotspot="B")]
        assert hash(aggregate(deaths)) == hash(aggregate(deaths))


class TestDeterminism:
    """Aggregation is a pure function of its input."""

    def test_same_input_same_output(self):
        deaths = [
            make_death(wealth_lost=5000, hotspot="A"),
            make_death(wealth_lost=50000, hotspot="B"),
            make_death(wealth_lost=20_000_000, hotspot="A"),
        ]
        first = aggregate(deaths)
        second = aggregate(deaths)
        assert first == second
        assert repr(first) == repr(second)

    def test_seeded_generation_reproducible(self):
        first = aggregate(generate_deaths(500, rng=make_rng(4)))
        second = aggregate(generate_deaths(500, rng=make_rng(4)))
        assert first == second
        assert not math.isnan(first.avg_wealth_lost)
