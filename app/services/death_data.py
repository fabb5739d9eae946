"""In-memory holder for the generated death records and their statistics."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.config import get_settings
from app.core.aggregator import AggregateStats, aggregate
from app.core.sampler import DeathRecord, generate_deaths, make_rng

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class DeathSnapshot:
    """Records and stats produced together once per process."""

    records: tuple[DeathRecord, ...]
    stats: AggregateStats
    seed: Optional[int]
    generated_at: datetime


def build_snapshot(count: int, seed: Optional[int] = None) -> DeathSnapshot:
    """Generate `count` records and aggregate them."""
    records = tuple(generate_deaths(count, rng=make_rng(seed)))
    stats = aggregate(records)
    logger.info(
        f"Generated {len(records)} death records "
        f"(seed={'random' if seed is None else seed})"
    )
    return DeathSnapshot(
        records=records,
        stats=stats,
        seed=seed,
        generated_at=datetime.now(timezone.utc),
    )


class DeathDataService:
    """
    Process-wide snapshot holder.

    The snapshot is built on first use and kept for the lifetime of the
    process. Re-rendering the dashboard never regenerates data.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[DeathSnapshot] = None

    def load(self) -> DeathSnapshot:
        """Build the snapshot from settings if not built yet."""
        if self._snapshot is None:
            self._snapshot = build_snapshot(settings.death_count, settings.random_seed)
        return self._snapshot

    @property
    def snapshot(self) -> DeathSnapshot:
        return self.load()

    @property
    def is_loaded(self) -> bool:
        """Check if data has been generated."""
        return self._snapshot is not None


# Global data service instance
death_data_service = DeathDataService()


async def get_snapshot() -> DeathSnapshot:
    """FastAPI dependency for the shared snapshot (runs on the event loop)."""
    return death_data_service.snapshot
