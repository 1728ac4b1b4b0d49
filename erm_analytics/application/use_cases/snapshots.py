"""Daily platform snapshots with a bounded rolling history."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any, Union

from erm_analytics.domain.entities import MetricTrend, PlatformStats, Snapshot, SnapshotCapture
from erm_analytics.infrastructure.repositories import SnapshotRepository
from erm_analytics.utils import Clock, format_timestamp

from .trends import calc_change

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = 90

StatsProducer = Callable[[], Union[PlatformStats, Mapping[str, Any]]]


class SnapshotPersistenceError(RuntimeError):
    """Raised when the snapshot history could not be written.

    ``snapshot`` holds the computed snapshot so callers can still show it.
    """

    def __init__(self, message: str, snapshot: Snapshot) -> None:
        super().__init__(message)
        self.snapshot = snapshot


def prune_snapshot_history(
    history: Mapping[str, Snapshot], retention: int = DEFAULT_RETENTION
) -> dict[str, Snapshot]:
    """Keep only the ``retention`` most recent dates, ascending."""

    dates = sorted(history)
    kept = dates[-retention:] if retention > 0 else []
    return {date_key: history[date_key] for date_key in kept}


def capture_daily_snapshot(
    repository: SnapshotRepository,
    stats_producer: StatsProducer,
    *,
    clock: Clock,
    retention: int = DEFAULT_RETENTION,
) -> SnapshotCapture:
    """Record today's platform totals once per local calendar day."""

    now = clock.now()
    today = now.date().isoformat()
    history = repository.load()

    existing = history.get(today)
    if existing is not None:
        logger.debug("Snapshot for %s already captured", today)
        return SnapshotCapture(snapshot=existing, created=False)

    stats = stats_producer()
    if not isinstance(stats, PlatformStats):
        stats = PlatformStats.from_mapping(stats)

    snapshot = Snapshot.from_stats(today, format_timestamp(now), stats)
    history[today] = snapshot
    pruned = prune_snapshot_history(history, retention)
    evicted = len(history) - len(pruned)

    try:
        repository.save(pruned)
    except Exception as exc:
        logger.error("Could not persist snapshot for %s: %s", today, exc)
        raise SnapshotPersistenceError(
            f"Failed to persist platform snapshot for {today}", snapshot
        ) from exc

    logger.info("Platform analytics snapshot taken for %s (evicted %s)", today, evicted)
    return SnapshotCapture(snapshot=snapshot, created=True)


def get_snapshot_trend(
    history: Mapping[str, Snapshot],
    metric: str,
    *,
    clock: Clock,
    days_back: int = 7,
) -> MetricTrend:
    """Compare the latest value of ``metric`` with the value ``days_back`` ago.

    The previous value is taken from the latest snapshot dated on or before
    the target day, or ``0`` when none is that old.
    """

    dates = sorted(history)
    if len(dates) < 2:
        return MetricTrend(trend=0, direction="neutral", has_trend=False)

    current = history[dates[-1]].metric(metric)
    target = (clock.now() - timedelta(days=days_back)).date().isoformat()

    previous: float | int = 0
    for date_key in reversed(dates):
        if date_key <= target:
            previous = history[date_key].metric(metric)
            break

    change = calc_change(current, previous)
    if change > 0:
        direction = "up"
    elif change < 0:
        direction = "down"
    else:
        direction = "neutral"
    return MetricTrend(
        trend=abs(change),
        direction=direction,
        has_trend=True,
        current=current,
        previous=previous,
    )


__all__ = [
    "DEFAULT_RETENTION",
    "SnapshotPersistenceError",
    "StatsProducer",
    "capture_daily_snapshot",
    "get_snapshot_trend",
    "prune_snapshot_history",
]
