"""Tests for the daily snapshot capture and its rolling history."""

from __future__ import annotations

import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from datetime import date, datetime, timedelta, timezone

import pytest

from erm_analytics.application.use_cases.snapshots import (
    SnapshotPersistenceError,
    capture_daily_snapshot,
    get_snapshot_trend,
    prune_snapshot_history,
)
from erm_analytics.domain.entities import PlatformStats
from erm_analytics.infrastructure.repositories import InMemoryKeyValueStore, SnapshotRepository
from erm_analytics.utils import FixedClock


class _RecordingStore(InMemoryKeyValueStore):
    def __init__(self) -> None:
        super().__init__()
        self.writes = 0

    def set(self, key, value) -> None:
        self.writes += 1
        super().set(key, value)


class _FailingStore(InMemoryKeyValueStore):
    def set(self, key, value) -> None:
        raise OSError("quota exceeded")


def _stats(users: int = 3) -> PlatformStats:
    return PlatformStats(
        total_workspaces=1,
        total_users=users,
        active_users=2,
        total_risks=10,
        total_controls=4,
        total_reports=1,
        storage_used=2048,
    )


def test_second_capture_on_same_day_is_a_noop() -> None:
    store = _RecordingStore()
    repository = SnapshotRepository(store, prefix="erm_")
    clock = FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
    calls = []

    def producer() -> PlatformStats:
        calls.append(1)
        return _stats()

    first = capture_daily_snapshot(repository, producer, clock=clock)
    clock.advance(timedelta(hours=10))
    second = capture_daily_snapshot(repository, producer, clock=clock)

    assert first.created is True
    assert second.created is False
    assert second.snapshot == first.snapshot
    assert store.writes == 1
    assert len(calls) == 1
    assert list(repository.load()) == ["2024-05-01"]


def test_snapshot_payload_uses_stored_field_names() -> None:
    store = InMemoryKeyValueStore()
    repository = SnapshotRepository(store, prefix="erm_")
    clock = FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))

    capture_daily_snapshot(repository, lambda: {"totalUsers": 7, "storageUsed": 1.5}, clock=clock)

    stored = store.get("erm_platformAnalytics")
    assert stored["2024-05-01"]["totalUsers"] == 7
    assert stored["2024-05-01"]["storageUsed"] == 1.5
    assert stored["2024-05-01"]["totalRisks"] == 0
    assert stored["2024-05-01"]["timestamp"] == "2024-05-01T09:00:00.000Z"


def test_retention_keeps_most_recent_ninety_days() -> None:
    repository = SnapshotRepository(InMemoryKeyValueStore(), prefix="erm_")
    start = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    clock = FixedClock(start)

    for _ in range(95):
        capture_daily_snapshot(repository, _stats, clock=clock)
        clock.advance(timedelta(days=1))

    dates = list(repository.load())
    expected = [(date(2024, 1, 1) + timedelta(days=offset)).isoformat() for offset in range(5, 95)]
    assert len(dates) == 90
    assert dates == expected


def test_date_key_follows_the_clock_timezone() -> None:
    repository = SnapshotRepository(InMemoryKeyValueStore(), prefix="erm_")
    late_evening = datetime(2024, 5, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    capture = capture_daily_snapshot(repository, _stats, clock=FixedClock(late_evening))

    assert capture.snapshot.date == "2024-05-01"


def test_persistence_failure_is_reported_with_the_snapshot() -> None:
    repository = SnapshotRepository(_FailingStore(), prefix="erm_")
    clock = FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))

    with pytest.raises(SnapshotPersistenceError) as excinfo:
        capture_daily_snapshot(repository, _stats, clock=clock)

    assert excinfo.value.snapshot.total_users == 3
    assert excinfo.value.snapshot.date == "2024-05-01"
    assert isinstance(excinfo.value.__cause__, OSError)
    assert repository.load() == {}


def test_prune_snapshot_history_is_ordered() -> None:
    history = {f"2024-01-{day:02d}": object() for day in (5, 1, 3, 2, 4)}

    pruned = prune_snapshot_history(history, retention=3)

    assert list(pruned) == ["2024-01-03", "2024-01-04", "2024-01-05"]


def test_snapshot_trend_compares_against_days_back() -> None:
    repository = SnapshotRepository(InMemoryKeyValueStore(), prefix="erm_")
    clock = FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
    capture_daily_snapshot(repository, lambda: _stats(users=10), clock=clock)
    clock.advance(timedelta(days=7))
    capture_daily_snapshot(repository, lambda: _stats(users=15), clock=clock)

    trend = get_snapshot_trend(repository.load(), "totalUsers", clock=clock)

    assert trend.has_trend is True
    assert trend.direction == "up"
    assert trend.trend == 50
    assert (trend.current, trend.previous) == (15, 10)


def test_snapshot_trend_needs_two_snapshots() -> None:
    repository = SnapshotRepository(InMemoryKeyValueStore(), prefix="erm_")
    clock = FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
    capture_daily_snapshot(repository, _stats, clock=clock)

    trend = get_snapshot_trend(repository.load(), "totalUsers", clock=clock)

    assert trend.has_trend is False
    assert trend.direction == "neutral"
    assert trend.trend == 0
