"""Tests for the key-value stores and the repositories built on them."""

from __future__ import annotations

import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from erm_analytics.application.use_cases import capture_daily_snapshot
from erm_analytics.infrastructure.database import initialize_database
from erm_analytics.infrastructure.repositories import (
    ActivityLogRepository,
    InMemoryKeyValueStore,
    SnapshotRepository,
    SqlKeyValueStore,
)
from erm_analytics.utils import FixedClock


@pytest.fixture()
def sql_session():
    engine = create_engine("sqlite:///:memory:")
    initialize_database(engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def test_missing_keys_read_as_empty_collections() -> None:
    store = InMemoryKeyValueStore()

    assert ActivityLogRepository(store, prefix="erm_").list_records() == []
    assert SnapshotRepository(store, prefix="erm_").load() == {}


def test_in_memory_store_returns_copies() -> None:
    store = InMemoryKeyValueStore({"k": {"items": [1]}})

    value = store.get("k")
    value["items"].append(2)

    assert store.get("k") == {"items": [1]}


def test_activity_log_skips_malformed_entries() -> None:
    store = InMemoryKeyValueStore(
        {
            "erm_activities": [
                {"user": "Amy", "type": "risk", "timestamp": "2024-01-01T09:00:00Z"},
                "not an object",
                {"user": "Beth"},
            ]
        }
    )

    records = ActivityLogRepository(store, prefix="erm_").list_records()

    assert [record.user for record in records] == ["Amy", "Beth"]
    assert records[1].timestamp is None


def test_non_list_activity_log_is_ignored() -> None:
    store = InMemoryKeyValueStore({"erm_activities": {"oops": True}})

    assert ActivityLogRepository(store, prefix="erm_").list_records() == []


def test_sql_store_round_trip(sql_session) -> None:
    store = SqlKeyValueStore(sql_session)

    assert store.get("erm_platformAnalytics") is None
    store.set("erm_platformAnalytics", {"2024-01-01": {"totalUsers": 3}})
    store.set("erm_platformAnalytics", {"2024-01-02": {"totalUsers": 4}})

    assert store.get("erm_platformAnalytics") == {"2024-01-02": {"totalUsers": 4}}
    assert store.delete("erm_platformAnalytics") is True
    assert store.delete("erm_platformAnalytics") is False


def test_snapshot_capture_against_sql_store(sql_session) -> None:
    repository = SnapshotRepository(SqlKeyValueStore(sql_session), prefix="erm_")
    clock = FixedClock(datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc))

    capture = capture_daily_snapshot(repository, lambda: {"totalUsers": 12}, clock=clock)
    again = capture_daily_snapshot(repository, lambda: {"totalUsers": 99}, clock=clock)

    assert capture.created is True
    assert again.created is False
    assert repository.load()["2024-06-01"].total_users == 12
