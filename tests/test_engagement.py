import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from datetime import datetime, timedelta, timezone

import pytest

from erm_analytics.application.use_cases.engagement import (
    calculate_engagement,
    engagement_score,
    feature_bucket,
)
from erm_analytics.domain.entities import ActivityRecord, PeriodRange

END = datetime(2024, 1, 8, tzinfo=timezone.utc)
WEEK = PeriodRange(start=END - timedelta(days=7), end=END)


def _activity(user: str | None, type_: str, action: str, timestamp: str) -> dict:
    return {"user": user, "type": type_, "action": action, "timestamp": timestamp}


@pytest.mark.parametrize(
    ("type_", "action", "bucket"),
    [
        ("risk", "created", "risks"),
        ("control", "deleted", "controls"),
        ("report", "generated", "reports"),
        ("report", "exported", "exports"),
        ("risk", "exported", "exports"),
        ("ai", "suggested", "ai"),
        ("chat", "ai_call", "ai"),
        ("user", "invited", "team"),
        ("auth", "login", None),
        ("dashboard", "viewed", None),
    ],
)
def test_feature_bucket_assignment(type_: str, action: str, bucket: str | None) -> None:
    record = ActivityRecord.from_payload({"type": type_, "action": action})

    assert feature_bucket(record) == bucket


def test_metrics_for_a_week() -> None:
    activities = [
        _activity("Amy", "risk", "created", "2024-01-02T09:00:00Z"),
        _activity("Amy", "risk", "updated", "2024-01-02T10:00:00Z"),
        _activity("Beth", "control", "created", "2024-01-02T11:00:00Z"),
        _activity("Amy", "ai", "ai_call", "2024-01-04T09:00:00Z"),
        _activity(None, "auth", "login", "2024-01-04T09:30:00Z"),
    ]

    metrics = calculate_engagement(activities, WEEK, total_users=4)

    assert metrics.days_in_period == 7
    assert metrics.active_users == 2
    assert metrics.participation_rate == 50
    # Jan 2: Amy + Beth, Jan 4: Amy + unknown
    assert metrics.avg_daily_active_users == 2.0
    assert metrics.activities_per_user == 2.5
    assert metrics.activities_per_day == 0.7
    assert metrics.feature_usage.as_dict() == {
        "risks": 2,
        "controls": 1,
        "reports": 0,
        "ai": 1,
        "exports": 0,
        "team": 0,
    }
    # 2/4*40 + min(0.7*5, 30) + 3/6*30 = 20 + 3.5 + 15
    assert metrics.engagement_score == 39


def test_no_registered_users_scores_zero() -> None:
    activities = [_activity("Amy", "risk", "created", "2024-01-02T09:00:00Z")]

    metrics = calculate_engagement(activities, WEEK, total_users=0)

    assert metrics.engagement_score == 0
    assert metrics.participation_rate == 0
    assert metrics.active_users == 1


def test_empty_input_returns_zeroes() -> None:
    metrics = calculate_engagement([], WEEK, total_users=3)

    assert metrics.total_activities == 0
    assert metrics.active_users == 0
    assert metrics.avg_daily_active_users == 0
    assert metrics.activities_per_user == 0
    assert metrics.activities_per_day == 0
    assert metrics.engagement_score == 0
    assert metrics.feature_usage.features_used == 0


def test_days_in_period_never_below_one() -> None:
    instant = PeriodRange(start=END, end=END)

    assert calculate_engagement([], instant, total_users=1).days_in_period == 1


@pytest.mark.parametrize(
    ("active", "total", "per_day", "features"),
    [(0, 1, 0.0, 0), (1, 1, 100.0, 6), (50, 10, 1000.0, 6), (3, 7, 2.3, 4)],
)
def test_score_is_bounded(active: int, total: int, per_day: float, features: int) -> None:
    score = engagement_score(
        active_users=active, total_users=total, activities_per_day=per_day, features_used=features
    )

    assert 0 <= score <= 100
