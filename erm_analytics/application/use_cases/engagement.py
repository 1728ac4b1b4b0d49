"""Engagement metrics and the composite engagement score."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timezone
from typing import Any

from erm_analytics.domain.entities import (
    UNKNOWN_USER,
    ActivityRecord,
    ActivityType,
    EngagementMetrics,
    FeatureUsage,
    PeriodRange,
    iter_records,
)
from erm_analytics.utils import round_half_up

FEATURE_COUNT = 6
PARTICIPATION_WEIGHT = 40
ACTIVITY_RATE_CAP = 30
ACTIVITY_RATE_FACTOR = 5
DIVERSITY_WEIGHT = 30


def feature_bucket(record: ActivityRecord) -> str | None:
    """Name of the single feature bucket ``record`` counts towards."""

    category = record.category
    if record.action == "exported":
        return "exports"
    if category is ActivityType.RISK:
        return "risks"
    if category is ActivityType.CONTROL:
        return "controls"
    if category is ActivityType.REPORT:
        return "reports"
    if category is ActivityType.AI or record.action == "ai_call":
        return "ai"
    if category is ActivityType.USER:
        return "team"
    return None


def count_feature_usage(records: Iterable[ActivityRecord]) -> FeatureUsage:
    usage = FeatureUsage()
    for record in records:
        bucket = feature_bucket(record)
        if bucket is not None:
            setattr(usage, bucket, getattr(usage, bucket) + 1)
    return usage


def engagement_score(
    *,
    active_users: int,
    total_users: int,
    activities_per_day: float,
    features_used: int,
) -> int:
    """Weighted 0-100 score; ``0`` when there are no registered users."""

    if total_users <= 0:
        return 0
    participation = active_users / total_users * PARTICIPATION_WEIGHT
    activity_rate = min(activities_per_day * ACTIVITY_RATE_FACTOR, ACTIVITY_RATE_CAP)
    diversity = features_used / FEATURE_COUNT * DIVERSITY_WEIGHT
    score = round_half_up(participation + activity_rate + diversity)
    return max(0, min(100, score))


def calculate_engagement(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    period_range: PeriodRange,
    *,
    total_users: int,
) -> EngagementMetrics:
    """Derive engagement metrics from activities already filtered to a period."""

    records = list(iter_records(activities))
    total = len(records)
    days = period_range.days

    active = {record.user_key for record in records if record.user_key}
    active_users = len(active)

    daily_users: dict[str, set[str]] = {}
    for record in records:
        if record.timestamp is None:
            continue
        day = record.timestamp.astimezone(timezone.utc).date().isoformat()
        daily_users.setdefault(day, set()).add(record.user_key or UNKNOWN_USER)
    avg_daily_active = (
        round_half_up(sum(len(users) for users in daily_users.values()) / len(daily_users), 1)
        if daily_users
        else 0.0
    )

    activities_per_day = round_half_up(total / days, 1)
    usage = count_feature_usage(records)

    return EngagementMetrics(
        total_users=total_users,
        active_users=active_users,
        participation_rate=round_half_up(active_users / total_users * 100) if total_users > 0 else 0,
        avg_daily_active_users=avg_daily_active,
        activities_per_user=round_half_up(total / active_users, 1) if active_users else 0.0,
        activities_per_day=activities_per_day,
        total_activities=total,
        feature_usage=usage,
        engagement_score=engagement_score(
            active_users=active_users,
            total_users=total_users,
            activities_per_day=activities_per_day,
            features_used=usage.features_used,
        ),
        days_in_period=days,
    )


__all__ = [
    "calculate_engagement",
    "count_feature_usage",
    "engagement_score",
    "feature_bucket",
]
