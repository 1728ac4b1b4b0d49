"""One-call dashboard summary of a period."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, tzinfo
from typing import Any

from erm_analytics.domain.entities import ActivityRecord, QuickStats

from .analytics import get_filtered_analytics
from .behavior import get_user_behavior_patterns, top_feature
from .engagement import calculate_engagement
from .periods import Period


def get_quick_stats(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    period: Period,
    *,
    now: datetime,
    total_users: int,
    scope_id: str | None = None,
    tz: tzinfo | None = None,
) -> QuickStats:
    analytics = get_filtered_analytics(activities, period, now=now, scope_id=scope_id)
    engagement = calculate_engagement(
        analytics.records, analytics.date_range, total_users=total_users
    )
    behavior = get_user_behavior_patterns(analytics.records, tz=tz or now.tzinfo)

    return QuickStats(
        period=period,
        total_activities=analytics.total_activities,
        active_users=engagement.active_users,
        participation_rate=engagement.participation_rate,
        engagement_score=engagement.engagement_score,
        top_feature=top_feature(behavior.type_distribution),
        peak_hour=behavior.peak_hours[0].hour if behavior.peak_hours else None,
        most_active_day=behavior.most_active_days[0].label if behavior.most_active_days else None,
        activities_per_day=engagement.activities_per_day,
    )


__all__ = ["get_quick_stats"]
