"""Period-filtered activity counters and the recent activity feed."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from erm_analytics.domain.entities import (
    ActivityCounts,
    ActivityRecord,
    ActivityType,
    FilteredAnalytics,
    iter_records,
)

from .activity_filter import filter_activities
from .periods import Period, resolve_period

_UPDATED_ACTIONS = frozenset({"updated", "edited"})


def count_activities(records: Iterable[ActivityRecord]) -> ActivityCounts:
    """Tally notable (type, action) combinations."""

    counts = ActivityCounts()
    for record in records:
        counts.total += 1
        category, action = record.category, record.action

        if category is ActivityType.RISK:
            if action == "created":
                counts.risks_created += 1
            elif action in _UPDATED_ACTIONS:
                counts.risks_updated += 1
            elif action == "deleted":
                counts.risks_deleted += 1
        elif category is ActivityType.CONTROL:
            if action == "created":
                counts.controls_created += 1
            elif action in _UPDATED_ACTIONS:
                counts.controls_updated += 1
            elif action == "deleted":
                counts.controls_deleted += 1
        elif category is ActivityType.REPORT:
            if action in ("created", "generated"):
                counts.reports_generated += 1
            elif action == "exported":
                counts.exports += 1
        elif category is ActivityType.USER:
            if action in ("added", "invited"):
                counts.users_added += 1
            elif action in ("removed", "deleted"):
                counts.users_removed += 1
        elif category is ActivityType.AI or action == "ai_call":
            counts.ai_calls_made += 1
        elif category is ActivityType.AUTH or action == "login":
            counts.logins += 1
        elif action == "exported":
            counts.exports += 1
    return counts


def get_filtered_analytics(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    period: Period,
    *,
    now: datetime,
    scope_id: str | None = None,
) -> FilteredAnalytics:
    """Resolve ``period``, filter the log and count what happened in it."""

    date_range = resolve_period(period, now=now)
    records = filter_activities(activities, date_range, scope_id=scope_id)
    return FilteredAnalytics(
        period=period,
        date_range=date_range,
        activities=count_activities(records),
        total_activities=len(records),
        records=records,
    )


def get_recent_activity(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    *,
    limit: int = 20,
) -> list[ActivityRecord]:
    """Newest records first; records without a timestamp sort last."""

    records = list(iter_records(activities))
    timed = sorted(
        (record for record in records if record.timestamp is not None),
        key=lambda record: record.timestamp,
        reverse=True,
    )
    untimed = [record for record in records if record.timestamp is None]
    return (timed + untimed)[: max(limit, 0)]


__all__ = ["count_activities", "get_filtered_analytics", "get_recent_activity"]
