"""When and by whom activity happens."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import tzinfo
from typing import Any

from erm_analytics.domain.entities import (
    UNKNOWN_USER,
    ActivityRecord,
    BehaviorPatterns,
    DaySlot,
    HourSlot,
    UserActivity,
    iter_records,
)
from erm_analytics.utils import get_app_timezone

DAY_LABELS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
TOP_SLOTS = 3


def get_user_behavior_patterns(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    *,
    tz: tzinfo | None = None,
) -> BehaviorPatterns:
    """Hour-of-day and day-of-week distributions, per-user and per-type counts.

    Hours and weekdays are read in ``tz`` (the application timezone by
    default). Weekday slots start on Sunday.
    """

    zone = tz or get_app_timezone()
    hourly = [HourSlot(hour=hour) for hour in range(24)]
    daily = [DaySlot(day=index, label=label) for index, label in enumerate(DAY_LABELS)]
    users: dict[str, UserActivity] = {}
    types: dict[str, int] = {}
    total = 0

    for record in iter_records(activities):
        if record.timestamp is None:
            continue
        total += 1
        local = record.timestamp.astimezone(zone)
        hourly[local.hour].count += 1
        daily[(local.weekday() + 1) % 7].count += 1

        name = record.user or UNKNOWN_USER
        entry = users.setdefault(name, UserActivity(name=name))
        entry.count += 1
        if entry.last_active is None or record.timestamp > entry.last_active:
            entry.last_active = record.timestamp

        type_name = record.type or "other"
        types[type_name] = types.get(type_name, 0) + 1

    peak_hours = [slot for slot in sorted(hourly, key=lambda s: s.count, reverse=True)[:TOP_SLOTS] if slot.count]
    active_days = [slot for slot in sorted(daily, key=lambda s: s.count, reverse=True)[:TOP_SLOTS] if slot.count]

    return BehaviorPatterns(
        hourly_distribution=hourly,
        daily_distribution=daily,
        peak_hours=peak_hours,
        most_active_days=active_days,
        user_activity=sorted(users.values(), key=lambda entry: entry.count, reverse=True),
        type_distribution=types,
        total_activities=total,
    )


def top_feature(type_distribution: Mapping[str, int]) -> str | None:
    """Most frequent activity type; the first one seen wins ties."""

    best, best_count = None, 0
    for type_name, count in type_distribution.items():
        if count > best_count:
            best, best_count = type_name, count
    return best


__all__ = ["DAY_LABELS", "get_user_behavior_patterns", "top_feature"]
