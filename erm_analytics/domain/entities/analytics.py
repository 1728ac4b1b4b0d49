"""Domain entities for period-filtered activity analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .activity_record import ActivityRecord
from .period_range import PeriodRange


@dataclass
class ActivityCounts:
    """Counters of notable (type, action) combinations."""

    risks_created: int = 0
    risks_updated: int = 0
    risks_deleted: int = 0
    controls_created: int = 0
    controls_updated: int = 0
    controls_deleted: int = 0
    reports_generated: int = 0
    users_added: int = 0
    users_removed: int = 0
    ai_calls_made: int = 0
    logins: int = 0
    exports: int = 0
    total: int = 0


@dataclass
class FilteredAnalytics:
    """Activity counters for one period and scope."""

    period: Any
    date_range: PeriodRange
    activities: ActivityCounts
    total_activities: int
    records: list[ActivityRecord] = field(default_factory=list)


@dataclass
class PeriodComparison:
    """Two analytics passes and the signed percentage change per metric."""

    current: FilteredAnalytics
    previous: FilteredAnalytics
    changes: dict[str, int]


@dataclass
class HourSlot:
    hour: int
    count: int = 0


@dataclass
class DaySlot:
    day: int
    label: str
    count: int = 0


@dataclass
class UserActivity:
    name: str
    count: int = 0
    last_active: datetime | None = None


@dataclass
class BehaviorPatterns:
    """When and by whom activity happens within a period."""

    hourly_distribution: list[HourSlot]
    daily_distribution: list[DaySlot]
    peak_hours: list[HourSlot]
    most_active_days: list[DaySlot]
    user_activity: list[UserActivity]
    type_distribution: dict[str, int]
    total_activities: int


@dataclass
class QuickStats:
    """Compact dashboard summary of a period."""

    period: Any
    total_activities: int
    active_users: int
    participation_rate: int
    engagement_score: int
    top_feature: str | None
    peak_hour: int | None
    most_active_day: str | None
    activities_per_day: float


__all__ = [
    "ActivityCounts",
    "BehaviorPatterns",
    "DaySlot",
    "FilteredAnalytics",
    "HourSlot",
    "PeriodComparison",
    "QuickStats",
    "UserActivity",
]
