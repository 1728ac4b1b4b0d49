"""Domain entities exposed by the analytics engine."""

from .activity_record import UNKNOWN_USER, ActivityRecord, ActivityType, iter_records
from .analytics import (
    ActivityCounts,
    BehaviorPatterns,
    DaySlot,
    FilteredAnalytics,
    HourSlot,
    PeriodComparison,
    QuickStats,
    UserActivity,
)
from .engagement import EngagementMetrics, FeatureUsage
from .period_range import PeriodRange
from .session import Session, SessionAnalytics
from .snapshot import MetricTrend, PlatformStats, Snapshot, SnapshotCapture
from .timeline import TimelineBucket

__all__ = [
    "ActivityCounts",
    "ActivityRecord",
    "ActivityType",
    "BehaviorPatterns",
    "DaySlot",
    "EngagementMetrics",
    "FeatureUsage",
    "FilteredAnalytics",
    "HourSlot",
    "MetricTrend",
    "PeriodComparison",
    "PeriodRange",
    "PlatformStats",
    "QuickStats",
    "Session",
    "SessionAnalytics",
    "Snapshot",
    "SnapshotCapture",
    "TimelineBucket",
    "UNKNOWN_USER",
    "UserActivity",
    "iter_records",
]
