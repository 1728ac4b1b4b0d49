"""Aggregate analytics use cases."""

from .activity_filter import ALL_SCOPES, filter_activities
from .analytics import count_activities, get_filtered_analytics, get_recent_activity
from .behavior import get_user_behavior_patterns, top_feature
from .engagement import calculate_engagement, engagement_score, feature_bucket
from .periods import DEFAULT_PERIOD, PERIOD_LABELS, describe_period, resolve_period
from .quick_stats import get_quick_stats
from .sessions import get_session_analytics, reconstruct_sessions
from .snapshots import (
    SnapshotPersistenceError,
    capture_daily_snapshot,
    get_snapshot_trend,
    prune_snapshot_history,
)
from .timeline import bucket_key, build_activity_timeline
from .trends import calc_change, compare_periods

__all__ = [
    "ALL_SCOPES",
    "DEFAULT_PERIOD",
    "PERIOD_LABELS",
    "SnapshotPersistenceError",
    "bucket_key",
    "build_activity_timeline",
    "calc_change",
    "calculate_engagement",
    "capture_daily_snapshot",
    "compare_periods",
    "count_activities",
    "describe_period",
    "engagement_score",
    "feature_bucket",
    "filter_activities",
    "get_filtered_analytics",
    "get_quick_stats",
    "get_recent_activity",
    "get_session_analytics",
    "get_snapshot_trend",
    "get_user_behavior_patterns",
    "prune_snapshot_history",
    "reconstruct_sessions",
    "resolve_period",
    "top_feature",
]
