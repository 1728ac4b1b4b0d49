"""Domain entities describing engagement metrics for a period."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class FeatureUsage:
    """Histogram of activities over the six product feature buckets."""

    risks: int = 0
    controls: int = 0
    reports: int = 0
    ai: int = 0
    exports: int = 0
    team: int = 0

    @property
    def features_used(self) -> int:
        return sum(1 for count in self.as_dict().values() if count > 0)

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class EngagementMetrics:
    """Participation, activity rates and the composite engagement score."""

    total_users: int = 0
    active_users: int = 0
    participation_rate: int = 0
    avg_daily_active_users: float = 0.0
    activities_per_user: float = 0.0
    activities_per_day: float = 0.0
    total_activities: int = 0
    feature_usage: FeatureUsage = field(default_factory=FeatureUsage)
    engagement_score: int = 0
    days_in_period: int = 1


__all__ = ["EngagementMetrics", "FeatureUsage"]
