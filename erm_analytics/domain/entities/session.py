"""Domain entities for reconstructed user sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta


@dataclass
class Session:
    """A run of one user's activities without a long inactivity gap."""

    user: str
    start_time: datetime
    last_activity: datetime
    activity_count: int = 1
    duration: timedelta = field(default_factory=timedelta)

    def close(self) -> "Session":
        self.duration = self.last_activity - self.start_time
        return self

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60


@dataclass
class SessionAnalytics:
    """Summary of the sessions found in a set of activities."""

    total_sessions: int = 0
    avg_session_duration: int = 0
    avg_activities_per_session: float = 0.0
    sessions: list[Session] = field(default_factory=list)
    recent_sessions: list[Session] = field(default_factory=list)


__all__ = ["Session", "SessionAnalytics"]
