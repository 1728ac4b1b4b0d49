"""Domain entities for the daily platform snapshot history."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _as_number(value: Any) -> float | int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class PlatformStats:
    """Platform totals returned by the stats producer at call time."""

    total_workspaces: int = 0
    total_users: int = 0
    active_users: int = 0
    total_risks: int = 0
    total_controls: int = 0
    total_reports: int = 0
    storage_used: float | int = 0

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PlatformStats":
        """Accept either camelCase (stored JSON) or snake_case keys."""

        def pick(camel: str, snake: str) -> Any:
            return values.get(camel, values.get(snake))

        return cls(
            total_workspaces=_as_int(pick("totalWorkspaces", "total_workspaces")),
            total_users=_as_int(pick("totalUsers", "total_users")),
            active_users=_as_int(pick("activeUsers", "active_users")),
            total_risks=_as_int(pick("totalRisks", "total_risks")),
            total_controls=_as_int(pick("totalControls", "total_controls")),
            total_reports=_as_int(pick("totalReports", "total_reports")),
            storage_used=_as_number(pick("storageUsed", "storage_used")),
        )


@dataclass(frozen=True)
class Snapshot:
    """One persisted row of aggregate platform stats for a calendar day."""

    date: str
    timestamp: str
    total_workspaces: int
    total_users: int
    active_users: int
    total_risks: int
    total_controls: int
    total_reports: int
    storage_used: float | int

    @classmethod
    def from_stats(cls, date: str, timestamp: str, stats: PlatformStats) -> "Snapshot":
        return cls(
            date=date,
            timestamp=timestamp,
            total_workspaces=stats.total_workspaces,
            total_users=stats.total_users,
            active_users=stats.active_users,
            total_risks=stats.total_risks,
            total_controls=stats.total_controls,
            total_reports=stats.total_reports,
            storage_used=stats.storage_used,
        )

    @classmethod
    def from_payload(cls, date: str, payload: Mapping[str, Any]) -> "Snapshot":
        stats = PlatformStats.from_mapping(payload)
        return cls.from_stats(
            str(payload.get("date") or date), str(payload.get("timestamp") or ""), stats
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "timestamp": self.timestamp,
            "totalWorkspaces": self.total_workspaces,
            "totalUsers": self.total_users,
            "activeUsers": self.active_users,
            "totalRisks": self.total_risks,
            "totalControls": self.total_controls,
            "totalReports": self.total_reports,
            "storageUsed": self.storage_used,
        }

    def metric(self, name: str) -> float | int:
        """Return a metric by its stored (camelCase) or attribute name."""

        payload = self.to_payload()
        if name in payload:
            value = payload[name]
        else:
            value = getattr(self, name, 0)
        return value if isinstance(value, (int, float)) else 0


@dataclass(frozen=True)
class SnapshotCapture:
    """Outcome of a daily capture request."""

    snapshot: Snapshot
    created: bool


@dataclass(frozen=True)
class MetricTrend:
    """Movement of one snapshot metric over a look-back window."""

    trend: int
    direction: str
    has_trend: bool
    current: float | int = 0
    previous: float | int = 0


__all__ = ["MetricTrend", "PlatformStats", "Snapshot", "SnapshotCapture"]
