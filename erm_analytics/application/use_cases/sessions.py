"""Reconstruction of user sessions from inactivity gaps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from erm_analytics.config import get_settings
from erm_analytics.domain.entities import (
    UNKNOWN_USER,
    ActivityRecord,
    Session,
    SessionAnalytics,
    iter_records,
)
from erm_analytics.utils import round_half_up


def reconstruct_sessions(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    *,
    timeout: timedelta | None = None,
) -> list[Session]:
    """Cluster activities into per-user sessions.

    A session ends when the next record (in timestamp order) belongs to a
    different user or arrives more than ``timeout`` after the previous one.
    Records sharing a timestamp keep their relative input order. ``timeout``
    defaults to the configured ``session_timeout_minutes``.
    """

    if timeout is None:
        timeout = timedelta(minutes=get_settings().session_timeout_minutes)

    timed = [record for record in iter_records(activities) if record.timestamp is not None]
    ordered = sorted(timed, key=lambda record: record.timestamp)

    sessions: list[Session] = []
    current: tuple[str, Session] | None = None
    for record in ordered:
        key = record.user_key or UNKNOWN_USER
        if (
            current is None
            or current[0] != key
            or record.timestamp - current[1].last_activity > timeout
        ):
            if current is not None:
                sessions.append(current[1].close())
            current = (
                key,
                Session(
                    user=record.display_user,
                    start_time=record.timestamp,
                    last_activity=record.timestamp,
                ),
            )
        else:
            current[1].last_activity = record.timestamp
            current[1].activity_count += 1

    if current is not None:
        sessions.append(current[1].close())
    return sessions


def get_session_analytics(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    *,
    timeout: timedelta | None = None,
    recent_limit: int | None = None,
) -> SessionAnalytics:
    """Return sessions plus their summary statistics."""

    if recent_limit is None:
        recent_limit = get_settings().recent_sessions_limit

    sessions = reconstruct_sessions(activities, timeout=timeout)
    if not sessions:
        return SessionAnalytics()

    total = len(sessions)
    total_minutes = sum(session.duration_minutes for session in sessions)
    total_activities = sum(session.activity_count for session in sessions)
    return SessionAnalytics(
        total_sessions=total,
        avg_session_duration=round_half_up(total_minutes / total),
        avg_activities_per_session=round_half_up(total_activities / total, 1),
        sessions=sessions,
        recent_sessions=sessions[-recent_limit:] if recent_limit > 0 else [],
    )


__all__ = [
    "get_session_analytics",
    "reconstruct_sessions",
]
