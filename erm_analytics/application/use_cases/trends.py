"""Period-over-period comparison of activity analytics."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from erm_analytics.domain.entities import ActivityRecord, PeriodComparison
from erm_analytics.utils import round_half_up

from .analytics import get_filtered_analytics
from .periods import Period

COMPARED_METRICS = (
    "risks_created",
    "controls_created",
    "reports_generated",
    "ai_calls_made",
)


def calc_change(current: float, previous: float) -> int:
    """Signed percentage change from ``previous`` to ``current``.

    A zero baseline reports ``100`` for any positive current value and ``0``
    otherwise.
    """

    if not previous:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def compare_periods(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    current_period: Period,
    previous_period: Period,
    *,
    now: datetime,
    scope_id: str | None = None,
) -> PeriodComparison:
    """Run the analytics pipeline for both periods and diff the results."""

    records = list(activities)
    current = get_filtered_analytics(records, current_period, now=now, scope_id=scope_id)
    previous = get_filtered_analytics(records, previous_period, now=now, scope_id=scope_id)

    changes = {
        "total_activities": calc_change(current.total_activities, previous.total_activities)
    }
    for metric in COMPARED_METRICS:
        changes[metric] = calc_change(
            getattr(current.activities, metric), getattr(previous.activities, metric)
        )
    return PeriodComparison(current=current, previous=previous, changes=changes)


__all__ = ["COMPARED_METRICS", "calc_change", "compare_periods"]
