"""Narrowing of the activity log to a period and workspace scope."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from erm_analytics.domain.entities import ActivityRecord, PeriodRange, iter_records

ALL_SCOPES = "all"


def filter_activities(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    period_range: PeriodRange,
    *,
    scope_id: str | None = None,
) -> list[ActivityRecord]:
    """Return the records inside ``period_range``, keeping log order.

    Records without a usable timestamp are dropped. When ``scope_id`` names a
    workspace, records tagged with another workspace are dropped while
    untagged records are kept.
    """

    scoped = scope_id not in (None, "", ALL_SCOPES)
    filtered: list[ActivityRecord] = []
    for record in iter_records(activities):
        if record.timestamp is None or not period_range.contains(record.timestamp):
            continue
        if scoped and record.workspace_id is not None and record.workspace_id != scope_id:
            continue
        filtered.append(record)
    return filtered


__all__ = ["ALL_SCOPES", "filter_activities"]
