"""Bucketing of activities into chartable time series."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Final

from erm_analytics.domain.entities import ActivityRecord, TimelineBucket, iter_records

logger = logging.getLogger(__name__)

DEFAULT_GRANULARITY: Final[str] = "day"
OTHER_TYPE: Final[str] = "other"


def _hour_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H")


def _day_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d")


def _week_key(moment: datetime) -> str:
    # ISO-8601 week numbering; the year is the ISO week-year.
    iso_year, iso_week, _ = moment.isocalendar()
    return f"{iso_year:04d}-W{iso_week:02d}"


def _month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


BUCKET_KEYS: Final[dict[str, Callable[[datetime], str]]] = {
    "hour": _hour_key,
    "day": _day_key,
    "week": _week_key,
    "month": _month_key,
}


def bucket_key(moment: datetime, granularity: str = DEFAULT_GRANULARITY) -> str:
    """Return the UTC bucket key of ``moment`` for ``granularity``."""

    key_for = BUCKET_KEYS.get(granularity) or BUCKET_KEYS[DEFAULT_GRANULARITY]
    return key_for(moment.astimezone(timezone.utc))


def build_activity_timeline(
    activities: Iterable[ActivityRecord | Mapping[str, Any]],
    granularity: str | None = DEFAULT_GRANULARITY,
) -> list[TimelineBucket]:
    """Group activities per time bucket, sorted by ascending key.

    Unknown granularities fall back to ``day``.
    """

    if granularity not in BUCKET_KEYS:
        if granularity is not None:
            logger.debug("Unknown granularity %r; using '%s'", granularity, DEFAULT_GRANULARITY)
        granularity = DEFAULT_GRANULARITY

    buckets: dict[str, TimelineBucket] = {}
    for record in iter_records(activities):
        if record.timestamp is None:
            continue
        key = bucket_key(record.timestamp, granularity)
        bucket = buckets.setdefault(key, TimelineBucket(key=key))
        bucket.count += 1
        type_name = record.type or OTHER_TYPE
        bucket.counts_by_type[type_name] = bucket.counts_by_type.get(type_name, 0) + 1

    return [buckets[key] for key in sorted(buckets)]


__all__ = ["BUCKET_KEYS", "DEFAULT_GRANULARITY", "bucket_key", "build_activity_timeline"]
