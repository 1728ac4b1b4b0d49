"""Resolution of period tokens into concrete instant ranges."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any, Final, Union

from erm_analytics.domain.entities import PeriodRange
from erm_analytics.utils import EPOCH, ensure_app_timezone, local_midnight, parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_PERIOD: Final[str] = "week"

ROLLING_PERIOD_DAYS: Final[dict[str, int]] = {
    "week": 7,
    "month": 30,
    "quarter": 90,
    "year": 365,
}

PERIOD_LABELS: Final[dict[str, str]] = {
    "today": "Today",
    "yesterday": "Yesterday",
    "week": "This Week",
    "month": "This Month",
    "quarter": "This Quarter",
    "year": "This Year",
    "lifetime": "All Time",
}

Period = Union[str, PeriodRange, Mapping[str, Any], Sequence[Any], None]


def _rolling_range(now: datetime, days: int) -> PeriodRange:
    # Exactly ``days`` * 24 h of elapsed time, across daylight-saving changes too.
    start = (now.astimezone(timezone.utc) - timedelta(days=days)).astimezone(now.tzinfo)
    return PeriodRange(start=start, end=now)


def _custom_range(period: Any, now: datetime) -> PeriodRange | None:
    if isinstance(period, PeriodRange):
        raw_start, raw_end = period.start, period.end
    elif isinstance(period, Mapping):
        raw_start, raw_end = period.get("start"), period.get("end")
    elif isinstance(period, Sequence) and not isinstance(period, str) and len(period) == 2:
        raw_start, raw_end = period
    else:
        return None

    start = parse_timestamp(raw_start, default_tz=now.tzinfo)
    end = parse_timestamp(raw_end, default_tz=now.tzinfo)
    if start is None or end is None:
        return None
    return PeriodRange(start=start, end=end)


def resolve_period(period: Period, *, now: datetime) -> PeriodRange:
    """Return the ``[start, end)`` range described by ``period``.

    The zone of ``now`` (the application timezone when naive) defines the
    calendar days used by ``today`` and ``yesterday``. Unrecognized tokens
    resolve to the rolling ``week`` window.
    """

    if now.tzinfo is None:
        now = ensure_app_timezone(now)

    if period == "today":
        return PeriodRange(start=local_midnight(now), end=now)
    if period == "yesterday":
        today_start = local_midnight(now)
        return PeriodRange(start=today_start - timedelta(days=1), end=today_start)
    if period == "lifetime":
        return PeriodRange(start=EPOCH, end=now)
    if isinstance(period, str) and period in ROLLING_PERIOD_DAYS:
        return _rolling_range(now, ROLLING_PERIOD_DAYS[period])

    custom = _custom_range(period, now)
    if custom is not None:
        return custom

    logger.debug("Unrecognized period %r; falling back to '%s'", period, DEFAULT_PERIOD)
    return _rolling_range(now, ROLLING_PERIOD_DAYS[DEFAULT_PERIOD])


def describe_period(period: Period) -> str:
    """Human readable label of ``period`` for dashboards."""

    if isinstance(period, str) and period in PERIOD_LABELS:
        return PERIOD_LABELS[period]
    if _looks_custom(period):
        return "Custom Range"
    return PERIOD_LABELS[DEFAULT_PERIOD]


def _looks_custom(period: Any) -> bool:
    return isinstance(period, (PeriodRange, Mapping)) or (
        isinstance(period, Sequence) and not isinstance(period, str) and len(period) == 2
    )


__all__ = [
    "DEFAULT_PERIOD",
    "PERIOD_LABELS",
    "Period",
    "ROLLING_PERIOD_DAYS",
    "describe_period",
    "resolve_period",
]
