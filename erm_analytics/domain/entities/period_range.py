"""Domain entity for a resolved analytics period."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_DAY = timedelta(days=1)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class PeriodRange:
    """Half-open ``[start, end)`` instant range."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return _as_utc(self.start) <= _as_utc(moment) < _as_utc(self.end)

    @property
    def duration(self) -> timedelta:
        """Elapsed time between the bounds, not the wall-clock difference."""

        return _as_utc(self.end) - _as_utc(self.start)

    @property
    def days(self) -> int:
        """Number of started days covered by the range, never below one."""

        return max(1, math.ceil(self.duration / _DAY))


__all__ = ["PeriodRange"]
