"""Injectable time providers.

Every use case that needs "now" receives a :class:`Clock` (or an explicit
``now`` value) instead of reading the system time itself.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Protocol

from .datetime import ensure_app_timezone, get_app_timezone


class Clock(Protocol):
    """Anything able to report the current aware instant."""

    def now(self) -> datetime:  # pragma: no cover - protocol definition
        ...


class SystemClock:
    """Clock backed by the system time, localized to a timezone."""

    def __init__(self, tz: tzinfo | None = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(tz=self._tz or get_app_timezone())


class FixedClock:
    """Clock frozen at a given instant; ``advance`` moves it forward."""

    def __init__(self, moment: datetime) -> None:
        self._moment = moment if moment.tzinfo is not None else ensure_app_timezone(moment)

    def now(self) -> datetime:
        return self._moment

    def advance(self, delta: timedelta) -> None:
        self._moment = self._moment + delta


__all__ = ["Clock", "FixedClock", "SystemClock"]
