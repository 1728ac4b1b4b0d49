"""Utility helpers for reusable functionality."""

from .clock import Clock, FixedClock, SystemClock
from .numbers import round_half_up
from .datetime import (
    EPOCH,
    ensure_app_timezone,
    format_timestamp,
    get_app_timezone,
    local_midnight,
    now_in_app_timezone,
    parse_timestamp,
)

__all__ = [
    "Clock",
    "EPOCH",
    "FixedClock",
    "SystemClock",
    "ensure_app_timezone",
    "format_timestamp",
    "get_app_timezone",
    "local_midnight",
    "now_in_app_timezone",
    "parse_timestamp",
    "round_half_up",
]
