"""Domain entity for chartable activity timelines."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TimelineBucket:
    """Activity counts for one fixed-granularity time slot."""

    key: str
    count: int = 0
    counts_by_type: dict[str, int] = field(default_factory=dict)


__all__ = ["TimelineBucket"]
