"""Numeric helpers shared by the analytics use cases."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round ``value`` with halves going towards positive infinity.

    ``round_half_up(2.5) == 3`` and ``round_half_up(-87.5) == -87``, unlike
    the built-in ``round`` which rounds halves to even.
    """

    factor = 10**digits
    rounded = math.floor(value * factor + 0.5) / factor
    if digits <= 0:
        return int(rounded)
    return rounded


__all__ = ["round_half_up"]
