"""Recency weighting shared by the signal extractors."""

from __future__ import annotations

import math
from datetime import date

# ln(2), so that the weight halves every half-life
_LN2 = 0.693


def days_between(earlier: date, as_of: date) -> int:
    """Whole days from ``earlier`` to ``as_of``; future dates count as 0."""
    return max(0, (as_of - earlier).days)


def exponential_decay(days: float, half_life_days: float) -> float:
    """Weight in (0, 1] that halves every ``half_life_days``."""
    return math.exp(-_LN2 * days / half_life_days)
