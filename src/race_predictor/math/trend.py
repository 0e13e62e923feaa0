"""Least-squares linear trend used by the efficiency-factor signal."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class LinearTrend:
    slope: float
    intercept: float
    r_squared: float
    mean_y: float


def linear_trend(
    xs: list[float] | tuple[float, ...],
    ys: list[float] | tuple[float, ...],
) -> LinearTrend:
    """Fit y = slope * x + intercept.

    Raises:
        ValueError: If fewer than two points are given, the lengths differ,
            or every x is identical.
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length ({len(xs)} vs {len(ys)})")
    if len(xs) < 2:
        raise ValueError(f"Need at least 2 points for a trend, got {len(xs)}")

    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    if float(np.ptp(x)) == 0.0:
        raise ValueError("All x values are identical; slope is undefined")

    slope, intercept = np.polyfit(x, y, 1)
    predicted = slope * x + intercept
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

    return LinearTrend(
        slope=float(slope),
        intercept=float(intercept),
        r_squared=max(0.0, r_squared),
        mean_y=float(np.mean(y)),
    )
