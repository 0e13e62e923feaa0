"""Critical Speed (CS) from the linear distance-time model, D = CS*t + D'.

Best performances at several distances between one mile and 15 km lie close
to a straight line in distance-time space. The slope is the critical speed,
the highest speed sustainable without progressive fatigue, and the
intercept D' is the finite distance reserve above it. CS sits near 88% of
VO2max, which converts it into an equivalent fitness index.

References:
    Poole et al. (2016). Critical power: an important fatigue threshold in
    exercise physiology. Med Sci Sports Exerc 48(11):2320-2334.

    Smyth & Muniz-Pumares (2020). Calculation of critical speed from raw
    training data. Med Sci Sports Exerc 52(7):1606-1615.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from race_predictor.math.vdot import oxygen_cost
from race_predictor.models.enums import (
    CS_DISTANCE_BUCKETS,
    CS_LONG_BUCKET,
    CS_MAX_SPEED_M_PER_S,
    CS_MIN_DATA_POINTS,
    CS_MIN_R_SQUARED,
    CS_PCT_VO2MAX,
)


@dataclass(frozen=True)
class CriticalSpeedFit:
    """Result of fitting the Critical Speed model.

    Attributes:
        critical_speed_m_per_s: CS in metres per second.
        d_prime_meters: D' in metres.
        r_squared: Coefficient of determination for the linear fit.
        residuals: Per-point residuals in metres.
    """

    critical_speed_m_per_s: float
    d_prime_meters: float
    r_squared: float
    residuals: tuple[float, ...] = field(default_factory=tuple)


def distance_bucket(distance_meters: float) -> str:
    """Label of the distance bucket a performance falls into."""
    for upper_bound_m, label in CS_DISTANCE_BUCKETS:
        if distance_meters < upper_bound_m:
            return label
    return CS_LONG_BUCKET


def fit_critical_speed(
    distance_time_pairs: tuple[tuple[float, float], ...] | list[tuple[float, float]],
) -> CriticalSpeedFit:
    """Fit D = CS * t + D' by least squares.

    Args:
        distance_time_pairs: (distance_m, time_s) pairs, at least
            CS_MIN_DATA_POINTS of them.

    Returns:
        CriticalSpeedFit with CS, D', R² and residuals.

    Raises:
        ValueError: If too few pairs are given, any value is non-positive,
            or every time is identical (no slope can be fitted).
    """
    pairs = list(distance_time_pairs)
    if len(pairs) < CS_MIN_DATA_POINTS:
        raise ValueError(
            f"Need at least {CS_MIN_DATA_POINTS} distance-time pairs, got {len(pairs)}"
        )
    for d, t in pairs:
        if d <= 0 or t <= 0:
            raise ValueError(f"Distance and time must be positive, got d={d}, t={t}")

    times = np.array([t for _, t in pairs], dtype=np.float64)
    distances = np.array([d for d, _ in pairs], dtype=np.float64)
    if float(np.ptp(times)) == 0.0:
        raise ValueError("All efforts have the same duration; slope is undefined")

    # polyfit(x, y, 1) returns [slope, intercept]
    slope, intercept = np.polyfit(times, distances, 1)
    cs = float(slope)
    d_prime = float(intercept)

    predicted = cs * times + d_prime
    ss_res = float(np.sum((distances - predicted) ** 2))
    ss_tot = float(np.sum((distances - np.mean(distances)) ** 2))
    r_squared = 1.0 - (ss_res / ss_tot) if ss_tot > 0 else 0.0

    return CriticalSpeedFit(
        critical_speed_m_per_s=cs,
        d_prime_meters=d_prime,
        r_squared=r_squared,
        residuals=tuple(float(r) for r in distances - predicted),
    )


def validate_cs_fit(fit: CriticalSpeedFit) -> list[str]:
    """Plausibility warnings for a fitted model. Empty list means usable as-is.

    A non-positive or implausibly fast CS makes the fit unusable; a low R²
    only lowers confidence.
    """
    warnings: list[str] = []
    cs = fit.critical_speed_m_per_s
    if cs <= 0:
        warnings.append(f"CS={cs:.3f} m/s is non-positive. Model fit failed.")
    elif cs > CS_MAX_SPEED_M_PER_S:
        warnings.append(f"CS={cs:.3f} m/s exceeds {CS_MAX_SPEED_M_PER_S:.0f} m/s.")
    if fit.r_squared < CS_MIN_R_SQUARED:
        warnings.append(f"Low R²={fit.r_squared:.3f} (expected ≥{CS_MIN_R_SQUARED}).")
    return warnings


def is_plausible_speed(cs_m_per_s: float) -> bool:
    return 0.0 < cs_m_per_s <= CS_MAX_SPEED_M_PER_S


def vdot_from_critical_speed(cs_m_per_s: float) -> float:
    """Fitness index implied by a critical speed (unclamped).

    Raises:
        ValueError: If cs_m_per_s is non-positive.
    """
    if cs_m_per_s <= 0:
        raise ValueError(f"CS must be positive, got {cs_m_per_s}")
    return oxygen_cost(cs_m_per_s * 60.0) / CS_PCT_VO2MAX
