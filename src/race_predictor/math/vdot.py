"""Performance-to-fitness conversion — Daniels & Gilbert oxygen cost model.

Converts a (distance, time) performance into an equivalent fitness index
(VDOT) and back. The oxygen cost of running at velocity v (m/min) is

    VO2 = -4.60 + 0.182258·v + 0.000104·v²

and the fraction of VO2max sustainable is a step function of effort
duration. VDOT is the oxygen cost divided by that fraction.

References:
    Daniels & Gilbert (1979). Oxygen Power. Privately published.
    Daniels (2014). Daniels' Running Formula, 3rd ed. Human Kinetics.
    Riegel (1981). Athletic records and human endurance. American Scientist
        69(3):285-290.
"""

from __future__ import annotations

import math

from race_predictor.models.enums import (
    DANIELS_A,
    DANIELS_B,
    DANIELS_C,
    PCT_MAX_BY_DURATION,
    PCT_MAX_LONG_EFFORT,
    RIEGEL_EXPONENT,
    VDOT_MAX,
    VDOT_MIN,
)

# Bisection bounds for the inverse, in seconds per metre
_MIN_SECONDS_PER_METER = 0.05
_MAX_SECONDS_PER_METER = 3.0
_BISECTION_ITERATIONS = 80
# Half-width of the bridge across each %max step, as a fraction of the step boundary
_STEP_BRIDGE_FRACTION = 0.02


def clamp_vdot(vdot: float) -> float:
    """Clamp a fitness index to the plausible [15, 85] range."""
    return max(VDOT_MIN, min(VDOT_MAX, vdot))


def oxygen_cost(velocity_m_per_min: float) -> float:
    """Oxygen cost (ml/kg/min) of running at the given velocity."""
    v = velocity_m_per_min
    return DANIELS_A + DANIELS_B * v + DANIELS_C * v * v


def velocity_from_vo2(vo2: float) -> float:
    """Inverse Daniels oxygen cost equation: VO2 → velocity in m/min.

    Solves DANIELS_C·v² + DANIELS_B·v + (DANIELS_A − VO2) = 0 for the
    positive root.

    Raises:
        ValueError: If the discriminant is negative (invalid VO2).
    """
    a = DANIELS_C
    b = DANIELS_B
    c = DANIELS_A - vo2
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        raise ValueError(f"Invalid VO2 {vo2}: negative discriminant")
    return (-b + math.sqrt(discriminant)) / (2 * a)


def pct_max_for_duration(duration_min: float) -> float:
    """Fraction of VO2max sustainable for an effort of this duration.

    Step function: ≤3.5 min → 0.80, ≤7 → 0.85, ≤15 → 0.90, ≤30 → 0.93,
    ≤60 → 0.95, ≤120 → 0.97, longer → 0.98.
    """
    for upper_bound_min, pct in PCT_MAX_BY_DURATION:
        if duration_min <= upper_bound_min:
            return pct
    return PCT_MAX_LONG_EFFORT


def vdot_from_performance(distance_meters: float, time_seconds: float) -> float:
    """Equivalent fitness index for covering a distance in a given time.

    The result is not clamped; callers clamp where the domain requires it.
    Caller guarantees distance and time are positive.
    """
    velocity = distance_meters / (time_seconds / 60.0)
    return oxygen_cost(velocity) / pct_max_for_duration(time_seconds / 60.0)


def vdot_from_velocity(velocity_m_per_min: float, pct_vo2max: float) -> float:
    """Fitness index implied by holding a velocity at a known %VO2max."""
    return oxygen_cost(velocity_m_per_min) / pct_vo2max


def _bridged_vdot(distance_meters: float, time_seconds: float) -> float:
    """vdot_from_performance with each %max step replaced by a linear bridge.

    Within ±2% of a step boundary the index is interpolated between its
    values at the two bridge ends; elsewhere it equals the step converter.
    The result is continuous and strictly decreasing in time.
    """
    minutes = time_seconds / 60.0
    for upper_bound_min, _ in PCT_MAX_BY_DURATION:
        half_width = upper_bound_min * _STEP_BRIDGE_FRACTION
        start = upper_bound_min - half_width
        end = upper_bound_min + half_width
        if start < minutes < end:
            high = vdot_from_performance(distance_meters, start * 60.0)
            low = vdot_from_performance(distance_meters, end * 60.0)
            return high + (low - high) * (minutes - start) / (end - start)
    return vdot_from_performance(distance_meters, time_seconds)


def time_for_vdot(vdot: float, distance_meters: float) -> float:
    """Inverse of the performance converter: race time (s) at a fitness level.

    The step converter jumps at every %max boundary, so every index inside a
    jump would map to the same boundary time. The bisection therefore runs
    on _bridged_vdot, which is continuous and strictly decreasing. A higher
    index always gives a strictly faster time, and away from the boundaries
    the inverse reproduces vdot_from_performance exactly.

    Args:
        vdot: Target fitness index.
        distance_meters: Race distance in metres.

    Returns:
        Predicted time in seconds (unrounded).

    Raises:
        ValueError: If vdot or distance_meters is non-positive.
    """
    if vdot <= 0:
        raise ValueError(f"VDOT must be positive, got {vdot}")
    if distance_meters <= 0:
        raise ValueError(f"Distance must be positive, got {distance_meters}")

    fast = distance_meters * _MIN_SECONDS_PER_METER
    slow = distance_meters * _MAX_SECONDS_PER_METER
    for _ in range(_BISECTION_ITERATIONS):
        mid = (fast + slow) / 2.0
        if _bridged_vdot(distance_meters, mid) > vdot:
            fast = mid
        else:
            slow = mid
    return (fast + slow) / 2.0


def riegel_time(
    base_time_s: float,
    base_distance_m: float,
    target_distance_m: float,
    exponent: float = RIEGEL_EXPONENT,
) -> float:
    """Scale a race time across distances: T2 = T1 · (D2 / D1) ** k."""
    return base_time_s * math.pow(target_distance_m / base_distance_m, exponent)
