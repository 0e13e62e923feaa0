"""Environmental pace corrections — heat, humidity, cold and climbing.

Pure functions returning the pace penalty (seconds per mile) a runner paid
for the conditions a performance was run in. Subtracting the penalty
recovers the equivalent effort on a neutral, flat course.

References:
    Ely et al. (2007). Impact of weather on marathon-running performance.
        Med Sci Sports Exerc 39(3):487-493.
    El Helou et al. (2012). Impact of environmental parameters on marathon
        running performance. PLoS ONE 7(5):e37407.
    Mantzios et al. (2022). Effects of weather parameters on endurance
        running performance. Sports 10(8):118.
"""

from __future__ import annotations

from race_predictor.models.enums import (
    ELEVATION_S_PER_100FT_PER_MILE,
    HUMIDITY_HOT_S_PER_PCT,
    HUMIDITY_HOT_TEMP_F,
    HUMIDITY_HOT_THRESHOLD_PCT,
    HUMIDITY_MODERATE_S_PER_PCT,
    HUMIDITY_MODERATE_TEMP_F,
    HUMIDITY_MODERATE_THRESHOLD_PCT,
    MIN_CORRECTED_TIME_FRACTION,
    WEATHER_COLD_S_PER_F,
    WEATHER_COLD_THRESHOLD_F,
    WEATHER_MILD_S_PER_F,
    WEATHER_MILD_UPPER_F,
    WEATHER_OPTIMAL_TEMP_F,
    WEATHER_SEVERE_S_PER_F,
    WEATHER_WARM_S_PER_F,
    WEATHER_WARM_UPPER_F,
)


def weather_pace_adjustment(
    temperature_f: float | None,
    humidity_pct: float | None,
) -> int:
    """Pace penalty in seconds per mile for temperature and humidity.

    Heat is piecewise linear above the 45°F optimum: 0.4 s/°F up to 70°F,
    1.0 s/°F to 85°F, 1.5 s/°F beyond. Humidity adds on top in warm
    conditions. Cold below 35°F costs 0.2 s/°F.

    Returns 0 when either reading is missing.

    Args:
        temperature_f: Air temperature in Fahrenheit, or None.
        humidity_pct: Relative humidity 0-100, or None.

    Returns:
        Rounded pace adjustment in seconds per mile (>= 0).
    """
    if temperature_f is None or humidity_pct is None:
        return 0

    t = temperature_f
    adjustment = 0.0

    if t > WEATHER_OPTIMAL_TEMP_F:
        if t <= WEATHER_MILD_UPPER_F:
            adjustment = (t - WEATHER_OPTIMAL_TEMP_F) * WEATHER_MILD_S_PER_F
        else:
            mild_total = (WEATHER_MILD_UPPER_F - WEATHER_OPTIMAL_TEMP_F) * WEATHER_MILD_S_PER_F
            if t <= WEATHER_WARM_UPPER_F:
                adjustment = mild_total + (t - WEATHER_MILD_UPPER_F) * WEATHER_WARM_S_PER_F
            else:
                warm_total = (WEATHER_WARM_UPPER_F - WEATHER_MILD_UPPER_F) * WEATHER_WARM_S_PER_F
                adjustment = (
                    mild_total + warm_total + (t - WEATHER_WARM_UPPER_F) * WEATHER_SEVERE_S_PER_F
                )

        if t > HUMIDITY_HOT_TEMP_F and humidity_pct > HUMIDITY_HOT_THRESHOLD_PCT:
            adjustment += (humidity_pct - HUMIDITY_HOT_THRESHOLD_PCT) * HUMIDITY_HOT_S_PER_PCT
        elif t > HUMIDITY_MODERATE_TEMP_F and humidity_pct > HUMIDITY_MODERATE_THRESHOLD_PCT:
            adjustment += (
                humidity_pct - HUMIDITY_MODERATE_THRESHOLD_PCT
            ) * HUMIDITY_MODERATE_S_PER_PCT
    elif t < WEATHER_COLD_THRESHOLD_F:
        adjustment = (WEATHER_COLD_THRESHOLD_F - t) * WEATHER_COLD_S_PER_F

    return round(adjustment)


def elevation_pace_adjustment(elevation_gain_ft: float | None, distance_miles: float) -> int:
    """Pace penalty in seconds per mile for total climbing.

    About 12 s/mile for every 100 ft of gain per mile.
    """
    if not elevation_gain_ft or elevation_gain_ft <= 0 or distance_miles <= 0:
        return 0
    gain_per_mile = elevation_gain_ft / distance_miles
    return round(gain_per_mile / 100.0 * ELEVATION_S_PER_100FT_PER_MILE)


def conditions_pace_adjustment(
    distance_miles: float,
    temperature_f: float | None = None,
    humidity_pct: float | None = None,
    elevation_gain_ft: float | None = None,
) -> int:
    """Combined weather and elevation penalty in seconds per mile."""
    return weather_pace_adjustment(temperature_f, humidity_pct) + elevation_pace_adjustment(
        elevation_gain_ft, distance_miles
    )


def adjusted_time_seconds(
    time_seconds: float,
    distance_miles: float,
    temperature_f: float | None = None,
    humidity_pct: float | None = None,
    elevation_gain_ft: float | None = None,
) -> float:
    """Recorded time converted to its neutral-conditions equivalent.

    The correction is the per-mile penalty times the distance. It never
    takes more than 15% off the recorded time.
    """
    per_mile = conditions_pace_adjustment(
        distance_miles, temperature_f, humidity_pct, elevation_gain_ft
    )
    if per_mile <= 0:
        return time_seconds
    corrected = time_seconds - per_mile * distance_miles
    return max(corrected, time_seconds * MIN_CORRECTED_TIME_FRACTION)
