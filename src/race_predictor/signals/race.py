"""Race-derived fitness index — the most reliable evidence source.

Each eligible race is corrected to neutral conditions (weather, climbing),
converted with the Daniels oxygen cost model, and combined with a recency
half-life of 180 days and an effort-level weight.

Reference:
    Daniels (2014). Daniels' Running Formula, 3rd ed. Human Kinetics.
"""

from __future__ import annotations

from datetime import date

from race_predictor.math.conditions import adjusted_time_seconds
from race_predictor.math.recency import days_between, exponential_decay
from race_predictor.math.vdot import clamp_vdot, vdot_from_performance
from race_predictor.models.enums import (
    METERS_PER_MILE,
    RACE_ALL_OUT_BONUS,
    RACE_EFFORT_WEIGHT_DEFAULT,
    RACE_EFFORT_WEIGHTS,
    RACE_HALF_LIFE_DAYS,
    RACE_MIN_DISTANCE_M,
    RACE_STALE_DAYS,
    RACE_STALE_PENALTY,
    RACE_VERY_STALE_DAYS,
    RACE_VERY_STALE_PENALTY,
    WEIGHT_RACE,
    PerformanceSource,
)
from race_predictor.models.inputs import EngineInput, PerformanceRecord
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids


def race_vdot(race: PerformanceRecord) -> float:
    """Clamped fitness index for one race after the conditions correction."""
    miles = race.distance_meters / METERS_PER_MILE
    corrected = adjusted_time_seconds(
        race.time_seconds,
        miles,
        temperature_f=race.weather_temp_f,
        humidity_pct=race.weather_humidity_pct,
        elevation_gain_ft=race.elevation_gain_ft,
    )
    return clamp_vdot(vdot_from_performance(race.distance_meters, corrected))


class RaceSignalExtractor(SignalExtractor):
    """Recency- and effort-weighted mean of race fitness indices."""

    extractor_id = "race_vdot"
    version = "1.0.0"
    order = 10
    required_data = ["races"]
    name = "Race VDOT"

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        eligible = [
            race
            for race in engine_input.races
            if race.is_valid
            and race.source is PerformanceSource.RACE
            and race.distance_meters >= RACE_MIN_DISTANCE_M
        ]
        if not eligible:
            return None

        weighted_sum = 0.0
        total_weight = 0.0
        for race in eligible:
            days = days_between(race.date, as_of)
            effort_weight = RACE_EFFORT_WEIGHTS.get(
                race.effort_level or "", RACE_EFFORT_WEIGHT_DEFAULT
            )
            weight = exponential_decay(days, RACE_HALF_LIFE_DAYS) * effort_weight
            weighted_sum += race_vdot(race) * weight
            total_weight += weight

        most_recent_days = min(days_between(race.date, as_of) for race in eligible)
        count = len(eligible)
        newest_first = sorted(eligible, key=lambda race: race.date, reverse=True)

        return Signal(
            name=self.name,
            weight=WEIGHT_RACE,
            estimated_vdot=weighted_sum / total_weight,
            confidence=self._confidence(eligible, most_recent_days),
            data_points=count,
            description=(
                f"From {count} race{'s' if count != 1 else ''}, "
                f"most recent {most_recent_days}d ago"
            ),
            recency_days=most_recent_days,
            key_dates=tuple(sorted({race.date for race in eligible}, reverse=True)),
            key_workout_ids=workout_ids(newest_first),
        )

    def _confidence(self, races: list[PerformanceRecord], most_recent_days: int) -> float:
        count = len(races)
        if count >= 3:
            confidence = 0.9
        elif count == 2:
            confidence = 0.8
        else:
            confidence = 0.7

        # A fresher race always scores higher; staleness penalties stack on top
        confidence *= 0.6 + 0.4 * exponential_decay(most_recent_days, RACE_HALF_LIFE_DAYS)
        if most_recent_days > RACE_VERY_STALE_DAYS:
            confidence *= RACE_VERY_STALE_PENALTY
        if most_recent_days > RACE_STALE_DAYS:
            confidence *= RACE_STALE_PENALTY

        if any(race.effort_level == "all_out" for race in races):
            confidence += RACE_ALL_OUT_BONUS

        return round(min(1.0, confidence), 3)
