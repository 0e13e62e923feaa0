"""Effective VO2max from heart rate during steady-state running.

At steady state, percent of heart-rate reserve tracks percent of VO2
reserve. The Swain-Londeree regression converts %HRR into %VO2max; dividing
the oxygen cost of the observed (conditions-corrected) pace by that fraction
estimates VO2max, expressed on the VDOT scale.

Runs logged while fatigued (negative TSB) carry an elevated heart rate for
the same pace, which understates fitness. The observed heart rate is
discounted by up to 6 bpm before conversion.

References:
    Swain & Leutholtz (1997). Heart rate reserve is equivalent to %VO2
        reserve, not to %VO2max. Med Sci Sports Exerc 29(3):410-414.
    Swain et al. (1994). Target heart rates for the development of
        cardiorespiratory fitness. Med Sci Sports Exerc 26(1):112-116.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from race_predictor.math.conditions import conditions_pace_adjustment
from race_predictor.math.recency import days_between, exponential_decay
from race_predictor.math.vdot import clamp_vdot, vdot_from_velocity
from race_predictor.models.enums import (
    HR_FATIGUE_BPM_PER_TSB,
    HR_FATIGUE_MAX_BPM,
    HR_FRESHNESS_MAX_BOOST,
    HR_FRESHNESS_TSB_FLOOR,
    HR_HALF_LIFE_DAYS,
    HR_KEY_COUNT,
    HR_MIN_DISTANCE_MILES,
    HR_MIN_DURATION_MIN,
    HR_MIN_PCT_VO2MAX,
    HR_MIN_RESERVE_BPM,
    HR_RECENT_MIN_VALUES,
    HR_RECENT_WINDOW_DAYS,
    HR_STEADY_STATE_TYPES,
    HRR_MAX_FRACTION,
    HRR_MIN_FRACTION,
    METERS_PER_MILE,
    MIN_CORRECTED_TIME_FRACTION,
    SWAIN_INTERCEPT,
    SWAIN_SLOPE,
    WEIGHT_HR_VO2MAX,
)
from race_predictor.models.inputs import EngineInput, UserPhysiology, WorkoutSignalInput
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _HREstimate:
    run_date: date
    days_ago: int
    vdot: float
    weight: float
    workout_id: int | None = None


def fatigue_corrected_hr(avg_hr: float, tsb: float | None) -> float:
    """Discount heart rate recorded while fatigued: min(6, 0.2·|TSB|) bpm."""
    if tsb is None or tsb >= 0:
        return avg_hr
    return avg_hr - min(HR_FATIGUE_MAX_BPM, HR_FATIGUE_BPM_PER_TSB * abs(tsb))


def freshness_boost(tsb: float | None) -> float:
    """Weight multiplier 1.0-1.15 favouring runs logged while fresh."""
    if tsb is None:
        return 1.0
    boost = (tsb - HR_FRESHNESS_TSB_FLOOR) / -HR_FRESHNESS_TSB_FLOOR * HR_FRESHNESS_MAX_BOOST
    return 1.0 + max(0.0, min(HR_FRESHNESS_MAX_BOOST, boost))


def estimate_from_run(run: WorkoutSignalInput, physiology: UserPhysiology) -> float | None:
    """Effective VO2max for one run, or None when the run is not usable."""
    if run.workout_type not in HR_STEADY_STATE_TYPES or not run.has_hr:
        return None
    if run.distance_miles <= HR_MIN_DISTANCE_MILES or run.duration_minutes < HR_MIN_DURATION_MIN:
        return None
    if run.avg_pace_seconds <= 0:
        return None

    reserve = physiology.hr_reserve
    raw_hrr = (run.avg_hr - physiology.resting_hr) / reserve  # type: ignore[operator]
    if not HRR_MIN_FRACTION <= raw_hrr <= HRR_MAX_FRACTION:
        return None

    hrr = (fatigue_corrected_hr(run.avg_hr, run.tsb) - physiology.resting_hr) / reserve  # type: ignore[arg-type]
    pct_vo2max = SWAIN_SLOPE * hrr + SWAIN_INTERCEPT
    if pct_vo2max <= HR_MIN_PCT_VO2MAX or pct_vo2max > 1.0:
        return None

    penalty = conditions_pace_adjustment(
        run.distance_miles,
        temperature_f=run.weather_temp_f,
        humidity_pct=run.weather_humidity_pct,
        elevation_gain_ft=run.elevation_gain_ft,
    )
    pace = max(run.avg_pace_seconds - penalty, run.avg_pace_seconds * MIN_CORRECTED_TIME_FRACTION)
    velocity = METERS_PER_MILE / (pace / 60.0)
    return clamp_vdot(vdot_from_velocity(velocity, pct_vo2max))


class HeartRateVO2maxExtractor(SignalExtractor):
    """Recency-weighted effective VO2max across steady-state runs."""

    extractor_id = "hr_vo2max"
    version = "1.0.0"
    order = 30
    required_data = ["workouts"]
    name = "Effective VO2max (HR)"

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        physiology = engine_input.physiology
        if physiology.hr_reserve <= HR_MIN_RESERVE_BPM:
            logger.debug(
                "HR reserve %d bpm too small for HR-based estimate", physiology.hr_reserve
            )
            return None

        estimates: list[_HREstimate] = []
        for run in engine_input.workouts:
            vdot = estimate_from_run(run, physiology)
            if vdot is None:
                continue
            days = days_between(run.date, as_of)
            weight = exponential_decay(days, HR_HALF_LIFE_DAYS) * freshness_boost(run.tsb)
            estimates.append(_HREstimate(run.date, days, vdot, weight, run.workout_id))

        if not estimates:
            return None

        recent = [e for e in estimates if e.days_ago <= HR_RECENT_WINDOW_DAYS]
        if len(recent) >= HR_RECENT_MIN_VALUES:
            estimates = recent

        total_weight = sum(e.weight for e in estimates)
        value = sum(e.vdot * e.weight for e in estimates) / total_weight
        count = len(estimates)
        newest_days = min(e.days_ago for e in estimates)

        if count >= 10:
            confidence = 0.75
        elif count >= 5:
            confidence = 0.6
        elif count >= 3:
            confidence = 0.5
        else:
            confidence = 0.4
        if newest_days > 30:
            confidence *= 0.9
        if newest_days > 60:
            confidence *= 0.8

        newest = sorted(estimates, key=lambda e: e.run_date, reverse=True)[:HR_KEY_COUNT]
        description = f"From {count} steady-state run{'s' if count != 1 else ''} with HR"
        if count >= 5:
            description += f", {_trend_word(estimates)}"

        return Signal(
            name=self.name,
            weight=WEIGHT_HR_VO2MAX,
            estimated_vdot=value,
            confidence=round(confidence, 3),
            data_points=count,
            description=description,
            recency_days=newest_days,
            key_dates=tuple(e.run_date for e in newest),
            key_workout_ids=workout_ids(newest),
        )


def _trend_word(estimates: list[_HREstimate]) -> str:
    """Compare the older half of the estimates with the newer half."""
    ordered = sorted(estimates, key=lambda e: e.run_date)
    half = len(ordered) // 2
    older = sum(e.vdot for e in ordered[:half]) / half
    newer = sum(e.vdot for e in ordered[half:]) / (len(ordered) - half)
    delta = newer - older
    if delta > 0.5:
        return f"improving (+{delta:.1f})"
    if delta < -0.5:
        return f"declining ({delta:.1f})"
    return "stable"
