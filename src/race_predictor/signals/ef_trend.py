"""Efficiency-factor trend — a modifier, not an absolute estimate.

Efficiency factor (EF) is speed per heartbeat on easy aerobic runs. A
rising EF over the last 90 days means the same heart rate buys more speed,
i.e. aerobic fitness is improving faster than the absolute signals can
show. The slope is converted into a VDOT delta that the blender adds after
the weighted mean.

Reference:
    Allen & Coggan (2010). Training and Racing with a Power Meter, 2nd ed.
        VeloPress. (efficiency factor as normalised output per heartbeat)
"""

from __future__ import annotations

import logging
from datetime import date

from race_predictor.math.recency import days_between
from race_predictor.math.trend import linear_trend
from race_predictor.models.enums import (
    EF_KEY_COUNT,
    EF_MAX_ADJUSTMENT,
    EF_MAX_CONFIDENCE,
    EF_MIN_ADJUSTMENT,
    EF_MIN_DISTANCE_MILES,
    EF_MIN_DURATION_MIN,
    EF_MIN_WORKOUTS,
    EF_PCT_PER_STEP,
    EF_TYPES,
    EF_VDOT_PER_STEP,
    EF_WINDOW_DAYS,
    WEIGHT_EF_TREND,
)
from race_predictor.models.inputs import EngineInput, WorkoutSignalInput
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids

logger = logging.getLogger(__name__)


def efficiency_factor(run: WorkoutSignalInput) -> float:
    """Speed (m/min) per beat of average heart rate."""
    return run.velocity_m_per_min / run.avg_hr  # type: ignore[operator]


class EfficiencyTrendExtractor(SignalExtractor):
    extractor_id = "ef_trend"
    version = "1.0.0"
    order = 40
    required_data = ["workouts"]
    name = "Efficiency Factor Trend"

    def _is_eligible(self, run: WorkoutSignalInput, as_of: date) -> bool:
        return (
            run.workout_type in EF_TYPES
            and run.has_hr
            and run.distance_miles > EF_MIN_DISTANCE_MILES
            and run.duration_minutes >= EF_MIN_DURATION_MIN
            and days_between(run.date, as_of) <= EF_WINDOW_DAYS
        )

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        runs = [run for run in engine_input.workouts if self._is_eligible(run, as_of)]
        if len(runs) < EF_MIN_WORKOUTS:
            return None

        # x runs forward in time: 0 at the start of the window, 90 at as_of
        xs = [float(EF_WINDOW_DAYS - days_between(run.date, as_of)) for run in runs]
        ys = [efficiency_factor(run) for run in runs]
        try:
            trend = linear_trend(xs, ys)
        except ValueError as exc:
            logger.debug("EF trend not fitted: %s", exc)
            return None

        pct_change = trend.slope * EF_WINDOW_DAYS / trend.mean_y
        adjustment = pct_change / EF_PCT_PER_STEP * EF_VDOT_PER_STEP
        adjustment = max(-EF_MAX_ADJUSTMENT, min(EF_MAX_ADJUSTMENT, adjustment))
        if abs(adjustment) < EF_MIN_ADJUSTMENT:
            return None

        newest = sorted(runs, key=lambda run: run.date, reverse=True)[:EF_KEY_COUNT]
        direction = "improving" if adjustment > 0 else "declining"
        return Signal(
            name=self.name,
            weight=WEIGHT_EF_TREND,
            estimated_vdot=round(adjustment, 2),
            confidence=round(min(EF_MAX_CONFIDENCE, 0.2 + 0.8 * trend.r_squared), 3),
            data_points=len(runs),
            description=(
                f"Aerobic efficiency {direction} ({pct_change * 100:+.1f}% over "
                f"{EF_WINDOW_DAYS} days, {adjustment:+.1f} VDOT)"
            ),
            recency_days=min(days_between(run.date, as_of) for run in runs),
            is_modifier=True,
            key_workout_ids=workout_ids(newest),
        )
