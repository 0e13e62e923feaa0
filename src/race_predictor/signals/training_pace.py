"""Training-pace inference — fitness from pace alone, no heart rate needed.

Each training type is run at a characteristic fraction of VO2max (Daniels'
intensity bands). Dividing the oxygen cost of the logged pace by that
fraction back-infers VO2max. Weakest of the signals; it mostly matters for
runners without heart-rate data or races.

Reference:
    Daniels (2014). Daniels' Running Formula, 3rd ed. Human Kinetics.
"""

from __future__ import annotations

from datetime import date

from race_predictor.math.recency import days_between, exponential_decay
from race_predictor.math.vdot import vdot_from_velocity
from race_predictor.models.enums import (
    METERS_PER_MILE,
    PACE_HALF_LIFE_DAYS,
    PACE_KEY_COUNT,
    PACE_MIN_DISTANCE_MILES,
    PACE_MIN_DURATION_MIN,
    PACE_PCT_VO2MAX_BY_TYPE,
    PACE_WINDOW_DAYS,
    VDOT_MAX,
    VDOT_MIN,
    WEIGHT_TRAINING_PACE,
)
from race_predictor.models.inputs import EngineInput, WorkoutSignalInput
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids


class TrainingPaceExtractor(SignalExtractor):
    extractor_id = "training_pace"
    version = "1.0.0"
    order = 60
    required_data = ["workouts"]
    name = "Training Pace Inference"

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        weighted_sum = 0.0
        total_weight = 0.0
        used: list[WorkoutSignalInput] = []

        for run in engine_input.workouts:
            pct_vo2max = PACE_PCT_VO2MAX_BY_TYPE.get(run.workout_type)
            if pct_vo2max is None:
                continue
            days = days_between(run.date, as_of)
            if (
                days > PACE_WINDOW_DAYS
                or run.distance_miles <= PACE_MIN_DISTANCE_MILES
                or run.duration_minutes < PACE_MIN_DURATION_MIN
                or run.avg_pace_seconds <= 0
            ):
                continue

            velocity = METERS_PER_MILE / (run.avg_pace_seconds / 60.0)
            estimate = vdot_from_velocity(velocity, pct_vo2max)
            if not VDOT_MIN <= estimate <= VDOT_MAX:
                continue

            weight = exponential_decay(days, PACE_HALF_LIFE_DAYS)
            weighted_sum += estimate * weight
            total_weight += weight
            used.append(run)

        if not used:
            return None

        count = len(used)
        newest = sorted(used, key=lambda run: run.date, reverse=True)
        if count >= 10:
            confidence = 0.5
        elif count >= 5:
            confidence = 0.4
        else:
            confidence = 0.3

        return Signal(
            name=self.name,
            weight=WEIGHT_TRAINING_PACE,
            estimated_vdot=weighted_sum / total_weight,
            confidence=confidence,
            data_points=count,
            description=f"Inferred from {count} training run{'s' if count != 1 else ''}",
            recency_days=days_between(newest[0].date, as_of),
            key_workout_ids=workout_ids(newest[:PACE_KEY_COUNT]),
        )
