"""Best-effort fitness index — peak-weighted, not averaged.

Hard efforts inside training runs mostly understate fitness; only the
fastest few say anything about the ceiling. Efforts are ranked by their
(derated) fitness index and each rank gets a geometrically decaying weight,
so the best handful dominate regardless of how many easy efforts exist.
"""

from __future__ import annotations

from datetime import date

from race_predictor.math.recency import days_between, exponential_decay
from race_predictor.math.vdot import clamp_vdot, vdot_from_performance
from race_predictor.models.enums import (
    BEST_EFFORT_HALF_LIFE_DAYS,
    BEST_EFFORT_KEY_COUNT,
    BEST_EFFORT_HALF_RANK,
    BEST_EFFORT_RACE_GRADE_MIN_M,
    BEST_EFFORT_SEGMENT_DERATE,
    BEST_EFFORT_SEGMENT_MIN_M,
    BEST_EFFORT_STALE_DAYS,
    BEST_EFFORT_STALE_PENALTY,
    WEIGHT_BEST_EFFORT,
    PerformanceSource,
)
from race_predictor.models.inputs import EngineInput, PerformanceRecord
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids


def is_eligible_effort(effort: PerformanceRecord) -> bool:
    """Segments need 5000 m; race-grade efforts (race, time trial) need one mile."""
    if not effort.is_valid:
        return False
    if effort.source is PerformanceSource.WORKOUT_SEGMENT:
        return effort.distance_meters >= BEST_EFFORT_SEGMENT_MIN_M
    return effort.distance_meters >= BEST_EFFORT_RACE_GRADE_MIN_M


def effort_vdot(effort: PerformanceRecord) -> float:
    """Fitness index of an effort, derated 3% for workout segments."""
    vdot = vdot_from_performance(effort.distance_meters, effort.time_seconds)
    if effort.source is PerformanceSource.WORKOUT_SEGMENT:
        vdot *= BEST_EFFORT_SEGMENT_DERATE
    return clamp_vdot(vdot)


def rank_weight(rank: int) -> float:
    """Geometric weight for the effort at ``rank`` (0 = best): halves every 2 ranks."""
    return 0.5 ** (rank / BEST_EFFORT_HALF_RANK)


class BestEffortSignalExtractor(SignalExtractor):
    extractor_id = "best_effort_vdot"
    version = "1.0.0"
    order = 20
    required_data = ["best_efforts"]
    name = "Best Effort VDOT"

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        scored = [
            (effort_vdot(effort), effort)
            for effort in engine_input.best_efforts
            if is_eligible_effort(effort)
        ]
        if not scored:
            return None

        # Best first, newest first among equals; input order never matters
        scored.sort(key=lambda pair: (-pair[0], -pair[1].date.toordinal()))

        weighted_sum = 0.0
        total_weight = 0.0
        for rank, (vdot, effort) in enumerate(scored):
            days = days_between(effort.date, as_of)
            weight = rank_weight(rank) * exponential_decay(days, BEST_EFFORT_HALF_LIFE_DAYS)
            weighted_sum += vdot * weight
            total_weight += weight

        count = len(scored)
        newest_days = min(days_between(effort.date, as_of) for _, effort in scored)

        if count >= 5:
            confidence = 0.7
        elif count >= 3:
            confidence = 0.6
        elif count == 2:
            confidence = 0.5
        else:
            confidence = 0.4
        if newest_days > BEST_EFFORT_STALE_DAYS:
            confidence *= BEST_EFFORT_STALE_PENALTY

        peak_vdot, _ = scored[0]
        top = [effort for _, effort in scored[:BEST_EFFORT_KEY_COUNT]]
        return Signal(
            name=self.name,
            weight=WEIGHT_BEST_EFFORT,
            estimated_vdot=weighted_sum / total_weight,
            confidence=round(confidence, 3),
            data_points=count,
            description=(
                f"Peak-weighted from {count} best effort{'s' if count != 1 else ''} "
                f"(top {peak_vdot:.1f})"
            ),
            recency_days=newest_days,
            key_dates=tuple(effort.date for effort in top),
            key_workout_ids=workout_ids(top),
        )
