"""Critical Speed signal — fitness from the distance-time relationship.

Uses race and best-effort performances between one mile and 15 km, keeps
the best performance in each distance bucket, and fits D = CS*t + D' across
the buckets. At least three distinct buckets are needed for a meaningful
slope.
"""

from __future__ import annotations

import logging
from datetime import date

from race_predictor.math.critical_speed import (
    distance_bucket,
    fit_critical_speed,
    is_plausible_speed,
    validate_cs_fit,
    vdot_from_critical_speed,
)
from race_predictor.math.recency import days_between
from race_predictor.math.vdot import clamp_vdot, vdot_from_performance
from race_predictor.models.enums import (
    CS_LOW_FIT_PENALTY,
    CS_MAX_DISTANCE_M,
    CS_MIN_DATA_POINTS,
    CS_MIN_DISTANCE_M,
    CS_MIN_R_SQUARED,
    WEIGHT_CRITICAL_SPEED,
)
from race_predictor.models.inputs import EngineInput, PerformanceRecord
from race_predictor.models.signal import Signal
from race_predictor.signals.base import SignalExtractor, workout_ids

logger = logging.getLogger(__name__)


def best_per_bucket(records: list[PerformanceRecord]) -> dict[str, PerformanceRecord]:
    """Best performance per distance bucket: highest VDOT, then most recent."""
    best: dict[str, tuple[tuple[float, int], PerformanceRecord]] = {}
    for record in records:
        key = (
            vdot_from_performance(record.distance_meters, record.time_seconds),
            record.date.toordinal(),
        )
        bucket = distance_bucket(record.distance_meters)
        if bucket not in best or key > best[bucket][0]:
            best[bucket] = (key, record)
    return {bucket: record for bucket, (_, record) in best.items()}


class CriticalSpeedExtractor(SignalExtractor):
    extractor_id = "critical_speed"
    version = "1.0.0"
    order = 50
    required_data: list[str] = []
    name = "Critical Speed"

    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        candidates = [
            record
            for record in (*engine_input.races, *engine_input.best_efforts)
            if record.is_valid and CS_MIN_DISTANCE_M <= record.distance_meters <= CS_MAX_DISTANCE_M
        ]
        buckets = best_per_bucket(candidates)
        if len(buckets) < CS_MIN_DATA_POINTS:
            return None

        chosen = sorted(buckets.values(), key=lambda r: r.distance_meters)
        try:
            fit = fit_critical_speed([(r.distance_meters, r.time_seconds) for r in chosen])
        except ValueError as exc:
            logger.debug("Critical speed fit rejected: %s", exc)
            return None

        if not is_plausible_speed(fit.critical_speed_m_per_s):
            logger.debug("Critical speed discarded: %s", "; ".join(validate_cs_fit(fit)))
            return None

        count = len(chosen)
        if count >= 5:
            confidence = 0.8
        elif count == 4:
            confidence = 0.7
        else:
            confidence = 0.55
        if fit.r_squared < CS_MIN_R_SQUARED:
            confidence *= CS_LOW_FIT_PENALTY

        cs = fit.critical_speed_m_per_s
        pace_per_km = 1000.0 / cs
        return Signal(
            name=self.name,
            weight=WEIGHT_CRITICAL_SPEED,
            estimated_vdot=clamp_vdot(vdot_from_critical_speed(cs)),
            confidence=round(confidence, 3),
            data_points=count,
            description=(
                f"CS {cs:.2f} m/s ({int(pace_per_km // 60)}:{int(pace_per_km % 60):02d}/km) "
                f"from {count} distances, R²={fit.r_squared:.3f}"
            ),
            recency_days=min(days_between(r.date, as_of) for r in chosen),
            key_dates=tuple(r.date for r in chosen),
            key_workout_ids=workout_ids(chosen),
        )
