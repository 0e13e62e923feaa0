"""Prediction generator — fitness index to race times at the standard distances.

The blended index is inverted at the 5K reference distance, then scaled to
every distance with the Riegel endurance exponent, so longer races carry
the extra fatigue cost a flat pace extrapolation would miss.

References:
    Daniels (2014). Daniels' Running Formula, 3rd ed. Human Kinetics.
    Riegel (1981). Athletic records and human endurance. American Scientist
        69(3):285-290.
"""

from __future__ import annotations

from race_predictor.math.form import FormAdjustment, calculate_readiness
from race_predictor.math.vdot import riegel_time, time_for_vdot
from race_predictor.models.enums import (
    OPTIMAL_TAPER_PCT,
    PREDICTION_DISTANCES,
    RANGE_CONFIDENCE_FACTORS,
    RANGE_PCT_10K,
    RANGE_PCT_LONG,
    RANGE_PCT_SHORT,
    READINESS_RANGE_PENALTY,
    READINESS_THRESHOLD,
    REFERENCE_DISTANCE_M,
    ConfidenceLevel,
)
from race_predictor.models.inputs import TrainingVolume
from race_predictor.models.result import Prediction, TimeRange


def base_time_seconds(vdot: float, distance_meters: float) -> float:
    """Unadjusted race time for a fitness index at any distance."""
    reference_time = time_for_vdot(vdot, REFERENCE_DISTANCE_M)
    return riegel_time(reference_time, REFERENCE_DISTANCE_M, distance_meters)


def range_base_pct(distance_meters: float) -> float:
    """Base half-width of the time range: 2.5% (5K), 3.5% (10K), 5% (half and up)."""
    if distance_meters >= 21097:
        return RANGE_PCT_LONG
    if distance_meters >= 10000:
        return RANGE_PCT_10K
    return RANGE_PCT_SHORT


def generate_predictions(
    vdot: float,
    form: FormAdjustment,
    volume: TrainingVolume,
    agreement_score: float,
    confidence: ConfidenceLevel,
) -> tuple[Prediction, ...]:
    """Build one Prediction per standard distance.

    predicted_seconds applies the actual form adjustment; tapered_seconds
    always applies the best-case taper. Readiness never moves either time.
    It widens the slow end of the range and adds an explanation instead.

    Args:
        vdot: Blended fitness index.
        form: Form adjustment for the evaluation date.
        volume: Recent training volume for readiness.
        agreement_score: Signal agreement 0-1; lower widens the range.
        confidence: Overall confidence label; lower widens the range.

    Returns:
        Four predictions, shortest distance first.
    """
    predictions: list[Prediction] = []
    for label, meters, miles in PREDICTION_DISTANCES:
        base = base_time_seconds(vdot, meters)
        predicted = round(base * (1 + form.pct / 100.0))
        tapered = round(base * (1 + OPTIMAL_TAPER_PCT / 100.0))

        readiness = calculate_readiness(label, miles, volume)
        reasons: list[str] = []
        shortfall = max(0.0, READINESS_THRESHOLD - readiness.score)
        if readiness.score < READINESS_THRESHOLD:
            reasons.append(
                f"Endurance readiness {readiness.score * 100:.0f}% — more "
                f"{readiness.limiting_factor} needed for {label}"
            )
        if form.pct != 0:
            reasons.append(form.description)

        uncertainty = (
            range_base_pct(meters) * (2 - agreement_score) * RANGE_CONFIDENCE_FACTORS[confidence]
        )
        time_range = TimeRange(
            fast=round(predicted * (1 - uncertainty)),
            slow=round(predicted * (1 + uncertainty + shortfall * READINESS_RANGE_PENALTY)),
        )

        predictions.append(
            Prediction(
                distance=label,
                meters=meters,
                miles=miles,
                predicted_seconds=predicted,
                tapered_seconds=tapered,
                pace_per_mile=round(predicted / miles),
                range=time_range,
                readiness=readiness.score,
                readiness_factors=readiness.factors,
                adjustment_reasons=tuple(reasons),
            )
        )
    return tuple(predictions)
