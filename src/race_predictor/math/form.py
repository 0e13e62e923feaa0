"""Race-day form and endurance readiness.

Form turns the externally supplied Banister fitness state (CTL, ATL, TSB)
into a percentage adjustment of race time. Readiness scores, per target
distance, whether recent training volume supports racing that distance.

References:
    Banister et al. (1975). A systems model of training for athletic
        performance. Aust J Sports Med 7:57-61.
    Mujika & Padilla (2003). Scientific bases for precompetition tapering
        strategies. Med Sci Sports Exerc 35(7):1182-1187.
"""

from __future__ import annotations

from dataclasses import dataclass

from race_predictor.models.enums import (
    CTL_THIN_BASE_THRESHOLD,
    DISTANCE_REQUIREMENTS,
    FORM_FATIGUED_PCT,
    FORM_OVERREACHED_PCT,
    FORM_STALE_PCT,
    FORM_TAPERED_PCT,
    FORM_THIN_BASE_PCT,
    READINESS_CONSISTENCY_WEEKS,
    READINESS_WEIGHT_CONSISTENCY,
    READINESS_WEIGHT_LONG_RUN,
    READINESS_WEIGHT_VOLUME,
    TSB_FATIGUED_THRESHOLD,
    TSB_FRESH_THRESHOLD,
    TSB_OVERREACHED_THRESHOLD,
    TSB_STALE_THRESHOLD,
)
from race_predictor.models.inputs import FitnessState, TrainingVolume
from race_predictor.models.result import ReadinessFactors


@dataclass(frozen=True)
class FormAdjustment:
    """Percentage change to race time (positive = slower) with its reasons."""

    pct: float
    description: str


@dataclass(frozen=True)
class Readiness:
    score: float
    factors: ReadinessFactors
    limiting_factor: str


def calculate_form_adjustment(fitness: FitnessState) -> FormAdjustment:
    """Map TSB (and a thin CTL base) to a race-time adjustment.

    TSB > 25 → +0.5% (stale), 5 < TSB ≤ 25 → −0.5% (tapered),
    −10 ≤ TSB ≤ 5 → 0, −25 ≤ TSB < −10 → +1.5% (fatigued),
    TSB < −25 → +3% (overreached). CTL < 20 adds +1% on top.

    Args:
        fitness: CTL/ATL/TSB for the evaluation date.

    Returns:
        FormAdjustment with the stacked percentage and a description.
    """
    tsb = fitness.tsb
    pct = 0.0
    reasons: list[str] = []

    if tsb > TSB_STALE_THRESHOLD:
        pct = FORM_STALE_PCT
        reasons.append("very rested (may have lost sharpness)")
    elif tsb > TSB_FRESH_THRESHOLD:
        pct = FORM_TAPERED_PCT
        reasons.append("tapered/fresh")
    elif tsb < TSB_OVERREACHED_THRESHOLD:
        pct = FORM_OVERREACHED_PCT
        reasons.append("significantly overreached")
    elif tsb < TSB_FATIGUED_THRESHOLD:
        pct = FORM_FATIGUED_PCT
        reasons.append("fatigued")

    if fitness.ctl < CTL_THIN_BASE_THRESHOLD:
        pct += FORM_THIN_BASE_PCT
        reasons.append("thin fitness base")

    if not reasons:
        return FormAdjustment(pct=0.0, description="Form: normal training load")

    sign = "+" if pct > 0 else ""
    return FormAdjustment(
        pct=pct,
        description=f"Form: {', '.join(reasons)} ({sign}{pct:.1f}%)",
    )


def calculate_readiness(
    distance_label: str,
    distance_miles: float,
    volume: TrainingVolume,
) -> Readiness:
    """Score 0-1 how well recent training supports racing this distance.

    readiness = 0.40·volume + 0.35·long_run + 0.25·consistency, each factor
    being min(1, actual ÷ requirement). Weekly volume is required as a
    multiple of the race distance; consistency saturates at 12 weeks.

    Raises:
        KeyError: If the distance label has no requirement entry.
    """
    volume_multiple, long_run_miles = DISTANCE_REQUIREMENTS[distance_label]
    required_weekly = volume_multiple * distance_miles

    volume_factor = _ratio(volume.avg_weekly_miles_4_weeks, required_weekly)
    long_run_factor = _ratio(volume.longest_recent_run_miles, long_run_miles)
    consistency_factor = _ratio(volume.weeks_consecutive_training, READINESS_CONSISTENCY_WEEKS)

    score = (
        READINESS_WEIGHT_VOLUME * volume_factor
        + READINESS_WEIGHT_LONG_RUN * long_run_factor
        + READINESS_WEIGHT_CONSISTENCY * consistency_factor
    )

    # First entry wins ties so the order reads volume → long run → consistency
    limiting = min(
        (
            (volume_factor, "weekly volume"),
            (long_run_factor, "long run"),
            (consistency_factor, "training consistency"),
        ),
        key=lambda pair: pair[0],
    )[1]

    return Readiness(
        score=round(max(0.0, min(1.0, score)), 2),
        factors=ReadinessFactors(
            volume=round(volume_factor, 2),
            long_run=round(long_run_factor, 2),
            consistency=round(consistency_factor, 2),
        ),
        limiting_factor=limiting,
    )


def _ratio(actual: float, required: float) -> float:
    if required <= 0:
        return 1.0
    return max(0.0, min(1.0, actual / required))
