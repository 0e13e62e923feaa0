"""Signal blender — combines every emitted signal into one fitness index."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from race_predictor.blending.strategies import BlendStrategy, TwoPassWeightedBlend
from race_predictor.math.vdot import clamp_vdot
from race_predictor.models.enums import (
    AGREEMENT_MIN,
    AGREEMENT_STD_OFFSET,
    AGREEMENT_STD_SCALE,
    DEFAULT_VDOT,
    EF_MIN_CONFIDENCE,
    FALLBACK_RANGE_HALF_WIDTH,
    VDOT_RANGE_STD_MULTIPLIER,
)
from race_predictor.models.result import VdotRange
from race_predictor.models.signal import Signal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlendResult:
    """Blended fitness index with its dispersion statistics.

    Attributes:
        vdot: Final index, clamped to [15, 85] and rounded to 0.1.
        vdot_range: Final value ± 1.5σ; collapses to a point for a single signal.
        agreement_score: 0.1-1.0, higher when signals cluster tightly.
        agreement_details: Human-readable agreement summary.
        std_dev: Population σ of absolute estimates around the final value.
        signals_used: Number of absolute (non-modifier) signals blended.
        modifier_applied: VDOT added by the efficiency trend (0 if none).
        notes: Strategy notes for the trace.
    """

    vdot: float
    vdot_range: VdotRange
    agreement_score: float
    agreement_details: str
    std_dev: float = 0.0
    signals_used: int = 0
    modifier_applied: float = 0.0
    notes: str = ""


class SignalBlender:
    """Combines signals with a pluggable strategy.

    Modifier signals (the efficiency-factor trend) never enter the strategy;
    they are added afterwards, scaled by their own weight, when their
    confidence is high enough. Default strategy is TwoPassWeightedBlend.
    """

    def __init__(self, strategy: BlendStrategy | None = None) -> None:
        self.strategy = strategy or TwoPassWeightedBlend()

    def blend(self, signals: list[Signal] | tuple[Signal, ...]) -> BlendResult:
        absolute = [s for s in signals if not s.is_modifier and s.effective_weight > 0]
        modifiers = [s for s in signals if s.is_modifier]

        if not absolute:
            return BlendResult(
                vdot=DEFAULT_VDOT,
                vdot_range=VdotRange(
                    low=DEFAULT_VDOT - FALLBACK_RANGE_HALF_WIDTH,
                    high=DEFAULT_VDOT + FALLBACK_RANGE_HALF_WIDTH,
                ),
                agreement_score=0.0,
                agreement_details="No signals available",
                notes="No absolute signals; default fitness index used",
            )

        estimate, notes = self.strategy.blend(absolute)

        modifier_applied = 0.0
        for modifier in modifiers:
            if modifier.confidence > EF_MIN_CONFIDENCE:
                modifier_applied += modifier.weight * modifier.estimated_vdot
        if modifier_applied:
            logger.debug("Efficiency modifier %+.2f VDOT applied", modifier_applied)
        estimate = clamp_vdot(estimate + modifier_applied)

        estimates = np.array([s.estimated_vdot for s in absolute], dtype=np.float64)
        std_dev = (
            float(np.sqrt(np.mean((estimates - estimate) ** 2))) if len(absolute) > 1 else 0.0
        )
        agreement = 1.0 - (std_dev - AGREEMENT_STD_OFFSET) / AGREEMENT_STD_SCALE
        agreement = max(AGREEMENT_MIN, min(1.0, agreement))

        half_width = VDOT_RANGE_STD_MULTIPLIER * std_dev
        vdot_range = VdotRange(
            low=round(clamp_vdot(estimate - half_width), 1),
            high=round(clamp_vdot(estimate + half_width), 1),
        )

        return BlendResult(
            vdot=round(estimate, 1),
            vdot_range=vdot_range,
            agreement_score=round(agreement, 2),
            agreement_details=_describe_agreement(absolute, estimate, std_dev),
            std_dev=std_dev,
            signals_used=len(absolute),
            modifier_applied=modifier_applied,
            notes=notes,
        )


def _describe_agreement(absolute: list[Signal], estimate: float, std_dev: float) -> str:
    count = len(absolute)
    if count < 2:
        return "Single signal — no cross-validation possible"
    if std_dev < 1.0:
        return f"Excellent agreement between {count} signals (±{std_dev:.1f} VDOT)"
    if std_dev < 2.5:
        return f"Good agreement between {count} signals (±{std_dev:.1f} VDOT)"
    if std_dev < 4.0:
        return (
            f"Moderate disagreement between signals (±{std_dev:.1f} VDOT) "
            "— predictions less certain"
        )
    outlier = max(absolute, key=lambda s: abs(s.estimated_vdot - estimate))
    return (
        f'Significant disagreement (±{std_dev:.1f} VDOT). "{outlier.name}" is the '
        f"main outlier at VDOT {outlier.estimated_vdot:.1f}"
    )
