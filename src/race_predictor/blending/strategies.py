"""Blend strategies for combining absolute fitness estimates."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from race_predictor.models.enums import OUTLIER_DEVIATION_VDOT
from race_predictor.models.signal import Signal

logger = logging.getLogger(__name__)


class BlendStrategy(ABC):
    """Base class for blend strategies."""

    @abstractmethod
    def blend(self, signals: list[Signal]) -> tuple[float, str]:
        """Combine absolute (non-modifier) signals into one estimate.

        Caller guarantees at least one signal with positive effective weight.

        Returns the unclamped estimate and a human-readable note for the
        trace.
        """
        ...


class TwoPassWeightedBlend(BlendStrategy):
    """Weighted mean with outlier dampening.

    Pass 1 takes the mean weighted by weight × confidence. Pass 2 shrinks the
    weight of every signal deviating more than 4 VDOT from that mean by
    (4 / deviation)², then recomputes. A single wild estimate can therefore
    never drag the blend far from a consistent cluster.
    """

    def __init__(self, outlier_deviation: float = OUTLIER_DEVIATION_VDOT) -> None:
        self.outlier_deviation = outlier_deviation

    def blend(self, signals: list[Signal]) -> tuple[float, str]:
        weights = [s.effective_weight for s in signals]
        first_pass = _weighted_mean(signals, weights)

        dampened: list[str] = []
        for i, signal in enumerate(signals):
            deviation = abs(signal.estimated_vdot - first_pass)
            if deviation > self.outlier_deviation:
                weights[i] *= (self.outlier_deviation / deviation) ** 2
                dampened.append(signal.name)

        if not dampened:
            return first_pass, f"Weighted mean {first_pass:.2f}, no outliers"

        second_pass = _weighted_mean(signals, weights)
        logger.debug(
            "Pass-1 mean %.2f, dampened %s, pass-2 mean %.2f",
            first_pass,
            dampened,
            second_pass,
        )
        return second_pass, (
            f"Pass-1 mean {first_pass:.2f}; dampened {', '.join(dampened)}; "
            f"final {second_pass:.2f}"
        )


def _weighted_mean(signals: list[Signal], weights: list[float]) -> float:
    total = sum(weights)
    return sum(s.estimated_vdot * w for s, w in zip(signals, weights)) / total
