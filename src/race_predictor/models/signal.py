"""Signal output — what a single extractor estimates about current fitness."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from race_predictor.models.enums import SignalStatus


@dataclass(frozen=True)
class Signal:
    """A single extractor's fitness estimate.

    Extractors produce these; the SignalBlender combines them into one VDOT.
    For the efficiency-factor trend, ``estimated_vdot`` is a VDOT *delta*
    rather than an absolute estimate (see ``is_modifier``).
    """

    name: str
    weight: float  # fixed per extractor, source reliability
    estimated_vdot: float
    confidence: float  # 0.0-1.0, data quality
    data_points: int
    description: str = ""
    recency_days: int | None = None
    is_modifier: bool = False
    key_dates: tuple[date, ...] = field(default_factory=tuple)
    key_workout_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def effective_weight(self) -> float:
        """Blending weight: source reliability scaled by data quality."""
        return self.weight * self.confidence


@dataclass(frozen=True)
class SignalResult:
    """Record of a single extractor's evaluation during an engine call."""

    extractor_id: str
    status: SignalStatus
    signal: Signal | None = None
    explanation: str = ""
