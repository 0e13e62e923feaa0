"""Engine output records — predictions, data quality and the full result."""

from __future__ import annotations

from dataclasses import dataclass, field

from race_predictor.models.enums import ConfidenceLevel
from race_predictor.models.signal import Signal, SignalResult


@dataclass(frozen=True)
class TimeRange:
    """Confidence interval for a predicted time, in seconds (fast < slow)."""

    fast: int
    slow: int


@dataclass(frozen=True)
class VdotRange:
    low: float
    high: float


@dataclass(frozen=True)
class ReadinessFactors:
    """Per-factor readiness scores, each 0.0-1.0."""

    volume: float
    long_run: float
    consistency: float


@dataclass(frozen=True)
class Prediction:
    """Predicted race time at one standard distance."""

    distance: str
    meters: int
    miles: float
    predicted_seconds: int
    tapered_seconds: int
    pace_per_mile: int
    range: TimeRange
    readiness: float
    readiness_factors: ReadinessFactors
    adjustment_reasons: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DataQuality:
    has_hr: bool
    has_races: bool
    has_recent_data: bool
    signals_used: int
    workouts_used: int = 0


@dataclass(frozen=True)
class EngineResult:
    """Complete output of a single PredictionEngine.evaluate() call.

    ``trace`` records every extractor's outcome so the estimate is fully
    explainable, including extractors that stayed silent.
    """

    vdot: float
    vdot_range: VdotRange
    confidence: ConfidenceLevel
    agreement_score: float
    agreement_details: str
    signals: tuple[Signal, ...]
    predictions: tuple[Prediction, ...]
    form_adjustment_pct: float
    form_description: str
    data_quality: DataQuality
    trace: tuple[SignalResult, ...] = field(default_factory=tuple)
    blend_notes: str = ""

    def get_prediction(self, distance: str) -> Prediction | None:
        """Look up the prediction for a distance label such as "10K"."""
        for prediction in self.predictions:
            if prediction.distance == distance:
                return prediction
        return None

    def get_signal(self, name: str) -> Signal | None:
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None
