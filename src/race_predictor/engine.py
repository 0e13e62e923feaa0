"""PredictionEngine — the orchestrator that turns evidence into race predictions."""

from __future__ import annotations

import logging
from datetime import date

from race_predictor.blending.blender import SignalBlender
from race_predictor.math.form import calculate_form_adjustment
from race_predictor.math.recency import days_between
from race_predictor.models.enums import (
    CONFIDENCE_SAVED_VDOT,
    HIGH_CONFIDENCE_MIN_AGREEMENT,
    HIGH_CONFIDENCE_MIN_SIGNALS,
    MEDIUM_CONFIDENCE_MIN_AGREEMENT,
    MEDIUM_CONFIDENCE_MIN_SIGNALS,
    RECENT_DATA_MIN_WORKOUTS,
    RECENT_DATA_WINDOW_DAYS,
    VDOT_MAX,
    VDOT_MIN,
    WEIGHT_SAVED_VDOT,
    ConfidenceLevel,
    SignalStatus,
)
from race_predictor.models.inputs import EngineInput
from race_predictor.models.result import DataQuality, EngineResult
from race_predictor.models.signal import Signal, SignalResult
from race_predictor.predictions import generate_predictions
from race_predictor.registry import SignalRegistry

logger = logging.getLogger(__name__)

SAVED_VDOT_SIGNAL = "Saved VDOT"


class PredictionEngine:
    """Runs extractors → blender → form/readiness → predictions.

    The engine holds no per-call state: every call works on its own frozen
    input snapshot, so one instance is safe to share across threads.

    Usage:
        engine = PredictionEngine()
        result = engine.evaluate(EngineInput(races=(...), as_of_date=date(2024, 6, 15)))
    """

    def __init__(
        self,
        registry: SignalRegistry | None = None,
        blender: SignalBlender | None = None,
    ) -> None:
        self.registry = registry or SignalRegistry()
        self.blender = blender or SignalBlender()

        # Auto-discover extractors if using default registry
        if registry is None:
            self.registry.discover_extractors()

    def evaluate(self, engine_input: EngineInput) -> EngineResult:
        """Estimate current fitness and predict race times.

        Args:
            engine_input: Frozen input snapshot. ``as_of_date=None`` means
                today, resolved once here.

        Returns:
            EngineResult with the blended index, four predictions, data
            quality flags and the per-extractor trace.
        """
        as_of = engine_input.as_of_date or date.today()

        signals, trace = self._extract_signals(engine_input, as_of)

        if not any(not s.is_modifier for s in signals):
            saved = self._saved_vdot_signal(engine_input.saved_vdot)
            if saved is not None:
                logger.debug(
                    "No absolute signals; falling back to saved VDOT %.1f", saved.estimated_vdot
                )
                signals.append(saved)

        blend = self.blender.blend(signals)
        data_quality = self._assess_data_quality(engine_input, signals, as_of)
        confidence = self._confidence_label(
            data_quality.signals_used, blend.agreement_score, data_quality.has_recent_data
        )

        form = calculate_form_adjustment(engine_input.fitness_state)
        predictions = generate_predictions(
            blend.vdot,
            form,
            engine_input.training_volume,
            blend.agreement_score,
            confidence,
        )

        logger.info(
            "Evaluated as of %s: VDOT %.1f (%s confidence, %d signals)",
            as_of.isoformat(),
            blend.vdot,
            confidence.value,
            data_quality.signals_used,
        )

        return EngineResult(
            vdot=blend.vdot,
            vdot_range=blend.vdot_range,
            confidence=confidence,
            agreement_score=blend.agreement_score,
            agreement_details=blend.agreement_details,
            signals=tuple(signals),
            predictions=predictions,
            form_adjustment_pct=form.pct,
            form_description=form.description,
            data_quality=data_quality,
            trace=tuple(trace),
            blend_notes=blend.notes,
        )

    def _extract_signals(
        self, engine_input: EngineInput, as_of: date
    ) -> tuple[list[Signal], list[SignalResult]]:
        signals: list[Signal] = []
        trace: list[SignalResult] = []

        for extractor in self.registry.get_all_extractors():
            if not extractor.has_required_data(engine_input):
                trace.append(
                    SignalResult(
                        extractor_id=extractor.extractor_id,
                        status=SignalStatus.NOT_APPLICABLE,
                        explanation=f"Missing required data: {extractor.required_data}",
                    )
                )
                continue

            signal = extractor.extract(engine_input, as_of)
            if signal is None:
                logger.debug("Extractor %s skipped", extractor.extractor_id)
                trace.append(
                    SignalResult(
                        extractor_id=extractor.extractor_id,
                        status=SignalStatus.SKIPPED,
                        explanation="Eligibility criteria not met",
                    )
                )
                continue

            logger.debug(
                "Extractor %s fired: %.2f (confidence %.2f)",
                extractor.extractor_id,
                signal.estimated_vdot,
                signal.confidence,
            )
            signals.append(signal)
            trace.append(
                SignalResult(
                    extractor_id=extractor.extractor_id,
                    status=SignalStatus.FIRED,
                    signal=signal,
                    explanation=signal.description,
                )
            )

        return signals, trace

    @staticmethod
    def _saved_vdot_signal(saved_vdot: float | None) -> Signal | None:
        if saved_vdot is None or not VDOT_MIN <= saved_vdot <= VDOT_MAX:
            return None
        return Signal(
            name=SAVED_VDOT_SIGNAL,
            weight=WEIGHT_SAVED_VDOT,
            estimated_vdot=saved_vdot,
            confidence=CONFIDENCE_SAVED_VDOT,
            data_points=1,
            description="From your profile settings (no recent training data)",
        )

    @staticmethod
    def _assess_data_quality(
        engine_input: EngineInput, signals: list[Signal], as_of: date
    ) -> DataQuality:
        recent_workouts = [
            w
            for w in engine_input.workouts
            if days_between(w.date, as_of) <= RECENT_DATA_WINDOW_DAYS
        ]
        return DataQuality(
            has_hr=any(w.has_hr for w in engine_input.workouts),
            has_races=len(engine_input.races) > 0,
            has_recent_data=len(recent_workouts) >= RECENT_DATA_MIN_WORKOUTS,
            signals_used=sum(1 for s in signals if not s.is_modifier),
            workouts_used=len(engine_input.workouts),
        )

    @staticmethod
    def _confidence_label(
        signals_used: int, agreement_score: float, has_recent_data: bool
    ) -> ConfidenceLevel:
        if (
            signals_used >= HIGH_CONFIDENCE_MIN_SIGNALS
            and agreement_score >= HIGH_CONFIDENCE_MIN_AGREEMENT
            and has_recent_data
        ):
            return ConfidenceLevel.HIGH
        if (
            signals_used >= MEDIUM_CONFIDENCE_MIN_SIGNALS
            and agreement_score >= MEDIUM_CONFIDENCE_MIN_AGREEMENT
        ):
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW
