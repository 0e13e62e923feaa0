"""Report JSON serialization for EngineResult objects.

Converts an internal EngineResult into the camelCase structure the report
and UI layer consume. Times stay in whole seconds; formatting is the
caller's concern.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json

from race_predictor.models.result import EngineResult, Prediction
from race_predictor.models.signal import Signal


def to_report_json(result: EngineResult) -> dict:
    """Convert an EngineResult to a JSON-compatible dict."""
    quality = result.data_quality
    return {
        "vdot": result.vdot,
        "vdotRange": {"low": result.vdot_range.low, "high": result.vdot_range.high},
        "confidence": result.confidence.value,
        "agreementScore": result.agreement_score,
        "agreementDetails": result.agreement_details,
        "signals": [_convert_signal(signal) for signal in result.signals],
        "predictions": [_convert_prediction(p) for p in result.predictions],
        "formAdjustmentPct": result.form_adjustment_pct,
        "formDescription": result.form_description,
        "dataQuality": {
            "hasHr": quality.has_hr,
            "hasRaces": quality.has_races,
            "hasRecentData": quality.has_recent_data,
            "signalsUsed": quality.signals_used,
            "workoutsUsed": quality.workouts_used,
        },
    }


def to_report_json_string(result: EngineResult, indent: int = 2) -> str:
    """Convert an EngineResult to a JSON string."""
    return json.dumps(to_report_json(result), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _convert_signal(signal: Signal) -> dict:
    return {
        "name": signal.name,
        "weight": signal.weight,
        "estimatedVdot": round(signal.estimated_vdot, 1),
        "confidence": round(signal.confidence, 2),
        "dataPoints": signal.data_points,
        "recencyDays": signal.recency_days,
        "description": signal.description,
        "keyDates": [d.isoformat() for d in signal.key_dates],
        "keyWorkoutIds": list(signal.key_workout_ids),
    }


def _convert_prediction(prediction: Prediction) -> dict:
    factors = prediction.readiness_factors
    return {
        "distance": prediction.distance,
        "meters": prediction.meters,
        "miles": prediction.miles,
        "predictedSeconds": prediction.predicted_seconds,
        "taperedSeconds": prediction.tapered_seconds,
        "pacePerMile": prediction.pace_per_mile,
        "range": {"fast": prediction.range.fast, "slow": prediction.range.slow},
        "readiness": prediction.readiness,
        "readinessFactors": {
            "volume": factors.volume,
            "longRun": factors.long_run,
            "consistency": factors.consistency,
        },
        "adjustmentReasons": list(prediction.adjustment_reasons),
    }
