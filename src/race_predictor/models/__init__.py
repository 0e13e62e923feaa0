"""Data models for the race prediction engine."""

from race_predictor.models.enums import ConfidenceLevel, PerformanceSource, SignalStatus
from race_predictor.models.inputs import (
    EngineInput,
    FitnessState,
    PerformanceRecord,
    TrainingVolume,
    UserPhysiology,
    WorkoutSignalInput,
)
from race_predictor.models.result import (
    DataQuality,
    EngineResult,
    Prediction,
    ReadinessFactors,
    TimeRange,
    VdotRange,
)
from race_predictor.models.signal import Signal, SignalResult

__all__ = [
    "ConfidenceLevel",
    "DataQuality",
    "EngineInput",
    "EngineResult",
    "FitnessState",
    "PerformanceRecord",
    "PerformanceSource",
    "Prediction",
    "ReadinessFactors",
    "Signal",
    "SignalResult",
    "SignalStatus",
    "TimeRange",
    "TrainingVolume",
    "UserPhysiology",
    "VdotRange",
    "WorkoutSignalInput",
]
