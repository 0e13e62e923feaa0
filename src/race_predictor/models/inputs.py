"""Frozen input records — the immutable snapshot a single engine call works on."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from race_predictor.models.enums import METERS_PER_MILE, PerformanceSource


@dataclass(frozen=True)
class UserPhysiology:
    """Heart-rate anchors for the runner. Only the HR-based signal reads these."""

    resting_hr: int = 60
    max_hr: int = 190
    age: int | None = None
    gender: str | None = None

    @property
    def hr_reserve(self) -> int:
        """Heart-rate reserve in bpm (max HR minus resting HR)."""
        return self.max_hr - self.resting_hr


@dataclass(frozen=True)
class PerformanceRecord:
    """A race result or best effort: a distance covered in a given time.

    Records with non-positive distance or time are structurally invalid; the
    extractors skip them instead of raising.
    """

    date: date
    distance_meters: float
    time_seconds: float
    source: PerformanceSource = PerformanceSource.RACE
    effort_level: str | None = None
    weather_temp_f: float | None = None
    weather_humidity_pct: float | None = None
    elevation_gain_ft: float | None = None
    workout_id: int | None = None

    @property
    def is_valid(self) -> bool:
        return self.distance_meters > 0 and self.time_seconds > 0


@dataclass(frozen=True)
class WorkoutSignalInput:
    """One logged run as seen by the workout-based extractors."""

    date: date
    distance_miles: float
    duration_minutes: float  # moving time
    avg_pace_seconds: float  # seconds per mile, moving pace
    workout_type: str = "easy"
    avg_hr: float | None = None
    max_hr: float | None = None
    elevation_gain_ft: float | None = None
    weather_temp_f: float | None = None
    weather_humidity_pct: float | None = None
    tsb: float | None = None  # training-stress balance on the day of the run
    workout_id: int | None = None

    @property
    def has_hr(self) -> bool:
        return self.avg_hr is not None and self.avg_hr > 0

    @property
    def velocity_m_per_min(self) -> float:
        """Average moving velocity in metres per minute (0 when undefined)."""
        if self.distance_miles <= 0 or self.duration_minutes <= 0:
            return 0.0
        return self.distance_miles * METERS_PER_MILE / self.duration_minutes


@dataclass(frozen=True)
class FitnessState:
    """Output of the external fitness-load model for the evaluation date."""

    ctl: float = 0.0
    atl: float = 0.0
    tsb: float = 0.0


@dataclass(frozen=True)
class TrainingVolume:
    """Recent training volume summary used for per-distance readiness."""

    avg_weekly_miles_4_weeks: float = 0.0
    longest_recent_run_miles: float = 0.0
    weeks_consecutive_training: int = 0
    quality_sessions_per_week: float = 0.0


@dataclass(frozen=True)
class EngineInput:
    """Complete immutable input snapshot for PredictionEngine.evaluate().

    ``as_of_date`` is the reference date for every recency computation.
    ``None`` means "today", resolved once at the start of the call.
    """

    physiology: UserPhysiology = field(default_factory=UserPhysiology)
    workouts: tuple[WorkoutSignalInput, ...] = field(default_factory=tuple)
    races: tuple[PerformanceRecord, ...] = field(default_factory=tuple)
    best_efforts: tuple[PerformanceRecord, ...] = field(default_factory=tuple)
    fitness_state: FitnessState = field(default_factory=FitnessState)
    training_volume: TrainingVolume = field(default_factory=TrainingVolume)
    saved_vdot: float | None = None
    as_of_date: date | None = None
