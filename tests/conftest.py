"""Shared test fixtures: runner physiology, training volume, performance factories."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from race_predictor.models.enums import PerformanceSource
from race_predictor.models.inputs import (
    FitnessState,
    PerformanceRecord,
    TrainingVolume,
    UserPhysiology,
    WorkoutSignalInput,
)

# Fixed reference date so every recency computation is reproducible
AS_OF = date(2024, 6, 15)


def days_ago(days: int) -> date:
    return AS_OF - timedelta(days=days)


@pytest.fixture
def as_of() -> date:
    """Evaluation date the factories count their ``days`` back from."""
    return AS_OF


@pytest.fixture
def physiology() -> UserPhysiology:
    """Resting 50, max 190: 140 bpm heart-rate reserve."""
    return UserPhysiology(resting_hr=50, max_hr=190, age=35, gender="F")


@pytest.fixture
def marathon_ready_volume() -> TrainingVolume:
    """80 mi/week, 20-mile long run, 16 consecutive weeks: ready for every distance."""
    return TrainingVolume(
        avg_weekly_miles_4_weeks=80.0,
        longest_recent_run_miles=20.0,
        weeks_consecutive_training=16,
        quality_sessions_per_week=2.0,
    )


@pytest.fixture
def neutral_fitness() -> FitnessState:
    """CTL 50, TSB 0: no form adjustment."""
    return FitnessState(ctl=50.0, atl=50.0, tsb=0.0)


@pytest.fixture
def race_factory() -> Callable[..., PerformanceRecord]:
    """Factory for race records: make(time_s, days=10, distance_m=5000, **overrides)."""

    def factory(
        time_seconds: float,
        days: int = 10,
        distance_meters: float = 5000.0,
        **overrides,
    ) -> PerformanceRecord:
        fields = {"source": PerformanceSource.RACE, **overrides}
        return PerformanceRecord(
            date=days_ago(days),
            distance_meters=distance_meters,
            time_seconds=time_seconds,
            **fields,
        )

    return factory


@pytest.fixture
def effort_factory() -> Callable[..., PerformanceRecord]:
    """Factory for best efforts, workout segments by default."""

    def factory(
        distance_meters: float,
        time_seconds: float,
        days: int = 10,
        source: PerformanceSource = PerformanceSource.WORKOUT_SEGMENT,
        **overrides,
    ) -> PerformanceRecord:
        return PerformanceRecord(
            date=days_ago(days),
            distance_meters=distance_meters,
            time_seconds=time_seconds,
            source=source,
            **overrides,
        )

    return factory


@pytest.fixture
def workout_factory() -> Callable[..., WorkoutSignalInput]:
    """Factory for logged runs: duration is derived from distance and pace."""

    def factory(
        days: int = 5,
        distance_miles: float = 5.0,
        pace_seconds: float = 540.0,
        workout_type: str = "easy",
        avg_hr: float | None = 148.0,
        **overrides,
    ) -> WorkoutSignalInput:
        return WorkoutSignalInput(
            date=days_ago(days),
            distance_miles=distance_miles,
            duration_minutes=distance_miles * pace_seconds / 60.0,
            avg_pace_seconds=pace_seconds,
            workout_type=workout_type,
            avg_hr=avg_hr,
            **overrides,
        )

    return factory
