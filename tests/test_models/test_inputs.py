"""Tests for input and result record helpers."""

from __future__ import annotations

from datetime import date

import pytest

from race_predictor.models.enums import METERS_PER_MILE
from race_predictor.models.inputs import PerformanceRecord, UserPhysiology, WorkoutSignalInput
from race_predictor.models.signal import Signal


class TestUserPhysiology:
    def test_hr_reserve(self) -> None:
        assert UserPhysiology(resting_hr=50, max_hr=190).hr_reserve == 140

    def test_defaults(self) -> None:
        physiology = UserPhysiology()
        assert physiology.resting_hr == 60
        assert physiology.max_hr == 190

    def test_frozen(self) -> None:
        physiology = UserPhysiology()
        with pytest.raises(AttributeError):
            physiology.max_hr = 200  # type: ignore[misc]


class TestPerformanceRecord:
    @pytest.mark.parametrize(
        ("distance", "time", "valid"),
        [(5000.0, 1200.0, True), (0.0, 1200.0, False), (5000.0, 0.0, False), (-1.0, 10.0, False)],
    )
    def test_is_valid(self, distance: float, time: float, valid: bool) -> None:
        record = PerformanceRecord(date=date(2024, 6, 1), distance_meters=distance, time_seconds=time)
        assert record.is_valid is valid


class TestWorkoutSignalInput:
    def test_velocity(self) -> None:
        run = WorkoutSignalInput(
            date=date(2024, 6, 1), distance_miles=5.0, duration_minutes=45.0, avg_pace_seconds=540.0
        )
        assert run.velocity_m_per_min == pytest.approx(5 * METERS_PER_MILE / 45.0)

    def test_velocity_undefined(self) -> None:
        run = WorkoutSignalInput(
            date=date(2024, 6, 1), distance_miles=5.0, duration_minutes=0.0, avg_pace_seconds=540.0
        )
        assert run.velocity_m_per_min == 0.0

    @pytest.mark.parametrize(("hr", "expected"), [(148.0, True), (None, False), (0.0, False)])
    def test_has_hr(self, hr: float | None, expected: bool) -> None:
        run = WorkoutSignalInput(
            date=date(2024, 6, 1),
            distance_miles=5.0,
            duration_minutes=45.0,
            avg_pace_seconds=540.0,
            avg_hr=hr,
        )
        assert run.has_hr is expected


class TestSignal:
    def test_effective_weight(self) -> None:
        signal = Signal(name="Race VDOT", weight=1.0, estimated_vdot=50.0, confidence=0.7, data_points=1)
        assert signal.effective_weight == pytest.approx(0.7)
