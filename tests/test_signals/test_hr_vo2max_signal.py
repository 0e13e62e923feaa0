"""Tests for the heart-rate based effective VO2max extractor."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from race_predictor.models.inputs import EngineInput, UserPhysiology, WorkoutSignalInput
from race_predictor.signals.hr_vo2max import (
    HeartRateVO2maxExtractor,
    estimate_from_run,
    fatigue_corrected_hr,
    freshness_boost,
)


class TestFatigueCorrection:
    def test_fresh_unchanged(self) -> None:
        assert fatigue_corrected_hr(150.0, 10.0) == 150.0

    def test_unknown_tsb_unchanged(self) -> None:
        assert fatigue_corrected_hr(150.0, None) == 150.0

    def test_discount_proportional(self) -> None:
        assert fatigue_corrected_hr(150.0, -20.0) == pytest.approx(146.0)

    def test_discount_capped_at_six(self) -> None:
        assert fatigue_corrected_hr(150.0, -50.0) == pytest.approx(144.0)


class TestFreshnessBoost:
    @pytest.mark.parametrize(
        ("tsb", "expected"),
        [(None, 1.0), (-30.0, 1.0), (-20.0, 1.0), (-10.0, 1.075), (0.0, 1.15), (30.0, 1.15)],
    )
    def test_boost(self, tsb: float | None, expected: float) -> None:
        assert freshness_boost(tsb) == pytest.approx(expected)


class TestEstimateFromRun:
    def test_known_value(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        """HRR 0.70 → 66.96% VO2max; 9:00/mi costs 31.32 ml/kg/min → ≈ 46.77."""
        assert estimate_from_run(workout_factory(), physiology) == pytest.approx(46.77, abs=0.02)

    def test_fatigue_raises_estimate(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        fresh = estimate_from_run(workout_factory(), physiology)
        tired = estimate_from_run(workout_factory(tsb=-20.0), physiology)
        assert tired > fresh

    def test_heat_raises_estimate(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        neutral = estimate_from_run(workout_factory(), physiology)
        hot = estimate_from_run(
            workout_factory(weather_temp_f=85.0, weather_humidity_pct=70.0), physiology
        )
        assert hot > neutral

    def test_hrr_below_band_excluded(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        assert estimate_from_run(workout_factory(avg_hr=115.0), physiology) is None

    def test_hrr_above_band_excluded(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        assert estimate_from_run(workout_factory(avg_hr=180.0), physiology) is None

    @pytest.mark.parametrize("workout_type", ["tempo", "threshold", "interval"])
    def test_surge_types_excluded(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
        workout_type: str,
    ) -> None:
        assert estimate_from_run(workout_factory(workout_type=workout_type), physiology) is None

    def test_short_run_excluded(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        assert estimate_from_run(workout_factory(distance_miles=1.5), physiology) is None

    def test_missing_hr_excluded(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        assert estimate_from_run(workout_factory(avg_hr=None), physiology) is None


class TestHeartRateSignal:
    def setup_method(self) -> None:
        self.extractor = HeartRateVO2maxExtractor()

    @pytest.fixture(autouse=True)
    def _reference_date(self, as_of: date) -> None:
        self.as_of = as_of

    def _extract(self, physiology: UserPhysiology, *runs: WorkoutSignalInput):
        return self.extractor.extract(EngineInput(physiology=physiology, workouts=runs), self.as_of)

    def test_single_run(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        signal = self._extract(physiology, workout_factory())
        assert signal.name == "Effective VO2max (HR)"
        assert signal.weight == 0.5
        assert signal.confidence == pytest.approx(0.4)
        assert signal.estimated_vdot == pytest.approx(46.77, abs=0.02)

    def test_small_reserve_no_signal(
        self, workout_factory: Callable[..., WorkoutSignalInput]
    ) -> None:
        physiology = UserPhysiology(resting_hr=175, max_hr=190)
        assert self._extract(physiology, workout_factory(avg_hr=185.0)) is None

    def test_no_eligible_runs(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        assert self._extract(physiology, workout_factory(workout_type="tempo")) is None

    def test_recent_window_used_exclusively(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        runs = [workout_factory(days=d) for d in (3, 10, 20)] + [
            workout_factory(days=50, avg_hr=125.0)
        ]
        signal = self._extract(physiology, *runs)
        assert signal.data_points == 3
        assert signal.estimated_vdot == pytest.approx(46.77, abs=0.02)

    def test_confidence_grows_with_runs(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        five = self._extract(physiology, *(workout_factory(days=d) for d in range(1, 6)))
        ten = self._extract(physiology, *(workout_factory(days=d) for d in range(1, 11)))
        assert five.confidence == pytest.approx(0.6)
        assert ten.confidence == pytest.approx(0.75)
        assert "stable" in five.description

    def test_old_data_penalised(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        forty_five = self._extract(physiology, workout_factory(days=45))
        seventy = self._extract(physiology, workout_factory(days=70))
        assert forty_five.confidence == pytest.approx(0.36)
        assert seventy.confidence == pytest.approx(0.288)

    def test_improving_trend_described(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        older = [workout_factory(days=d, pace_seconds=600.0) for d in (25, 22, 20)]
        newer = [workout_factory(days=d, pace_seconds=520.0) for d in (6, 4, 2)]
        signal = self._extract(physiology, *older, *newer)
        assert "improving" in signal.description

    def test_key_records_are_five_newest(
        self,
        physiology: UserPhysiology,
        workout_factory: Callable[..., WorkoutSignalInput],
    ) -> None:
        runs = [workout_factory(days=d, workout_id=d) for d in (7, 3, 5, 1, 6, 2, 4)]
        signal = self._extract(physiology, *runs)
        assert signal.key_dates == tuple(self.as_of - timedelta(days=d) for d in range(1, 6))
        assert signal.key_workout_ids == (1, 2, 3, 4, 5)
