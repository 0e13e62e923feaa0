"""Tests for the Critical Speed extractor."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from race_predictor.models.enums import PerformanceSource
from race_predictor.models.inputs import EngineInput, PerformanceRecord
from race_predictor.signals.critical_speed import CriticalSpeedExtractor, best_per_bucket

# CS 4.5 m/s, D' 200 m: t = (d - 200) / 4.5
_CS = 4.5
_D_PRIME = 200.0


def _time(distance: float) -> float:
    return (distance - _D_PRIME) / _CS


class TestBestPerBucket:
    def test_keeps_fastest(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        slow = effort_factory(5000.0, 1250.0, days=5)
        fast = effort_factory(5000.0, 1180.0, days=50)
        assert best_per_bucket([slow, fast]) == {"5K": fast}

    def test_tie_prefers_recent(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        old = effort_factory(5000.0, 1200.0, days=50)
        recent = effort_factory(5000.0, 1200.0, days=5)
        assert best_per_bucket([old, recent])["5K"] is recent


class TestCriticalSpeedSignal:
    def setup_method(self) -> None:
        self.extractor = CriticalSpeedExtractor()

    @pytest.fixture(autouse=True)
    def _reference_date(self, as_of: date) -> None:
        self.as_of = as_of

    def test_four_buckets(
        self,
        race_factory: Callable[..., PerformanceRecord],
        effort_factory: Callable[..., PerformanceRecord],
    ) -> None:
        races = (
            race_factory(_time(5000.0), distance_meters=5000.0, days=20),
            race_factory(_time(10000.0), distance_meters=10000.0, days=40),
        )
        efforts = (
            effort_factory(1609.34, _time(1609.34), source=PerformanceSource.TIME_TRIAL),
            effort_factory(3000.0, _time(3000.0), source=PerformanceSource.TIME_TRIAL),
        )
        signal = self.extractor.extract(EngineInput(races=races, best_efforts=efforts), self.as_of)
        assert signal is not None
        assert signal.name == "Critical Speed"
        assert signal.weight == 0.6
        assert signal.data_points == 4
        assert signal.confidence == pytest.approx(0.7)
        assert signal.estimated_vdot == pytest.approx(59.31, abs=0.05)
        assert "4.50 m/s" in signal.description

    def test_three_buckets_minimum(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        efforts = tuple(
            effort_factory(d, _time(d), source=PerformanceSource.TIME_TRIAL)
            for d in (1609.34, 5000.0, 10000.0)
        )
        signal = self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of)
        assert signal.confidence == pytest.approx(0.55)

    def test_two_buckets_no_signal(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        efforts = tuple(
            effort_factory(d, _time(d), source=PerformanceSource.TIME_TRIAL)
            for d in (5000.0, 5200.0, 10000.0)
        )
        assert self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of) is None

    def test_long_efforts_excluded(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        efforts = tuple(
            effort_factory(d, _time(d), source=PerformanceSource.TIME_TRIAL)
            for d in (1609.34, 5000.0, 21097.0)
        )
        assert self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of) is None

    def test_poor_fit_penalised(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        factors = (1.3, 0.8, 1.25, 0.85)
        efforts = tuple(
            effort_factory(d, _time(d) * f, source=PerformanceSource.TIME_TRIAL)
            for d, f in zip((1609.34, 3000.0, 5000.0, 10000.0), factors)
        )
        signal = self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of)
        assert signal.confidence == pytest.approx(0.7 * 0.8)

    def test_key_records_follow_distance_order(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        efforts = (
            effort_factory(10000.0, _time(10000.0), days=30, source=PerformanceSource.TIME_TRIAL),
            effort_factory(
                1609.34, _time(1609.34), days=10, source=PerformanceSource.TIME_TRIAL, workout_id=7
            ),
            effort_factory(
                5000.0, _time(5000.0), days=20, source=PerformanceSource.TIME_TRIAL, workout_id=8
            ),
        )
        signal = self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of)
        assert signal.key_dates == (efforts[1].date, efforts[2].date, efforts[0].date)
        assert signal.key_workout_ids == (7, 8)

    def test_no_data(self) -> None:
        assert self.extractor.extract(EngineInput(), self.as_of) is None
