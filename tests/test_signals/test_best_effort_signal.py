"""Tests for the peak-weighted best-effort extractor."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from race_predictor.math.vdot import vdot_from_performance
from race_predictor.models.enums import PerformanceSource
from race_predictor.models.inputs import EngineInput, PerformanceRecord
from race_predictor.signals.best_effort import (
    BestEffortSignalExtractor,
    effort_vdot,
    is_eligible_effort,
    rank_weight,
)


class TestEligibility:
    def test_segment_at_5000m_eligible(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        assert is_eligible_effort(effort_factory(5000.0, 1200.0))

    def test_segment_at_4999m_ineligible(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        assert not is_eligible_effort(effort_factory(4999.0, 1200.0))

    def test_time_trial_mile_eligible(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        trial = effort_factory(1609.34, 360.0, source=PerformanceSource.TIME_TRIAL)
        assert is_eligible_effort(trial)

    def test_race_below_mile_ineligible(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        assert not is_eligible_effort(effort_factory(1500.0, 330.0, source=PerformanceSource.RACE))

    def test_invalid_record_ineligible(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        assert not is_eligible_effort(effort_factory(5000.0, -1.0))


class TestEffortVdot:
    def test_segment_derated(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        segment = effort_factory(5000.0, 1200.0)
        assert effort_vdot(segment) == pytest.approx(vdot_from_performance(5000, 1200) * 0.97)

    def test_race_grade_not_derated(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        trial = effort_factory(5000.0, 1200.0, source=PerformanceSource.TIME_TRIAL)
        assert effort_vdot(trial) == pytest.approx(vdot_from_performance(5000, 1200))


class TestRankWeight:
    def test_halves_every_two_ranks(self) -> None:
        assert rank_weight(0) == 1.0
        assert rank_weight(2) == pytest.approx(0.5)
        assert rank_weight(4) == pytest.approx(0.25)


class TestBestEffortSignal:
    def setup_method(self) -> None:
        self.extractor = BestEffortSignalExtractor()

    @pytest.fixture(autouse=True)
    def _reference_date(self, as_of: date) -> None:
        self.as_of = as_of

    def _extract(self, *efforts: PerformanceRecord):
        return self.extractor.extract(EngineInput(best_efforts=efforts), self.as_of)

    def test_no_efforts(self) -> None:
        assert self._extract() is None

    def test_only_ineligible(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        assert self._extract(effort_factory(4999.0, 1200.0)) is None

    def test_single_effort(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        signal = self._extract(effort_factory(5000.0, 1200.0))
        assert signal.name == "Best Effort VDOT"
        assert signal.estimated_vdot == pytest.approx(51.04 * 0.97, abs=0.02)
        assert signal.confidence == pytest.approx(0.4)

    def test_peak_weighting_beats_flat_average(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        efforts = (
            effort_factory(5000.0, 1150.0),
            effort_factory(5000.0, 1300.0),
            effort_factory(5000.0, 1320.0),
            effort_factory(5000.0, 1340.0),
        )
        signal = self._extract(*efforts)
        flat_mean = sum(effort_vdot(e) for e in efforts) / len(efforts)
        assert signal.estimated_vdot > flat_mean
        assert signal.estimated_vdot < effort_vdot(efforts[0])

    def test_input_order_irrelevant(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        efforts = [
            effort_factory(5000.0, 1150.0, days=20),
            effort_factory(10000.0, 2600.0, days=5),
            effort_factory(5000.0, 1250.0, days=40),
        ]
        forward = self._extract(*efforts)
        backward = self._extract(*reversed(efforts))
        assert forward.estimated_vdot == pytest.approx(backward.estimated_vdot)

    def test_confidence_tiers(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        two = self._extract(*(effort_factory(5000.0, 1200.0 + i) for i in range(2)))
        four = self._extract(*(effort_factory(5000.0, 1200.0 + i) for i in range(4)))
        five = self._extract(*(effort_factory(5000.0, 1200.0 + i) for i in range(5)))
        assert two.confidence == pytest.approx(0.5)
        assert four.confidence == pytest.approx(0.6)
        assert five.confidence == pytest.approx(0.7)

    def test_stale_penalty(self, effort_factory: Callable[..., PerformanceRecord]) -> None:
        signal = self._extract(effort_factory(5000.0, 1200.0, days=100))
        assert signal.confidence == pytest.approx(0.4 * 0.85)

    def test_key_records_are_top_five_ranked(
        self, effort_factory: Callable[..., PerformanceRecord]
    ) -> None:
        efforts = [
            effort_factory(5000.0, 1200.0 + i, days=10 + i, workout_id=None if i == 2 else 100 + i)
            for i in range(6)
        ]
        signal = self._extract(*reversed(efforts))
        assert signal.key_dates == tuple(e.date for e in efforts[:5])
        assert signal.key_workout_ids == (100, 101, 103, 104)
