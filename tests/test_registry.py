"""Tests for SignalRegistry — auto-discovery of extractors."""

from __future__ import annotations

from race_predictor.registry import SignalRegistry

_EXPECTED_IDS = [
    "race_vdot",
    "best_effort_vdot",
    "hr_vo2max",
    "ef_trend",
    "critical_speed",
    "training_pace",
]


class TestSignalRegistry:
    def test_discover_finds_all_extractors(self) -> None:
        registry = SignalRegistry()
        registry.discover_extractors()
        assert registry.extractor_ids == _EXPECTED_IDS

    def test_get_all_sorted_by_order(self) -> None:
        registry = SignalRegistry()
        registry.discover_extractors()
        orders = [e.order for e in registry.get_all_extractors()]
        assert orders == sorted(orders)

    def test_discovery_idempotent(self) -> None:
        registry = SignalRegistry()
        registry.discover_extractors()
        registry.discover_extractors()
        assert len(registry.get_all_extractors()) == len(_EXPECTED_IDS)

    def test_get_nonexistent_returns_none(self) -> None:
        registry = SignalRegistry()
        assert registry.get("nonexistent_signal") is None

    def test_register_custom_extractor(self) -> None:
        from race_predictor.models.signal import Signal
        from race_predictor.signals.base import SignalExtractor

        class DummyExtractor(SignalExtractor):
            extractor_id = "dummy_test"
            version = "0.1.0"
            order = 99
            required_data: list[str] = []

            def extract(self, engine_input, as_of):
                return Signal(name="Dummy", weight=1.0, estimated_vdot=50.0,
                              confidence=1.0, data_points=1)

        registry = SignalRegistry()
        registry.register(DummyExtractor())
        assert registry.get("dummy_test") is not None
        assert registry.extractor_ids == ["dummy_test"]
