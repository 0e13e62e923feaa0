"""Abstract base class for all signal extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable

from race_predictor.models.inputs import EngineInput
from race_predictor.models.signal import Signal


def workout_ids(records: Iterable) -> tuple[int, ...]:
    """IDs of the records that link back to a logged workout, order kept.

    Works on anything carrying a ``workout_id`` attribute that may be None.
    """
    return tuple(r.workout_id for r in records if r.workout_id is not None)


class SignalExtractor(ABC):
    """Base class for every fitness-evidence source.

    Each extractor scans one slice of the input snapshot and either emits a
    single Signal or stays silent. Extractors are discovered automatically
    by the SignalRegistry and run by the PredictionEngine.

    Subclasses must define:
        extractor_id: unique identifier (e.g. "race_vdot")
        version: semantic version string
        order: evaluation order (lowest first), keeps the signal list stable
        required_data: EngineInput field names that must be non-empty
        extract(): the extraction logic

    Extractors never raise on bad data. Invalid or insufficient records mean
    "no signal", reported by returning None.
    """

    extractor_id: str
    version: str
    order: int
    required_data: list[str]

    def has_required_data(self, engine_input: EngineInput) -> bool:
        """Check that all required EngineInput fields are present and non-empty."""
        for field_name in self.required_data:
            value = getattr(engine_input, field_name, None)
            if value is None:
                return False
            if isinstance(value, (list, tuple)) and len(value) == 0:
                return False
        return True

    @abstractmethod
    def extract(self, engine_input: EngineInput, as_of: date) -> Signal | None:
        """Estimate fitness from the input snapshot.

        Args:
            engine_input: Frozen input snapshot.
            as_of: Reference date for every recency computation.

        Returns:
            A Signal, or None if the eligibility criteria are not met.
        """
        ...
