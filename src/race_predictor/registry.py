"""Signal registry with auto-discovery of SignalExtractor subclasses."""

from __future__ import annotations

import importlib
import pkgutil

from race_predictor.signals.base import SignalExtractor


class SignalRegistry:
    """Discovers and manages all SignalExtractor implementations.

    Auto-discovers extractors by scanning the signals/ package for concrete
    subclasses of SignalExtractor. A new evidence source is added by placing
    one module in that package; the blender never changes.
    """

    def __init__(self) -> None:
        self._extractors: dict[str, SignalExtractor] = {}

    def discover_extractors(self) -> None:
        """Import every module under race_predictor.signals and register extractors."""
        import race_predictor.signals as signals_pkg

        for _, module_name, _ in pkgutil.walk_packages(
            signals_pkg.__path__, prefix=signals_pkg.__name__ + "."
        ):
            module = importlib.import_module(module_name)
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, SignalExtractor)
                    and attr is not SignalExtractor
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, extractor: SignalExtractor) -> None:
        """Register an extractor instance by its extractor_id (last one wins)."""
        self._extractors[extractor.extractor_id] = extractor

    def get(self, extractor_id: str) -> SignalExtractor | None:
        return self._extractors.get(extractor_id)

    def get_all_extractors(self) -> list[SignalExtractor]:
        """Return all registered extractors in evaluation order."""
        return sorted(self._extractors.values(), key=lambda e: (e.order, e.extractor_id))

    @property
    def extractor_ids(self) -> list[str]:
        return [e.extractor_id for e in self.get_all_extractors()]
