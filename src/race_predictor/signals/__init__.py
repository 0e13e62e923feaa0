"""Signal extractors. Every concrete SignalExtractor here is auto-discovered."""
