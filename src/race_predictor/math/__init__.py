"""Pure numeric helpers for the prediction engine."""
