"""Race time prediction engine.

Estimates current aerobic fitness (VDOT) by blending independent evidence
signals, then converts it into race-time predictions with confidence ranges
and per-distance readiness.
"""

from race_predictor.engine import PredictionEngine

__all__ = ["PredictionEngine"]
