"""Signal blending: combines extractor estimates into one fitness index."""

from race_predictor.blending.blender import BlendResult, SignalBlender
from race_predictor.blending.strategies import BlendStrategy, TwoPassWeightedBlend

__all__ = ["BlendResult", "BlendStrategy", "SignalBlender", "TwoPassWeightedBlend"]
