"""Spatial input classification."""
from .classifier import SpatialClassifier, ClassifierConfig

__all__ = ["SpatialClassifier", "ClassifierConfig"]
