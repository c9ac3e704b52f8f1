"""Pose providers."""
from .pose_source import PoseSource

__all__ = ["PoseSource"]
