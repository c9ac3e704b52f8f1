"""
In-memory pose provider.

The host environment normally supplies poses (a frame loop, a tracking SDK).
PoseSource stands in for it: callers push poses in, the registry reads them
back through get_pose(). Any object with a compatible get_pose() can replace it.
"""

import logging
from typing import Dict, Hashable, Optional, Sequence

import numpy as np

from spatial_input.core.types import Pose
from spatial_input.utils.geometry import quaternion_from_euler, quaternion_multiply

logger = logging.getLogger(__name__)


class PoseSource:
    """Keeps the latest pose for each source key."""

    def __init__(self, poses: Optional[Dict[Hashable, Pose]] = None):
        self._poses: Dict[Hashable, Pose] = {}
        for source_key, pose in (poses or {}).items():
            self._poses[source_key] = pose.copy()

    def get_pose(self, source_key: Hashable) -> Pose:
        """Return a copy of the current pose; unseen sources sit at the origin."""
        pose = self._poses.get(source_key)
        if pose is None:
            logger.debug("No pose for source %r yet, using identity", source_key)
            return Pose.identity()
        return pose.copy()

    def set_pose(self, source_key: Hashable, position: Optional[Sequence[float]] = None,
                 rotation: Optional[Sequence[float]] = None):
        """Replace position and/or rotation (quaternion x, y, z, w)."""
        current = self._poses.get(source_key, Pose.identity())
        self._poses[source_key] = Pose(
            current.position if position is None else position,
            current.rotation if rotation is None else rotation,
        )

    def set_euler(self, source_key: Hashable, x: float, y: float, z: float):
        """Set the local rotation from Euler angles in degrees."""
        self.set_pose(source_key, rotation=quaternion_from_euler(x, y, z))

    def translate(self, source_key: Hashable, offset: Sequence[float]):
        current = self._poses.get(source_key, Pose.identity())
        self.set_pose(source_key, position=current.position + np.asarray(offset, dtype=float))

    def rotate(self, source_key: Hashable, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        """Apply an additional local rotation given in Euler degrees."""
        current = self._poses.get(source_key, Pose.identity())
        delta = quaternion_from_euler(x, y, z)
        self.set_pose(source_key, rotation=quaternion_multiply(current.rotation, delta))

    @property
    def sources(self) -> list:
        return list(self._poses.keys())
