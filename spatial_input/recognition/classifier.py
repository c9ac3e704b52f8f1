"""
Spatial Input Classifier
========================

Threshold-based classification of a source's motion since its baseline.
Decides between drag, single-axis rotation and free rotation.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from spatial_input.core.types import AXES, AxisFlag, GestureCategory, axis_count
from spatial_input.utils.geometry import delta_angle, euler_from_quaternion

logger = logging.getLogger(__name__)


@dataclass
class ClassifierConfig:
    """Spatial input classifier configuration."""
    # Per-axis rotation below this is wrist noise (degrees)
    rotation_threshold_deg: float = 0.3
    # Linear displacement needed to commit to a drag (pose position units)
    drag_distance_threshold: float = 0.05

    def __post_init__(self):
        for name in ("rotation_threshold_deg", "drag_distance_threshold"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value!r}")

    @classmethod
    def from_dict(cls, config: dict) -> "ClassifierConfig":
        """Create config from dictionary."""
        return cls(
            rotation_threshold_deg=config.get("rotation_threshold_deg", 0.3),
            drag_distance_threshold=config.get("drag_distance_threshold", 0.05),
        )


class SpatialClassifier:
    """
    Decides which spatial input category a record's motion belongs to.

    The tests attempted depend on the record's current category, so an
    ongoing gesture is only left for one of its alternatives:

    - NONE:                 single-axis rotation, free rotation, translation
    - DRAG_TRANSLATION:     single-axis rotation, free rotation
    - SINGLE_AXIS_ROTATION: translation, free rotation
    - FREE_ROTATION:        translation, single-axis rotation

    Example:
        >>> classifier = SpatialClassifier()
        >>> category = classifier.classify(record)
        >>> if category is not None:
        ...     record.category = category
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()
        self._test_order = {
            GestureCategory.NONE: (
                (self.is_rotating_single_axis, GestureCategory.SINGLE_AXIS_ROTATION),
                (self.is_rotating_freely, GestureCategory.FREE_ROTATION),
                (self.is_translating, GestureCategory.DRAG_TRANSLATION),
            ),
            GestureCategory.DRAG_TRANSLATION: (
                (self.is_rotating_single_axis, GestureCategory.SINGLE_AXIS_ROTATION),
                (self.is_rotating_freely, GestureCategory.FREE_ROTATION),
            ),
            GestureCategory.SINGLE_AXIS_ROTATION: (
                (self.is_translating, GestureCategory.DRAG_TRANSLATION),
                (self.is_rotating_freely, GestureCategory.FREE_ROTATION),
            ),
            GestureCategory.FREE_ROTATION: (
                (self.is_translating, GestureCategory.DRAG_TRANSLATION),
                (self.is_rotating_single_axis, GestureCategory.SINGLE_AXIS_ROTATION),
            ),
        }

    def classify(self, record) -> Optional[GestureCategory]:
        """
        Evaluate a record against its baseline.

        Args:
            record: GestureRecord to evaluate

        Returns:
            Category of the first test that fired, or None if none did
        """
        pose = record.current_pose
        axes = self.rotated_axes(record.baseline_rotation, pose.rotation)
        distance = float(np.linalg.norm(pose.position - record.baseline_position))

        for test, category in self._test_order[record.category]:
            if test(axes, distance):
                logger.debug("%r: %s fired (axes=%s, distance=%.4f)",
                             record.source_key, test.__name__, axes, distance)
                return category
        return None

    def rotated_axes(self, baseline_rotation, current_rotation) -> AxisFlag:
        """Accumulate the axes whose rotation crossed the threshold.

        X and Y are always tested. Z is skipped once two axes are already
        above threshold, since the result is free rotation either way.
        """
        baseline = euler_from_quaternion(baseline_rotation)
        current = euler_from_quaternion(current_rotation)

        axes = AxisFlag.NONE
        for index, flag in enumerate(AXES):
            if flag is AxisFlag.Z and axis_count(axes) >= 2:
                break
            if self.is_axis_above_threshold(baseline[index], current[index]):
                axes |= flag
        return axes

    def is_axis_above_threshold(self, baseline_angle: float, current_angle: float) -> bool:
        return abs(delta_angle(baseline_angle, current_angle)) > self.config.rotation_threshold_deg

    def is_rotating_single_axis(self, axes: AxisFlag, distance: float) -> bool:
        return axis_count(axes) == 1

    def is_rotating_freely(self, axes: AxisFlag, distance: float) -> bool:
        return axis_count(axes) >= 2

    def is_translating(self, axes: AxisFlag, distance: float) -> bool:
        """Moved far enough from the baseline without rotating."""
        return axes == AxisFlag.NONE and distance > self.config.drag_distance_threshold
