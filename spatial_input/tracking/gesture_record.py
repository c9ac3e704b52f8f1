"""
Per-source spatial input state.
Holds the baseline pose, the current category and the callers interested
in one input source.
"""

import logging
from collections import Counter
from typing import Hashable, Optional

import numpy as np

from spatial_input.core.types import GestureCategory, Pose
from spatial_input.utils.geometry import delta_angle

logger = logging.getLogger(__name__)


class GestureRecord:
    """Spatial input state for one tracked source.

    The baseline is the reference frame for every delta. It is captured at
    creation and again whenever the category switches to a new active value.
    Switching to NONE leaves it alone.
    """

    def __init__(self, source_key: Hashable, pose_provider, caller=None,
                 count_duplicates: bool = False):
        self._source_key = source_key
        self._pose_provider = pose_provider
        self._count_duplicates = count_duplicates
        self._callers = Counter()
        self._category = GestureCategory.NONE

        pose = pose_provider.get_pose(source_key)
        self.baseline_position = pose.position.copy()
        self.baseline_rotation = pose.rotation.copy()

        # Set on the evaluation that changed the category, consumed next tick
        self.changed_this_tick = False

        if caller is not None:
            self.add_caller(caller)

    def __repr__(self):
        return (f"GestureRecord({self._source_key!r}, {self._category.value}, "
                f"callers={self.caller_count})")

    @property
    def source_key(self) -> Hashable:
        return self._source_key

    # ------------------------------------------------------------------
    # Category
    # ------------------------------------------------------------------

    @property
    def category(self) -> GestureCategory:
        return self._category

    @category.setter
    def category(self, value: GestureCategory):
        if value == self._category:
            self.changed_this_tick = False
            return

        self.changed_this_tick = True
        self._category = value
        if value is GestureCategory.NONE:
            return

        self.reset_baseline()

    def reset_baseline(self):
        """Capture the live pose as the new reference frame."""
        pose = self.current_pose
        self.baseline_position = pose.position.copy()
        self.baseline_rotation = pose.rotation.copy()
        logger.debug("Baseline reset for %r", self._source_key)

    # ------------------------------------------------------------------
    # Callers
    # ------------------------------------------------------------------

    def add_caller(self, caller):
        if self._count_duplicates:
            self._callers[caller] += 1
        else:
            self._callers[caller] = 1

    def remove_caller(self, caller) -> bool:
        """Drop one unit of interest for caller.

        Returns:
            True if any caller is still interested afterwards
        """
        if caller in self._callers:
            self._callers[caller] -= 1
            if self._callers[caller] <= 0:
                del self._callers[caller]
        return len(self._callers) > 0

    def has_caller(self, caller) -> bool:
        return caller in self._callers

    @property
    def callers(self) -> list:
        return list(self._callers.keys())

    @property
    def caller_count(self) -> int:
        """Units of interest, counting repeats when duplicates are counted."""
        return sum(self._callers.values())

    @property
    def is_polled(self) -> bool:
        return any(caller.is_polling() for caller in self._callers)

    # ------------------------------------------------------------------
    # Live pose and deltas
    # ------------------------------------------------------------------

    @property
    def current_pose(self) -> Pose:
        return self._pose_provider.get_pose(self._source_key)

    @property
    def current_position(self) -> np.ndarray:
        return self.current_pose.position

    @property
    def current_rotation(self) -> np.ndarray:
        return self.current_pose.rotation

    @property
    def current_euler(self) -> np.ndarray:
        return self.current_pose.euler

    @property
    def baseline_euler(self) -> np.ndarray:
        return Pose(self.baseline_position, self.baseline_rotation).euler

    @property
    def axis_deltas(self) -> np.ndarray:
        """Signed shortest angular change per axis since the baseline, degrees."""
        baseline = self.baseline_euler
        current = self.current_euler
        return np.array([delta_angle(b, c) for b, c in zip(baseline, current)])

    @property
    def displacement(self) -> np.ndarray:
        return self.current_position - self.baseline_position

    @property
    def drag_distance(self) -> float:
        """Linear distance travelled since the baseline."""
        return float(np.linalg.norm(self.displacement))

    @property
    def active_axis(self) -> Optional[int]:
        """Index (0=x, 1=y, 2=z) of the dominant axis for the current category."""
        if self._category.is_rotation:
            return int(np.argmax(np.abs(self.axis_deltas)))
        if self._category is GestureCategory.DRAG_TRANSLATION:
            return int(np.argmax(np.abs(self.displacement)))
        return None

    @property
    def signed_delta_magnitude(self) -> float:
        """Signed change along the active axis.

        Degrees for rotation categories, position units for drag, 0.0 when idle.
        """
        if self._category.is_rotation:
            deltas = self.axis_deltas
            return float(deltas[int(np.argmax(np.abs(deltas)))])
        if self._category is GestureCategory.DRAG_TRANSLATION:
            offset = self.displacement
            return float(offset[int(np.argmax(np.abs(offset)))])
        return 0.0
