"""
Shared domain types for the spatial input detection system.

Centralizes enums, data classes, and type definitions used across modules
to eliminate circular imports and ensure type consistency.
"""

from enum import Enum, IntFlag
from typing import Dict

import numpy as np

from spatial_input.utils.geometry import IDENTITY_QUATERNION, euler_from_quaternion, normalize_quaternion


# =============================================================================
# Gesture Categories
# =============================================================================

class GestureCategory(Enum):
    """Mutually exclusive spatial input categories for one source."""
    NONE = "none"
    DRAG_TRANSLATION = "drag_translation"
    SINGLE_AXIS_ROTATION = "single_axis_rotation"
    FREE_ROTATION = "free_rotation"

    @classmethod
    def from_string(cls, name: str) -> 'GestureCategory':
        """Convert a string category name to GestureCategory enum, safely."""
        try:
            return cls(name)
        except ValueError:
            return cls.NONE

    @property
    def is_active(self) -> bool:
        return self is not GestureCategory.NONE

    @property
    def is_rotation(self) -> bool:
        return self in (GestureCategory.SINGLE_AXIS_ROTATION, GestureCategory.FREE_ROTATION)


class AxisFlag(IntFlag):
    """Rotation axes found above threshold during a single classification pass."""
    NONE = 0
    X = 1
    Y = 2
    Z = 4


AXES = (AxisFlag.X, AxisFlag.Y, AxisFlag.Z)


def axis_count(flags: AxisFlag) -> int:
    """Number of axes set in an accumulator."""
    return bin(int(flags)).count("1")


class HapticPattern(Enum):
    """Pulse pattern names a haptic sink is expected to play per category."""
    NONE = "none"
    STEADY = "steady"
    SHARP_PULSE = "sharp_pulse"
    GRADUAL_PULSE = "gradual_pulse"


# =============================================================================
# Category ↔ Haptic Mapping
# =============================================================================

CATEGORY_HAPTIC_MAP: Dict[GestureCategory, HapticPattern] = {
    GestureCategory.NONE: HapticPattern.NONE,
    GestureCategory.DRAG_TRANSLATION: HapticPattern.STEADY,
    GestureCategory.SINGLE_AXIS_ROTATION: HapticPattern.SHARP_PULSE,
    GestureCategory.FREE_ROTATION: HapticPattern.GRADUAL_PULSE,
}


# =============================================================================
# Data Containers
# =============================================================================

class Pose:
    """Position plus local rotation of an input source.

    Uses __slots__ since a pose is sampled for every source on every tick.
    """

    __slots__ = ("position", "rotation")

    def __init__(self, position=None, rotation=None):
        self.position = np.zeros(3) if position is None else np.asarray(position, dtype=float).copy()
        self.rotation = (IDENTITY_QUATERNION.copy() if rotation is None
                         else normalize_quaternion(rotation))

    def __repr__(self):
        return f"Pose(position={self.position.tolist()}, rotation={self.rotation.tolist()})"

    @classmethod
    def identity(cls) -> 'Pose':
        return cls()

    def copy(self) -> 'Pose':
        return Pose(self.position, self.rotation)

    @property
    def euler(self) -> np.ndarray:
        """Local rotation as (x, y, z) Euler angles in degrees."""
        return euler_from_quaternion(self.rotation)


class InputCaller:
    """A party interested in the spatial input of one or more sources.

    Any hashable object with an ``is_polling()`` method can act as a caller;
    this class is the stock implementation used by the demo and tests.
    """

    def __init__(self, name: str, polling: bool = False):
        self.name = name
        self.polling = polling

    def __repr__(self):
        return f"InputCaller({self.name!r}, polling={self.polling})"

    def is_polling(self) -> bool:
        return self.polling


def caller_name(caller) -> str:
    """Readable caller label for log lines."""
    return getattr(caller, "name", None) or repr(caller)
