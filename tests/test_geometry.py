"""
Tests for Geometry Helpers
===========================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from spatial_input.core.types import Pose
from spatial_input.utils.geometry import (
    IDENTITY_QUATERNION,
    delta_angle,
    euler_from_quaternion,
    normalize_quaternion,
    quaternion_from_euler,
    quaternion_multiply,
)


class TestDeltaAngle:
    """Test suite for shortest signed angle difference."""

    def test_simple_difference(self):
        """Plain difference when no wrap is involved."""
        assert delta_angle(10.0, 25.0) == pytest.approx(15.0)
        assert delta_angle(25.0, 10.0) == pytest.approx(-15.0)

    def test_wraps_across_zero(self):
        """Crossing 0/360 takes the short way round."""
        assert delta_angle(350.0, 10.0) == pytest.approx(20.0)
        assert delta_angle(10.0, 350.0) == pytest.approx(-20.0)

    def test_half_turn_is_positive(self):
        """Exactly opposite angles resolve to +180."""
        assert delta_angle(0.0, 180.0) == pytest.approx(180.0)
        assert delta_angle(0.0, 540.0) == pytest.approx(180.0)

    def test_negative_inputs(self):
        """Negative angles are handled like their positive equivalents."""
        assert delta_angle(0.0, -181.0) == pytest.approx(179.0)
        assert delta_angle(-0.2, 0.2) == pytest.approx(0.4)


class TestQuaternions:
    """Test suite for quaternion helpers."""

    def test_identity_multiply(self):
        """Multiplying by identity leaves a rotation unchanged."""
        q = quaternion_from_euler(10.0, 20.0, 30.0)
        assert np.allclose(quaternion_multiply(q, IDENTITY_QUATERNION), q)
        assert np.allclose(quaternion_multiply(IDENTITY_QUATERNION, q), q)

    def test_normalize_zero_quaternion(self):
        """A degenerate quaternion falls back to identity."""
        assert np.allclose(normalize_quaternion([0, 0, 0, 0]), IDENTITY_QUATERNION)

    def test_normalize_scales_to_unit(self):
        q = normalize_quaternion([0.0, 0.0, 0.0, 2.0])
        assert np.linalg.norm(q) == pytest.approx(1.0)

    def test_identity_euler(self):
        """Identity rotation reads as zero on every axis."""
        assert np.allclose(euler_from_quaternion(IDENTITY_QUATERNION), [0.0, 0.0, 0.0])

    def test_euler_recovered(self):
        """Euler angles survive conversion through a quaternion."""
        euler = euler_from_quaternion(quaternion_from_euler(30.0, 45.0, 60.0))
        assert np.allclose(euler, [30.0, 45.0, 60.0])

    def test_negative_angle_wrapped(self):
        """Negative rotations are reported in [0, 360)."""
        euler = euler_from_quaternion(quaternion_from_euler(-10.0, 0.0, 0.0))
        assert euler[0] == pytest.approx(350.0)
        assert all(0.0 <= a < 360.0 for a in euler)

    def test_composed_rotation_adds_up(self):
        """Two rotations about the same axis compose additively."""
        q = quaternion_multiply(quaternion_from_euler(0.0, 20.0, 0.0),
                                quaternion_from_euler(0.0, 15.0, 0.0))
        assert euler_from_quaternion(q)[1] == pytest.approx(35.0)


class TestPose:
    """Test suite for Pose container."""

    def test_defaults_to_identity(self):
        pose = Pose()
        assert np.allclose(pose.position, [0, 0, 0])
        assert np.allclose(pose.rotation, IDENTITY_QUATERNION)

    def test_copy_is_independent(self):
        """Mutating a copy never touches the original arrays."""
        pose = Pose([1.0, 2.0, 3.0])
        clone = pose.copy()
        clone.position[0] = 99.0
        assert pose.position[0] == 1.0

    def test_does_not_alias_input(self):
        position = np.array([1.0, 0.0, 0.0])
        pose = Pose(position)
        position[0] = 5.0
        assert pose.position[0] == 1.0

    def test_euler_property(self):
        pose = Pose(rotation=quaternion_from_euler(0.0, 0.0, 12.0))
        assert pose.euler[2] == pytest.approx(12.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
