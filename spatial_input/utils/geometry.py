"""
Rotation helpers for pose comparison.

Quaternions are numpy arrays in [x, y, z, w] order. Euler angles are in
degrees and follow the yaw-pitch-roll composition used by game engines:
a rotation by (x, y, z) is applied as Z first, then X, then Y.
"""

import math

import numpy as np

IDENTITY_QUATERNION = np.array([0.0, 0.0, 0.0, 1.0])


def delta_angle(current: float, target: float) -> float:
    """Shortest signed difference between two angles in degrees.

    Result lies in (-180, 180].
    """
    delta = (target - current) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return delta


def normalize_quaternion(q) -> np.ndarray:
    q = np.asarray(q, dtype=float)
    norm = np.linalg.norm(q)
    if norm == 0:
        return IDENTITY_QUATERNION.copy()
    return q / norm


def quaternion_multiply(a, b) -> np.ndarray:
    """Hamilton product a * b (applies b first, then a)."""
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return np.array([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ])


def _axis_quaternion(axis: int, degrees: float) -> np.ndarray:
    half = math.radians(degrees) / 2.0
    q = np.zeros(4)
    q[axis] = math.sin(half)
    q[3] = math.cos(half)
    return q


def quaternion_from_euler(x: float, y: float, z: float) -> np.ndarray:
    """Build a unit quaternion from Euler angles in degrees."""
    qx = _axis_quaternion(0, x)
    qy = _axis_quaternion(1, y)
    qz = _axis_quaternion(2, z)
    return normalize_quaternion(quaternion_multiply(quaternion_multiply(qy, qx), qz))


def euler_from_quaternion(q) -> np.ndarray:
    """Euler angles (x, y, z) in degrees, each wrapped to [0, 360)."""
    x, y, z, w = normalize_quaternion(q)

    sin_x = 2.0 * (w * x - y * z)
    # Clamp against drift just outside [-1, 1]
    pitch = math.asin(max(-1.0, min(1.0, sin_x)))
    yaw = math.atan2(2.0 * (x * z + w * y), 1.0 - 2.0 * (x * x + y * y))
    roll = math.atan2(2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z))

    angles = np.degrees(np.array([pitch, yaw, roll])) % 360.0
    # Tiny negative angles round up to exactly 360 after the modulo
    return np.where(angles >= 360.0, 0.0, angles)
