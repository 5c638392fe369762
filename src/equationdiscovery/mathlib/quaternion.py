"""
Quaternion
==========
Rotation quaternion stored as (x, y, z, w) with the scalar part last, the
same component order scipy's ``Rotation.as_quat`` uses.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, TYPE_CHECKING
import math

import numpy as np
from scipy.spatial.transform import Rotation

from equationdiscovery.mathlib.euler import euler_rotation

if TYPE_CHECKING:
    from equationdiscovery.mathlib.euler import Euler
    from equationdiscovery.mathlib.matrix import Matrix4
    from equationdiscovery.mathlib.vector import Vector3

EPSILON = 1e-6


def _product(a: Quaternion, b: Quaternion) -> Quaternion:
    """Hamilton product a * b."""
    return Quaternion(
        a.x * b.w + a.w * b.x + a.y * b.z - a.z * b.y,
        a.y * b.w + a.w * b.y + a.z * b.x - a.x * b.z,
        a.z * b.w + a.w * b.z + a.x * b.y - a.y * b.x,
        a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z
    )


@dataclass
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    # --- in-place ---

    def set(self, x: float, y: float, z: float, w: float) -> Quaternion:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)
        return self

    def set_from_euler(self, euler: Euler) -> Quaternion:
        return self.copy(Quaternion.from_euler(euler))

    def set_from_axis_angle(self, axis: Vector3, angle: float) -> Quaternion:
        return self.copy(Quaternion.from_axis_angle(axis, angle))

    def set_from_rotation_matrix(self, m: Matrix4) -> Quaternion:
        """Use the upper 3x3 block of ``m``, assumed to be a pure rotation."""
        rotation = np.asarray(m.elements, dtype=np.float64)[:3, :3]
        x, y, z, w = Rotation.from_matrix(rotation).as_quat()
        return self.set(x, y, z, w)

    def copy(self, other: Quaternion) -> Quaternion:
        return self.set(other.x, other.y, other.z, other.w)

    def from_array(self, array: Sequence[float], offset: int = 0) -> Quaternion:
        return self.set(*array[offset:offset + 4])

    # --- new values ---

    def clone(self) -> Quaternion:
        return Quaternion(self.x, self.y, self.z, self.w)

    def multiply(self, other: Quaternion) -> Quaternion:
        return _product(self, other)

    def premultiply(self, other: Quaternion) -> Quaternion:
        return _product(other, self)

    def conjugate(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def invert(self) -> Quaternion:
        norm_sq = self.length_sq()
        if norm_sq == 0.0:
            raise ValueError("Cannot invert a zero quaternion.")
        c = self.conjugate()
        return Quaternion(c.x / norm_sq, c.y / norm_sq, c.z / norm_sq, c.w / norm_sq)

    def normalize(self) -> Quaternion:
        mag = self.length()
        if mag == 0.0:
            return Quaternion(0.0, 0.0, 0.0, 1.0)
        return Quaternion(self.x / mag, self.y / mag, self.z / mag, self.w / mag)

    def slerp(self, other: Quaternion, t: float) -> Quaternion:
        """
        Spherical linear interpolation towards ``other``.

        Both ends are normalized first, and the shorter arc is taken.
        """
        a = self.normalize()
        b = other.normalize()
        cos_half = a.dot(b)
        if cos_half < 0.0:
            b = Quaternion(-b.x, -b.y, -b.z, -b.w)
            cos_half = -cos_half

        if cos_half >= 1.0 - EPSILON:
            # Nearly parallel: fall back to normalized lerp
            return Quaternion(
                a.x + (b.x - a.x) * t,
                a.y + (b.y - a.y) * t,
                a.z + (b.z - a.z) * t,
                a.w + (b.w - a.w) * t
            ).normalize()

        half = math.acos(cos_half)
        sin_half = math.sin(half)
        ratio_a = math.sin((1.0 - t) * half) / sin_half
        ratio_b = math.sin(t * half) / sin_half
        return Quaternion(
            a.x * ratio_a + b.x * ratio_b,
            a.y * ratio_a + b.y * ratio_b,
            a.z * ratio_a + b.z * ratio_b,
            a.w * ratio_a + b.w * ratio_b
        )

    def rotate_towards(self, other: Quaternion, step: float) -> Quaternion:
        """Rotate towards ``other`` by at most ``step`` radians."""
        angle = self.angle_to(other)
        if angle == 0.0:
            return self.normalize()
        return self.slerp(other, min(1.0, step / angle))

    # --- scalars ---

    def dot(self, other: Quaternion) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length_sq(self) -> float:
        return self.x ** 2 + self.y ** 2 + self.z ** 2 + self.w ** 2

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def angle_to(self, other: Quaternion) -> float:
        """Angle in radians between the rotations this and ``other`` represent."""
        cos_half = abs(self.normalize().dot(other.normalize()))
        return 2.0 * math.acos(min(cos_half, 1.0))

    def equals(self, other: Quaternion) -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z and self.w == other.w

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z, self.w]

    # --- constructors ---

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float) -> Quaternion:
        """Rotation of ``angle`` radians around ``axis`` (assumed unit length)."""
        half = angle / 2.0
        s = math.sin(half)
        return Quaternion(axis.x * s, axis.y * s, axis.z * s, math.cos(half))

    @staticmethod
    def from_euler(euler: Euler) -> Quaternion:
        x, y, z, w = euler_rotation(euler).as_quat()
        return Quaternion(float(x), float(y), float(z), float(w))

    @staticmethod
    def from_unit_vectors(v_from: Vector3, v_to: Vector3) -> Quaternion:
        """Shortest rotation taking direction ``v_from`` to ``v_to`` (both unit length)."""
        r = v_from.x * v_to.x + v_from.y * v_to.y + v_from.z * v_to.z + 1.0

        if r < EPSILON:
            # Opposite vectors: any orthogonal axis works
            r = 0.0
            if abs(v_from.x) > abs(v_from.z):
                q = Quaternion(-v_from.y, v_from.x, 0.0, r)
            else:
                q = Quaternion(0.0, -v_from.z, v_from.y, r)
        else:
            q = Quaternion(
                v_from.y * v_to.z - v_from.z * v_to.y,
                v_from.z * v_to.x - v_from.x * v_to.z,
                v_from.x * v_to.y - v_from.y * v_to.x,
                r
            )

        return q.normalize()
