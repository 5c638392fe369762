"""
Vector Primitives
=================
Two, three and four component vectors.

Arguments are read by attribute (``other.x``, ``m.elements``), so any object
exposing the right attributes is accepted. Methods named ``set*`` modify the
vector in place and return it for chaining; every other operation leaves the
vector untouched and returns a new value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    from equationdiscovery.mathlib.euler import Euler
    from equationdiscovery.mathlib.matrix import Matrix3, Matrix4
    from equationdiscovery.mathlib.quaternion import Quaternion


@dataclass
class Vector2:
    """A vector in the XY plane."""
    x: float = 0.0
    y: float = 0.0

    # --- in-place ---

    def set(self, x: float, y: float) -> Vector2:
        self.x = float(x)
        self.y = float(y)
        return self

    def set_scalar(self, scalar: float) -> Vector2:
        self.x = self.y = float(scalar)
        return self

    def set_length(self, length: float) -> Vector2:
        current = self.length()
        if current == 0.0:
            return self
        factor = length / current
        self.x *= factor
        self.y *= factor
        return self

    def copy(self, other: Vector2) -> Vector2:
        self.x = other.x
        self.y = other.y
        return self

    def from_array(self, array: Sequence[float], offset: int = 0) -> Vector2:
        self.x = float(array[offset])
        self.y = float(array[offset + 1])
        return self

    # --- new values ---

    def clone(self) -> Vector2:
        return Vector2(self.x, self.y)

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def multiply_scalar(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def divide_scalar(self, scalar: float) -> Vector2:
        if scalar == 0.0:
            raise ZeroDivisionError("Division of a vector by zero.")
        return Vector2(self.x / scalar, self.y / scalar)

    def negate(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def normalize(self) -> Vector2:
        mag = self.length()
        if mag == 0.0:
            return Vector2(0.0, 0.0)
        return self.divide_scalar(mag)

    def lerp(self, other: Vector2, alpha: float) -> Vector2:
        return Vector2(
            self.x + (other.x - self.x) * alpha,
            self.y + (other.y - self.y) * alpha
        )

    def rotate_around(self, center: Vector2, angle: float) -> Vector2:
        """Rotate this point around ``center`` by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        dx = self.x - center.x
        dy = self.y - center.y
        return Vector2(
            dx * cos_a - dy * sin_a + center.x,
            dx * sin_a + dy * cos_a + center.y
        )

    def apply_matrix3(self, m: Matrix3) -> Vector2:
        """Transform as a homogeneous 2D point (x, y, 1)."""
        x, y, _ = np.asarray(m.elements) @ np.array([self.x, self.y, 1.0])
        return Vector2(float(x), float(y))

    # --- scalars ---

    def dot(self, other: Vector2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def length_sq(self) -> float:
        return self.x ** 2 + self.y ** 2

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y)

    def angle(self) -> float:
        """Angle in radians with respect to the positive X axis, in [0, 2*pi)."""
        return math.atan2(-self.y, -self.x) + math.pi

    def distance_to_squared(self, other: Vector2) -> float:
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def distance_to(self, other: Vector2) -> float:
        return math.sqrt(self.distance_to_squared(other))

    def equals(self, other: Vector2) -> bool:
        return self.x == other.x and self.y == other.y

    def to_array(self) -> List[float]:
        return [self.x, self.y]

    @staticmethod
    def from_angle(angle: float) -> Vector2:
        """Unit vector pointing at ``angle`` radians."""
        return Vector2(math.cos(angle), math.sin(angle))


@dataclass
class Vector3:
    """A vector in 3D space representing direction and magnitude."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # --- in-place ---

    def set(self, x: float, y: float, z: float) -> Vector3:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def set_scalar(self, scalar: float) -> Vector3:
        self.x = self.y = self.z = float(scalar)
        return self

    def set_length(self, length: float) -> Vector3:
        current = self.length()
        if current == 0.0:
            return self
        factor = length / current
        self.x *= factor
        self.y *= factor
        self.z *= factor
        return self

    def set_from_matrix_position(self, m: Matrix4) -> Vector3:
        e = np.asarray(m.elements)
        self.x, self.y, self.z = (float(v) for v in e[:3, 3])
        return self

    def set_from_matrix_column(self, m: Matrix4, index: int) -> Vector3:
        e = np.asarray(m.elements)
        self.x, self.y, self.z = (float(v) for v in e[:3, int(index)])
        return self

    def copy(self, other: Vector3) -> Vector3:
        self.x = other.x
        self.y = other.y
        self.z = other.z
        return self

    def from_array(self, array: Sequence[float], offset: int = 0) -> Vector3:
        self.x = float(array[offset])
        self.y = float(array[offset + 1])
        self.z = float(array[offset + 2])
        return self

    # --- new values ---

    def clone(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def multiply_scalar(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def divide_scalar(self, scalar: float) -> Vector3:
        if scalar == 0.0:
            raise ZeroDivisionError("Division of a vector by zero.")
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def negate(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def normalize(self) -> Vector3:
        mag = self.length()
        if mag == 0.0:
            return Vector3(0.0, 0.0, 0.0)
        return self.divide_scalar(mag)

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def lerp(self, other: Vector3, alpha: float) -> Vector3:
        return Vector3(
            self.x + (other.x - self.x) * alpha,
            self.y + (other.y - self.y) * alpha,
            self.z + (other.z - self.z) * alpha
        )

    def project_on_vector(self, other: Vector3) -> Vector3:
        denominator = other.x ** 2 + other.y ** 2 + other.z ** 2
        if denominator == 0.0:
            return Vector3(0.0, 0.0, 0.0)
        scalar = self.dot(other) / denominator
        return Vector3(other.x * scalar, other.y * scalar, other.z * scalar)

    def project_on_plane(self, plane_normal: Vector3) -> Vector3:
        return self.sub(self.project_on_vector(plane_normal))

    def reflect(self, normal: Vector3) -> Vector3:
        """Reflect off a plane orthogonal to ``normal`` (assumed unit length)."""
        factor = 2.0 * self.dot(normal)
        return Vector3(
            self.x - normal.x * factor,
            self.y - normal.y * factor,
            self.z - normal.z * factor
        )

    def apply_matrix3(self, m: Matrix3) -> Vector3:
        x, y, z = np.asarray(m.elements) @ np.array([self.x, self.y, self.z])
        return Vector3(float(x), float(y), float(z))

    def apply_matrix4(self, m: Matrix4) -> Vector3:
        """Transform as a homogeneous point, including the perspective divide."""
        x, y, z, w = np.asarray(m.elements) @ np.array([self.x, self.y, self.z, 1.0])
        if w == 0.0:
            raise ZeroDivisionError("Point maps to infinity (w == 0).")
        return Vector3(float(x / w), float(y / w), float(z / w))

    def apply_quaternion(self, q: Quaternion) -> Vector3:
        # t = 2 * cross(q.xyz, v); v' = v + q.w * t + cross(q.xyz, t)
        tx = 2.0 * (q.y * self.z - q.z * self.y)
        ty = 2.0 * (q.z * self.x - q.x * self.z)
        tz = 2.0 * (q.x * self.y - q.y * self.x)
        return Vector3(
            self.x + q.w * tx + q.y * tz - q.z * ty,
            self.y + q.w * ty + q.z * tx - q.x * tz,
            self.z + q.w * tz + q.x * ty - q.y * tx
        )

    def apply_euler(self, euler: Euler) -> Vector3:
        from equationdiscovery.mathlib.quaternion import Quaternion
        return self.apply_quaternion(Quaternion.from_euler(euler))

    def apply_axis_angle(self, axis: Vector3, angle: float) -> Vector3:
        from equationdiscovery.mathlib.quaternion import Quaternion
        return self.apply_quaternion(Quaternion.from_axis_angle(axis, angle))

    # --- scalars ---

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_sq(self) -> float:
        return self.x ** 2 + self.y ** 2 + self.z ** 2

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y) + abs(self.z)

    def distance_to_squared(self, other: Vector3) -> float:
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2

    def distance_to(self, other: Vector3) -> float:
        return math.sqrt(self.distance_to_squared(other))

    def angle_to(self, other: Vector3) -> float:
        """Returns the angle in radians between this vector and another."""
        denominator = math.sqrt(self.length_sq() * (other.x ** 2 + other.y ** 2 + other.z ** 2))
        if denominator == 0.0:
            return math.pi / 2
        theta = self.dot(other) / denominator
        return math.acos(min(max(theta, -1.0), 1.0))

    def equals(self, other: Vector3) -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z]

    @staticmethod
    def from_spherical_coords(radius: float, phi: float, theta: float) -> Vector3:
        """
        Polar angle ``phi`` from the +Y axis, azimuth ``theta`` around it.

        Discovery reaches this form only with a maximum arity of 4 or more:
        the owner slot plus three parameters.
        """
        sin_phi_radius = math.sin(phi) * radius
        return Vector3(
            sin_phi_radius * math.sin(theta),
            math.cos(phi) * radius,
            sin_phi_radius * math.cos(theta)
        )


@dataclass
class Vector4:
    """A four component vector, usually a homogeneous point."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def set(self, x: float, y: float, z: float, w: float) -> Vector4:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)
        return self

    def set_scalar(self, scalar: float) -> Vector4:
        self.x = self.y = self.z = self.w = float(scalar)
        return self

    def copy(self, other: Vector4) -> Vector4:
        self.x = other.x
        self.y = other.y
        self.z = other.z
        self.w = other.w
        return self

    def from_array(self, array: Sequence[float], offset: int = 0) -> Vector4:
        self.x, self.y, self.z, self.w = (float(v) for v in array[offset:offset + 4])
        return self

    def clone(self) -> Vector4:
        return Vector4(self.x, self.y, self.z, self.w)

    def add(self, other: Vector4) -> Vector4:
        return Vector4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def sub(self, other: Vector4) -> Vector4:
        return Vector4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def multiply_scalar(self, scalar: float) -> Vector4:
        return Vector4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def divide_scalar(self, scalar: float) -> Vector4:
        if scalar == 0.0:
            raise ZeroDivisionError("Division of a vector by zero.")
        return Vector4(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def negate(self) -> Vector4:
        return Vector4(-self.x, -self.y, -self.z, -self.w)

    def normalize(self) -> Vector4:
        mag = self.length()
        if mag == 0.0:
            return Vector4(0.0, 0.0, 0.0, 0.0)
        return self.divide_scalar(mag)

    def lerp(self, other: Vector4, alpha: float) -> Vector4:
        return Vector4(
            self.x + (other.x - self.x) * alpha,
            self.y + (other.y - self.y) * alpha,
            self.z + (other.z - self.z) * alpha,
            self.w + (other.w - self.w) * alpha
        )

    def apply_matrix4(self, m: Matrix4) -> Vector4:
        x, y, z, w = np.asarray(m.elements) @ np.array([self.x, self.y, self.z, self.w])
        return Vector4(float(x), float(y), float(z), float(w))

    def dot(self, other: Vector4) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def length_sq(self) -> float:
        return self.x ** 2 + self.y ** 2 + self.z ** 2 + self.w ** 2

    def length(self) -> float:
        return math.sqrt(self.length_sq())

    def manhattan_length(self) -> float:
        return abs(self.x) + abs(self.y) + abs(self.z) + abs(self.w)

    def equals(self, other: Vector4) -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z and self.w == other.w

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z, self.w]
