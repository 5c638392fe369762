"""
Square Matrices
===============
3x3 and 4x4 matrices backed by a row-major NumPy array (``elements``).

``set`` takes its arguments in row-major order, so the code reads like the
written matrix. ``make_*`` methods overwrite the matrix in place and return it;
products, inverses and transposes return new matrices.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, TYPE_CHECKING
import math

import numpy as np
from scipy.spatial.transform import Rotation

from equationdiscovery.mathlib.euler import euler_rotation
from equationdiscovery.mathlib.vector import Vector3

if TYPE_CHECKING:
    import numpy.typing as npt
    from equationdiscovery.mathlib.euler import Euler
    from equationdiscovery.mathlib.quaternion import Quaternion

SINGULAR_TOLERANCE = 1e-12


def _as_square(elements: npt.ArrayLike, size: int) -> npt.NDArray[np.float64]:
    """Return ``elements`` as a (size, size) float array or raise ValueError."""
    array = np.asarray(elements, dtype=np.float64)
    if array.shape != (size, size):
        raise ValueError(f"Expected a {size}x{size} matrix, got shape {array.shape}.")
    return array


class _SquareMatrix:
    """Behaviour shared by Matrix3 and Matrix4."""
    SIZE: int = 0

    def __init__(self, elements: Optional[npt.ArrayLike] = None) -> None:
        if elements is None:
            self.elements: npt.NDArray[np.float64] = np.eye(self.SIZE)
        else:
            self.elements = _as_square(elements, self.SIZE).copy()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.elements.tolist()})"

    def _new(self, elements: npt.ArrayLike):
        return self.__class__(elements)

    # --- in-place ---

    def set(self, *values: float):
        expected = self.SIZE * self.SIZE
        if len(values) != expected:
            raise ValueError(f"{self.__class__.__name__}.set expects {expected} values, got {len(values)}.")
        self.elements = np.array(values, dtype=np.float64).reshape(self.SIZE, self.SIZE)
        return self

    def identity(self):
        self.elements = np.eye(self.SIZE)
        return self

    def copy(self, other):
        self.elements = _as_square(other.elements, self.SIZE).copy()
        return self

    def from_array(self, array: Sequence[float], offset: int = 0):
        count = self.SIZE * self.SIZE
        return self.set(*array[offset:offset + count])

    # --- new values ---

    def clone(self):
        return self._new(self.elements)

    def multiply(self, other):
        """this * other"""
        return self._new(self.elements @ _as_square(other.elements, self.SIZE))

    def premultiply(self, other):
        """other * this"""
        return self._new(_as_square(other.elements, self.SIZE) @ self.elements)

    def multiply_scalar(self, scalar: float):
        return self._new(self.elements * scalar)

    def transpose(self):
        return self._new(self.elements.T)

    def invert(self):
        det = self.determinant()
        if abs(det) < SINGULAR_TOLERANCE:
            raise ValueError(f"{self.__class__.__name__} is singular and cannot be inverted.")
        return self._new(np.linalg.inv(self.elements))

    # --- scalars ---

    def determinant(self) -> float:
        return float(np.linalg.det(self.elements))

    def trace(self) -> float:
        return float(np.trace(self.elements))

    def equals(self, other) -> bool:
        other_elements = np.asarray(other.elements)
        return other_elements.shape == self.elements.shape and bool(np.array_equal(self.elements, other_elements))

    def to_array(self) -> List[float]:
        return self.elements.flatten().tolist()


class Matrix3(_SquareMatrix):
    """3x3 matrix; also used as a 2D homogeneous transform."""
    SIZE = 3

    def make_rotation(self, theta: float) -> Matrix3:
        """2D rotation by ``theta`` radians (counter-clockwise)."""
        c = math.cos(theta)
        s = math.sin(theta)
        return self.set(
            c, -s, 0.0,
            s, c, 0.0,
            0.0, 0.0, 1.0
        )

    def make_scale(self, x: float, y: float) -> Matrix3:
        return self.set(
            x, 0.0, 0.0,
            0.0, y, 0.0,
            0.0, 0.0, 1.0
        )

    def make_translation(self, x: float, y: float) -> Matrix3:
        return self.set(
            1.0, 0.0, x,
            0.0, 1.0, y,
            0.0, 0.0, 1.0
        )

    def set_from_matrix4(self, m: Matrix4) -> Matrix3:
        self.elements = _as_square(m.elements, 4)[:3, :3].copy()
        return self

    def get_normal_matrix(self, m: Matrix4) -> Matrix3:
        """Inverse transpose of the upper 3x3 block of ``m``."""
        return Matrix3.from_matrix4(m).invert().transpose()

    @staticmethod
    def from_matrix4(m: Matrix4) -> Matrix3:
        return Matrix3(_as_square(m.elements, 4)[:3, :3])


class Matrix4(_SquareMatrix):
    """4x4 affine/projective transform."""
    SIZE = 4

    def make_translation(self, x: float, y: float, z: float) -> Matrix4:
        return self.set(
            1.0, 0.0, 0.0, x,
            0.0, 1.0, 0.0, y,
            0.0, 0.0, 1.0, z,
            0.0, 0.0, 0.0, 1.0
        )

    def make_scale(self, x: float, y: float, z: float) -> Matrix4:
        return self.set(
            x, 0.0, 0.0, 0.0,
            0.0, y, 0.0, 0.0,
            0.0, 0.0, z, 0.0,
            0.0, 0.0, 0.0, 1.0
        )

    def make_rotation_axis(self, axis: Vector3, angle: float) -> Matrix4:
        """Rotation of ``angle`` radians around ``axis`` (assumed unit length)."""
        rotation = Rotation.from_rotvec(np.array([axis.x, axis.y, axis.z]) * angle)
        self._set_rotation_block(rotation)
        return self

    def make_rotation_from_quaternion(self, q: Quaternion) -> Matrix4:
        self._set_rotation_block(Rotation.from_quat([q.x, q.y, q.z, q.w]))
        return self

    def make_rotation_from_euler(self, euler: Euler) -> Matrix4:
        self._set_rotation_block(euler_rotation(euler))
        return self

    def set_position(self, v: Vector3) -> Matrix4:
        self.elements[:3, 3] = [v.x, v.y, v.z]
        return self

    def compose(self, position: Vector3, quaternion: Quaternion, scale: Vector3) -> Matrix4:
        """Overwrite with translation * rotation * scale."""
        rotation = Rotation.from_quat([quaternion.x, quaternion.y, quaternion.z, quaternion.w]).as_matrix()
        elements = np.eye(4)
        elements[:3, :3] = rotation * np.array([scale.x, scale.y, scale.z])
        elements[:3, 3] = [position.x, position.y, position.z]
        self.elements = elements
        return self

    def look_at(self, eye: Vector3, target: Vector3, up: Vector3) -> Matrix4:
        """Rotation that orients -Z from ``eye`` towards ``target``."""
        z_axis = eye.sub(target)
        if z_axis.length_sq() == 0.0:
            z_axis = Vector3(0.0, 0.0, 1.0)
        z_axis = z_axis.normalize()

        x_axis = Vector3(up.x, up.y, up.z).cross(z_axis)
        if x_axis.length_sq() == 0.0:
            # up and z are parallel; nudge z to get a usable x axis
            z_axis = Vector3(z_axis.x + 1e-4, z_axis.y, z_axis.z).normalize()
            x_axis = Vector3(up.x, up.y, up.z).cross(z_axis)
        x_axis = x_axis.normalize()
        y_axis = z_axis.cross(x_axis)

        self.elements[:3, 0] = x_axis.to_array()
        self.elements[:3, 1] = y_axis.to_array()
        self.elements[:3, 2] = z_axis.to_array()
        return self

    def _set_rotation_block(self, rotation: Rotation) -> None:
        elements = np.eye(4)
        elements[:3, :3] = rotation.as_matrix()
        self.elements = elements

    # --- new values ---

    def get_position(self) -> Vector3:
        x, y, z = self.elements[:3, 3]
        return Vector3(float(x), float(y), float(z))

    def get_scale(self) -> Vector3:
        sx, sy, sz = np.linalg.norm(self.elements[:3, :3], axis=0)
        return Vector3(float(sx), float(sy), float(sz))

    def get_max_scale_on_axis(self) -> float:
        return float(np.max(np.linalg.norm(self.elements[:3, :3], axis=0)))

    @staticmethod
    def from_quaternion(q: Quaternion) -> Matrix4:
        return Matrix4().make_rotation_from_quaternion(q)
