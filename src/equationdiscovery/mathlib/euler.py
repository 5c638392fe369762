"""
Euler angles (radians) with an intrinsic rotation order such as ``"XYZ"``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, TYPE_CHECKING

import numpy as np
from scipy.spatial.transform import Rotation

if TYPE_CHECKING:
    from equationdiscovery.mathlib.matrix import Matrix4
    from equationdiscovery.mathlib.quaternion import Quaternion
    from equationdiscovery.mathlib.vector import Vector3

VALID_ORDERS = ("XYZ", "YXZ", "ZXY", "ZYX", "YZX", "XZY")
DEFAULT_ORDER = "XYZ"


def _check_order(order: str) -> str:
    if order not in VALID_ORDERS:
        raise ValueError(f"Unsupported rotation order '{order}'. Expected one of {VALID_ORDERS}.")
    return order


def euler_rotation(euler: Euler) -> Rotation:
    """
    scipy Rotation for ``euler``.

    ``x``, ``y`` and ``z`` are always the angles about the X, Y and Z axes;
    ``order`` only decides the sequence they are applied in.
    """
    return Rotation.from_euler(euler.order, [getattr(euler, axis.lower()) for axis in euler.order])


@dataclass
class Euler:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    order: str = DEFAULT_ORDER

    def __post_init__(self) -> None:
        _check_order(self.order)

    # --- in-place ---

    def set(self, x: float, y: float, z: float, order: str = DEFAULT_ORDER) -> Euler:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.order = _check_order(order)
        return self

    def set_from_quaternion(self, q: Quaternion) -> Euler:
        return self._set_rotation(Rotation.from_quat([q.x, q.y, q.z, q.w]))

    def set_from_rotation_matrix(self, m: Matrix4) -> Euler:
        """Use the upper 3x3 block of ``m``, assumed to be a pure rotation."""
        rotation = np.asarray(m.elements, dtype=np.float64)[:3, :3]
        return self._set_rotation(Rotation.from_matrix(rotation))

    def set_from_vector3(self, v: Vector3) -> Euler:
        return self.set(v.x, v.y, v.z, order=self.order)

    def _set_rotation(self, rotation: Rotation) -> Euler:
        by_axis = dict(zip(self.order, rotation.as_euler(self.order)))
        return self.set(by_axis["X"], by_axis["Y"], by_axis["Z"], order=self.order)

    def copy(self, other: Euler) -> Euler:
        return self.set(other.x, other.y, other.z, order=other.order)

    def from_array(self, array: Sequence[float], offset: int = 0) -> Euler:
        return self.set(array[offset], array[offset + 1], array[offset + 2], order=self.order)

    # --- new values ---

    def clone(self) -> Euler:
        return Euler(self.x, self.y, self.z, self.order)

    def reorder(self, new_order: str) -> Euler:
        """Same rotation expressed with a different axis order."""
        _check_order(new_order)
        return Euler(order=new_order)._set_rotation(euler_rotation(self))

    def to_vector3(self) -> Vector3:
        from equationdiscovery.mathlib.vector import Vector3
        return Vector3(self.x, self.y, self.z)

    def equals(self, other: Euler) -> bool:
        return (self.x == other.x and self.y == other.y and self.z == other.z
                and self.order == other.order)

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z]

    @staticmethod
    def from_quaternion(q: Quaternion, order: str = DEFAULT_ORDER) -> Euler:
        return Euler(order=order).set_from_quaternion(q)
