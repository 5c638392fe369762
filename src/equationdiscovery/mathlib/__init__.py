"""
The MATH LIBRARY is the 3D algebra toolkit whose operations get discovered.
It has NO knowledge of the discovery engine.
"""
from equationdiscovery.mathlib.vector import Vector2, Vector3, Vector4
from equationdiscovery.mathlib.quaternion import Quaternion
from equationdiscovery.mathlib.euler import Euler
from equationdiscovery.mathlib.matrix import Matrix3, Matrix4

__all__ = ["Vector2", "Vector3", "Vector4", "Quaternion", "Euler", "Matrix3", "Matrix4"]
