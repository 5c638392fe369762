"""
Result Comparison
Approximate equality between two operation results, by catalog type.
"""
from __future__ import annotations

import math
from typing import Any

import numpy as np

from equationdiscovery.config import EQUALITY_TOLERANCE
from equationdiscovery.model.value_types import DEFAULT_CATALOG, TypeCatalog, ValueTypeTag

_VECTOR_COMPONENTS = {
    ValueTypeTag.VECTOR2: ("x", "y"),
    ValueTypeTag.VECTOR3: ("x", "y", "z"),
    ValueTypeTag.VECTOR4: ("x", "y", "z", "w"),
}
_ROTATION_COMPONENTS = {
    ValueTypeTag.QUATERNION: ("x", "y", "z", "w"),
    ValueTypeTag.EULER: ("x", "y", "z"),
}


def results_equal(
    a: Any,
    b: Any,
    catalog: TypeCatalog = DEFAULT_CATALOG,
    tolerance: float = EQUALITY_TOLERANCE
) -> bool:
    """
    True if two results are the same value within ``tolerance``.

    Vectors are compared by Euclidean distance, quaternions and Euler angles
    component by component, matrices element by element. Values of different
    catalog types are never equal; values outside the catalog are equal only
    if they are the same object.
    """
    type_a = catalog.classify(a)
    type_b = catalog.classify(b)

    if type_a is None or type_b is None:
        return a is b
    if type_a != type_b:
        return False

    if type_a == ValueTypeTag.BOOLEAN:
        return bool(a) == bool(b)

    if type_a == ValueTypeTag.SCALAR:
        return abs(float(a) - float(b)) < tolerance

    if type_a in _VECTOR_COMPONENTS:
        distance = math.sqrt(sum(
            (getattr(a, c) - getattr(b, c)) ** 2 for c in _VECTOR_COMPONENTS[type_a]
        ))
        return distance < tolerance

    if type_a in _ROTATION_COMPONENTS:
        if type_a == ValueTypeTag.EULER and a.order != b.order:
            return False
        return all(
            abs(getattr(a, c) - getattr(b, c)) < tolerance for c in _ROTATION_COMPONENTS[type_a]
        )

    # Matrix3 / Matrix4
    elements_a = np.asarray(a.elements, dtype=np.float64)
    elements_b = np.asarray(b.elements, dtype=np.float64)
    if elements_a.shape != elements_b.shape:
        return False
    return bool(np.all(np.abs(elements_a - elements_b) <= tolerance))
