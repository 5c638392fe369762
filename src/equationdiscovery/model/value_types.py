"""
Value Type Catalog
==================
The closed set of algebraic value types the discovery engine understands.

Everything the engine needs to know about a type lives in one table
(``VALUE_TYPES``): component count, the "smaller" type used to test
under-specified parameters, the default shared-prefix length, and the two
baseline component vectors (variants A and B). Adding a catalog type means
adding one row here and one builder in the instance factory.

Classes:
    ValueTypeTag: Enum of catalog types. Values are the names written to the
        equation database.
    ValueTypeInfo: One row of the table.
    TypeCatalog: Binds tags to the concrete classes used to build and
        classify values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from numbers import Real
from typing import Any, Dict, Optional, Tuple

import numpy as np

from equationdiscovery.mathlib import Euler, Matrix3, Matrix4, Quaternion, Vector2, Vector3, Vector4


class ValueTypeTag(StrEnum):
    # Declaration order is the order parameter tuples are generated in
    VECTOR2 = "Vector2"
    VECTOR3 = "Vector3"
    VECTOR4 = "Vector4"
    QUATERNION = "Quaternion"
    EULER = "Euler"
    MATRIX3 = "Matrix3"
    MATRIX4 = "Matrix4"
    SCALAR = "number"
    BOOLEAN = "boolean"


class Variant(StrEnum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class ValueTypeInfo:
    component_count: int
    baseline_a: Tuple[Any, ...]
    baseline_b: Tuple[Any, ...]
    smaller: Optional[ValueTypeTag] = None
    default_shared_prefix: int = 0

    def __post_init__(self) -> None:
        if len(self.baseline_a) != self.component_count or len(self.baseline_b) != self.component_count:
            raise ValueError("Baseline length must match the component count.")


# Row-major 3x3 blocks; the 4x4 baselines pad them with an identity row and column
_MATRIX3_A = (1.0, 0.1, 0.2,
              0.1, 1.0, 0.3,
              0.2, 0.3, 1.0)
_MATRIX3_B = (1.0, 0.4, 0.5,
              0.4, 1.0, 0.6,
              0.5, 0.6, 1.0)


def _pad_to_matrix4(block: Tuple[float, ...]) -> Tuple[float, ...]:
    rows = [block[i:i + 3] + (0.0,) for i in range(0, 9, 3)]
    return tuple(v for row in rows for v in row) + (0.0, 0.0, 0.0, 1.0)


VALUE_TYPES: Dict[ValueTypeTag, ValueTypeInfo] = {
    ValueTypeTag.VECTOR2: ValueTypeInfo(
        component_count=2,
        baseline_a=(1.5, 2.7),
        baseline_b=(3.2, 4.8),
    ),
    ValueTypeTag.VECTOR3: ValueTypeInfo(
        component_count=3,
        baseline_a=(1.5, 2.7, 3.1),
        baseline_b=(4.2, 5.8, 6.3),
        smaller=ValueTypeTag.VECTOR2,
    ),
    ValueTypeTag.VECTOR4: ValueTypeInfo(
        component_count=4,
        baseline_a=(1.5, 2.7, 3.1, 4.2),
        baseline_b=(5.3, 6.4, 7.5, 8.6),
        smaller=ValueTypeTag.VECTOR3,
        default_shared_prefix=3,
    ),
    # Only w differs by default, so a method that reads x, y, z alone
    # (a Vector3 method in disguise) sees identical inputs
    ValueTypeTag.QUATERNION: ValueTypeInfo(
        component_count=4,
        baseline_a=(1.5, 2.7, 3.1, 0.9),
        baseline_b=(4.2, 5.8, 6.3, 0.2),
        smaller=ValueTypeTag.VECTOR3,
        default_shared_prefix=3,
    ),
    ValueTypeTag.EULER: ValueTypeInfo(
        component_count=3,
        baseline_a=(0.5, 1.2, 0.8),
        baseline_b=(1.1, 0.3, 1.7),
        smaller=ValueTypeTag.VECTOR2,
    ),
    ValueTypeTag.MATRIX3: ValueTypeInfo(
        component_count=9,
        baseline_a=_MATRIX3_A,
        baseline_b=_MATRIX3_B,
    ),
    ValueTypeTag.MATRIX4: ValueTypeInfo(
        component_count=16,
        baseline_a=_pad_to_matrix4(_MATRIX3_A),
        baseline_b=_pad_to_matrix4(_MATRIX3_B),
        smaller=ValueTypeTag.MATRIX3,
    ),
    ValueTypeTag.SCALAR: ValueTypeInfo(
        component_count=1,
        baseline_a=(5.7,),
        baseline_b=(8.3,),
    ),
    ValueTypeTag.BOOLEAN: ValueTypeInfo(
        component_count=1,
        baseline_a=(True,),
        baseline_b=(False,),
    ),
}


def component_count(tag: ValueTypeTag) -> int:
    return VALUE_TYPES[tag].component_count


def smaller_type(tag: ValueTypeTag) -> Optional[ValueTypeTag]:
    """The type with fewer components used to test under-specification, if any."""
    return VALUE_TYPES[tag].smaller


def default_shared_prefix(tag: ValueTypeTag) -> int:
    return VALUE_TYPES[tag].default_shared_prefix


DEFAULT_CLASSES: Dict[ValueTypeTag, type] = {
    ValueTypeTag.VECTOR2: Vector2,
    ValueTypeTag.VECTOR3: Vector3,
    ValueTypeTag.VECTOR4: Vector4,
    ValueTypeTag.QUATERNION: Quaternion,
    ValueTypeTag.EULER: Euler,
    ValueTypeTag.MATRIX3: Matrix3,
    ValueTypeTag.MATRIX4: Matrix4,
}


@dataclass(frozen=True)
class TypeCatalog:
    """
    Maps the structured catalog types to the classes that implement them.

    Scalars and booleans are Python's own ``float`` and ``bool`` and are not
    part of the mapping.
    """
    classes: Dict[ValueTypeTag, type] = field(default_factory=lambda: dict(DEFAULT_CLASSES))

    def class_for(self, tag: ValueTypeTag) -> type:
        try:
            return self.classes[tag]
        except KeyError:
            raise KeyError(f"No class bound to catalog type '{tag}'") from None

    def with_class(self, tag: ValueTypeTag, cls: type) -> TypeCatalog:
        """Copy of this catalog with ``tag`` bound to ``cls``."""
        if tag in (ValueTypeTag.SCALAR, ValueTypeTag.BOOLEAN):
            raise ValueError(f"'{tag}' is a built-in type and cannot be rebound.")
        classes = dict(self.classes)
        classes[tag] = cls
        return TypeCatalog(classes=classes)

    def classify(self, value: Any) -> Optional[ValueTypeTag]:
        """
        Determine the catalog type of a value by structural matching.

        Returns:
            The matching tag, or None for ``None`` and for values outside the catalog.
        """
        if value is None:
            return None
        # bool is a subclass of int, so it has to be checked first
        if isinstance(value, (bool, np.bool_)):
            return ValueTypeTag.BOOLEAN
        if isinstance(value, (Real, np.integer, np.floating)):
            return ValueTypeTag.SCALAR

        for tag, cls in self.classes.items():
            if type(value) is cls:
                return tag
        for tag, cls in self.classes.items():
            if isinstance(value, cls):
                return tag
        return None


DEFAULT_CATALOG = TypeCatalog()
