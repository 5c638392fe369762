import numpy as np
import pytest

from equationdiscovery.mathlib import Euler, Matrix3, Matrix4, Quaternion, Vector2, Vector3, Vector4
from equationdiscovery.model.value_types import (
    DEFAULT_CATALOG,
    VALUE_TYPES,
    ValueTypeInfo,
    ValueTypeTag as T,
    component_count,
    default_shared_prefix,
    smaller_type,
)


def test_every_tag_has_a_row():
    assert set(VALUE_TYPES) == set(T)


def test_names_match_database_format():
    assert [t.value for t in T] == [
        "Vector2", "Vector3", "Vector4", "Quaternion", "Euler",
        "Matrix3", "Matrix4", "number", "boolean",
    ]


@pytest.mark.parametrize("tag, count", [
    (T.VECTOR2, 2), (T.VECTOR3, 3), (T.VECTOR4, 4), (T.QUATERNION, 4),
    (T.EULER, 3), (T.MATRIX3, 9), (T.MATRIX4, 16), (T.SCALAR, 1), (T.BOOLEAN, 1),
])
def test_component_counts(tag, count):
    assert component_count(tag) == count


@pytest.mark.parametrize("tag, smaller", [
    (T.VECTOR3, T.VECTOR2),
    (T.VECTOR4, T.VECTOR3),
    (T.QUATERNION, T.VECTOR3),
    (T.EULER, T.VECTOR2),
    (T.MATRIX4, T.MATRIX3),
    (T.VECTOR2, None),
    (T.MATRIX3, None),
    (T.SCALAR, None),
    (T.BOOLEAN, None),
])
def test_smaller_types(tag, smaller):
    assert smaller_type(tag) == smaller


def test_smaller_type_has_fewer_components():
    for tag in T:
        smaller = smaller_type(tag)
        if smaller is not None:
            assert component_count(smaller) < component_count(tag)


def test_default_shared_prefix():
    assert default_shared_prefix(T.QUATERNION) == 3
    assert default_shared_prefix(T.VECTOR4) == 3
    assert default_shared_prefix(T.VECTOR3) == 0


def test_baselines_differ_per_type():
    for tag, info in VALUE_TYPES.items():
        assert info.baseline_a != info.baseline_b, tag


def test_matrix4_baseline_embeds_matrix3():
    a3 = np.array(VALUE_TYPES[T.MATRIX3].baseline_a).reshape(3, 3)
    a4 = np.array(VALUE_TYPES[T.MATRIX4].baseline_a).reshape(4, 4)
    assert np.array_equal(a4[:3, :3], a3)
    assert list(a4[3]) == [0.0, 0.0, 0.0, 1.0]


def test_baseline_length_is_checked():
    with pytest.raises(ValueError):
        ValueTypeInfo(component_count=3, baseline_a=(1.0, 2.0), baseline_b=(1.0, 2.0, 3.0))


# ---------------------------------------------------------------
# Classification
# ---------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (Vector2(), T.VECTOR2),
    (Vector3(), T.VECTOR3),
    (Vector4(), T.VECTOR4),
    (Quaternion(), T.QUATERNION),
    (Euler(), T.EULER),
    (Matrix3(), T.MATRIX3),
    (Matrix4(), T.MATRIX4),
    (1.5, T.SCALAR),
    (3, T.SCALAR),
    (np.float64(0.25), T.SCALAR),
    (True, T.BOOLEAN),
    (np.bool_(False), T.BOOLEAN),
])
def test_classify(value, expected):
    assert DEFAULT_CATALOG.classify(value) == expected


@pytest.mark.parametrize("value", [None, [1.0, 2.0], "Vector3", np.zeros(3), {}])
def test_classify_outside_catalog(value):
    assert DEFAULT_CATALOG.classify(value) is None


def test_classify_subclass_falls_back_to_parent():
    class Tagged(Vector3):
        pass

    assert DEFAULT_CATALOG.classify(Tagged()) == T.VECTOR3


def test_with_class_rebinds_a_copy():
    class Other(Vector3):
        pass

    catalog = DEFAULT_CATALOG.with_class(T.VECTOR3, Other)
    assert catalog.class_for(T.VECTOR3) is Other
    assert DEFAULT_CATALOG.class_for(T.VECTOR3) is Vector3
    # a plain Vector3 is no longer part of the rebound catalog
    assert catalog.classify(Vector3()) is None


def test_builtin_types_cannot_be_rebound():
    with pytest.raises(ValueError):
        DEFAULT_CATALOG.with_class(T.SCALAR, float)


def test_class_for_builtin_raises():
    with pytest.raises(KeyError):
        DEFAULT_CATALOG.class_for(T.BOOLEAN)
