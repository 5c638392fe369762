import math

import numpy as np
import pytest

from equationdiscovery.mathlib import Euler, Matrix3, Matrix4, Quaternion, Vector2, Vector3, Vector4


# ---------------------------------------------------------------
# Vectors
# ---------------------------------------------------------------

def test_vector3_arithmetic():
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(4.0, 5.0, 6.0)
    assert a.add(b) == Vector3(5.0, 7.0, 9.0)
    assert b.sub(a) == Vector3(3.0, 3.0, 3.0)
    assert a.dot(b) == 32.0
    assert a.cross(b) == Vector3(-3.0, 6.0, -3.0)
    # pure operations leave the operands untouched
    assert a == Vector3(1.0, 2.0, 3.0)


def test_vector3_in_place_setters_return_self():
    v = Vector3()
    assert v.set(1.0, 2.0, 3.0) is v
    assert v.set_scalar(2.0) is v
    assert v == Vector3(2.0, 2.0, 2.0)


def test_vector_lengths():
    assert Vector2(3.0, 4.0).length() == 5.0
    assert Vector3(1.0, -2.0, 2.0).manhattan_length() == 5.0
    assert Vector4(1.0, 1.0, 1.0, 1.0).length() == 2.0
    assert Vector3(3.0, 0.0, 4.0).normalize().length() == pytest.approx(1.0)


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        Vector3(1.0, 2.0, 3.0).divide_scalar(0.0)


def test_vector2_angle_and_from_angle():
    assert Vector2(0.0, 1.0).angle() == pytest.approx(math.pi / 2)
    assert Vector2(0.0, -1.0).angle() == pytest.approx(3 * math.pi / 2)
    v = Vector2.from_angle(math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(1.0)


def test_angle_to():
    assert Vector3(1.0, 0.0, 0.0).angle_to(Vector3(0.0, 1.0, 0.0)) == pytest.approx(math.pi / 2)


def test_reflect():
    reflected = Vector3(1.0, -1.0, 0.0).reflect(Vector3(0.0, 1.0, 0.0))
    assert reflected.to_array() == pytest.approx([1.0, 1.0, 0.0])


def test_spherical_coords():
    v = Vector3.from_spherical_coords(2.0, math.pi / 2, 0.0)
    assert v.to_array() == pytest.approx([0.0, 0.0, 2.0], abs=1e-12)


# ---------------------------------------------------------------
# Rotations
# ---------------------------------------------------------------

def test_axis_angle_rotation():
    q = Quaternion.from_axis_angle(Vector3(0.0, 0.0, 1.0), math.pi / 2)
    rotated = Vector3(1.0, 0.0, 0.0).apply_quaternion(q)
    assert rotated.to_array() == pytest.approx([0.0, 1.0, 0.0], abs=1e-12)


def test_euler_quaternion_matrix_agree():
    euler = Euler(0.3, -0.4, 1.1)
    v = Vector3(0.5, 1.5, -2.0)

    by_euler = v.apply_euler(euler)
    by_quaternion = v.apply_quaternion(Quaternion.from_euler(euler))
    by_matrix = v.apply_matrix4(Matrix4().make_rotation_from_euler(euler))

    assert by_euler.to_array() == pytest.approx(by_quaternion.to_array())
    assert by_euler.to_array() == pytest.approx(by_matrix.to_array())


def test_euler_round_trip_through_quaternion():
    euler = Euler(0.2, 0.5, -0.7, "ZYX")
    restored = Euler.from_quaternion(Quaternion.from_euler(euler), order="ZYX")
    assert restored.to_array() == pytest.approx(euler.to_array())
    assert restored.order == "ZYX"


def test_reorder_keeps_the_rotation():
    euler = Euler(0.2, 0.5, -0.7)
    reordered = euler.reorder("YXZ")
    assert reordered.order == "YXZ"
    v = Vector3(1.0, 2.0, 3.0)
    assert v.apply_euler(reordered).to_array() == pytest.approx(v.apply_euler(euler).to_array())


def test_euler_angles_belong_to_their_axis():
    # a single angle about X is the same rotation whatever the order
    v = Vector3(0.0, 1.0, 0.0)
    expected = v.apply_euler(Euler(0.3, 0.0, 0.0, "XYZ")).to_array()
    for order in ("ZYX", "YZX", "ZXY"):
        assert v.apply_euler(Euler(0.3, 0.0, 0.0, order)).to_array() == pytest.approx(expected)


def test_invalid_euler_order():
    with pytest.raises(ValueError):
        Euler(0.0, 0.0, 0.0, "XXY")
    with pytest.raises(ValueError):
        Euler().reorder("abc")


def test_quaternion_inverse():
    q = Quaternion(0.1, 0.2, 0.3, 0.9)
    identity = q.multiply(q.invert())
    assert identity.to_array() == pytest.approx([0.0, 0.0, 0.0, 1.0])


def test_zero_quaternion_cannot_be_inverted():
    with pytest.raises(ValueError):
        Quaternion(0.0, 0.0, 0.0, 0.0).invert()


def test_slerp_end_points():
    a = Quaternion()
    b = Quaternion.from_axis_angle(Vector3(0.0, 1.0, 0.0), 1.0)
    assert a.slerp(b, 0.0).to_array() == pytest.approx(a.to_array())
    assert a.slerp(b, 1.0).to_array() == pytest.approx(b.to_array())
    assert a.angle_to(a.slerp(b, 0.5)) == pytest.approx(0.5)


def test_from_unit_vectors():
    q = Quaternion.from_unit_vectors(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0))
    rotated = Vector3(1.0, 0.0, 0.0).apply_quaternion(q)
    assert rotated.to_array() == pytest.approx([0.0, 0.0, 1.0], abs=1e-12)


# ---------------------------------------------------------------
# Matrices
# ---------------------------------------------------------------

def test_matrix_set_is_row_major():
    m = Matrix3().set(1, 2, 3, 4, 5, 6, 7, 8, 10)
    assert m.elements[0, 2] == 3.0
    assert m.elements[2, 0] == 7.0
    assert m.determinant() == pytest.approx(-3.0)


def test_matrix_set_wrong_count():
    with pytest.raises(ValueError):
        Matrix3().set(1, 2, 3)


def test_matrix_inverse():
    m = Matrix4().compose(Vector3(1.0, 2.0, 3.0), Quaternion.from_axis_angle(Vector3(0.0, 1.0, 0.0), 0.7),
                          Vector3(2.0, 2.0, 2.0))
    product = m.multiply(m.invert())
    assert np.allclose(product.elements, np.eye(4))


def test_singular_matrix():
    with pytest.raises(ValueError):
        Matrix3().set(1, 2, 3, 2, 4, 6, 0, 0, 1).invert()


def test_matrix_shape_is_checked():
    with pytest.raises(ValueError):
        Matrix3(np.eye(4))
    with pytest.raises(ValueError):
        Matrix3.from_matrix4(Matrix3())
    with pytest.raises(ValueError):
        Matrix4().multiply(Matrix3())


def test_matrix3_from_matrix4():
    m4 = Matrix4().make_translation(1.0, 2.0, 3.0).multiply(Matrix4().make_scale(2.0, 3.0, 4.0))
    m3 = Matrix3.from_matrix4(m4)
    assert np.allclose(m3.elements, np.diag([2.0, 3.0, 4.0]))


def test_compose_decomposes():
    m = Matrix4().compose(Vector3(1.0, 2.0, 3.0), Quaternion(), Vector3(2.0, 3.0, 4.0))
    assert m.get_position() == Vector3(1.0, 2.0, 3.0)
    assert m.get_scale().to_array() == pytest.approx([2.0, 3.0, 4.0])
    assert m.get_max_scale_on_axis() == pytest.approx(4.0)


def test_translation_moves_points():
    point = Vector3(1.0, 1.0, 1.0).apply_matrix4(Matrix4().make_translation(1.0, 2.0, 3.0))
    assert point == Vector3(2.0, 3.0, 4.0)


def test_matrix_and_quaternion_agree():
    q = Quaternion.from_axis_angle(Vector3(1.0, 0.0, 0.0), 0.9)
    m = Matrix4.from_quaternion(q)
    back = Quaternion().set_from_rotation_matrix(m)
    assert back.angle_to(q) == pytest.approx(0.0, abs=1e-6)


def test_make_methods_return_self():
    m = Matrix4()
    assert m.make_rotation_from_quaternion(Quaternion()) is m
    assert m.identity() is m


def test_transpose_and_trace():
    m = Matrix3().set(1, 2, 3, 4, 5, 6, 7, 8, 9)
    assert m.transpose().elements[0, 1] == 4.0
    assert m.trace() == 15.0
