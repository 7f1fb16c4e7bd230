import math

import numpy as np
import pytest

from rigkit.core import EPSILON, Vec3
import rigkit.core.vec3 as vec3_module


def approx(values, tol=1e-9):
    return pytest.approx(values, abs=tol)


def test_constructor_fallbacks():
    assert Vec3() == Vec3(0.0, 0.0, 0.0)
    assert Vec3(2.0).to_tuple() == (2.0, 2.0, 2.0)
    # Omitted components fall back to x, not to y
    assert Vec3(1.0, 2.0).to_tuple() == (1.0, 2.0, 1.0)
    assert Vec3(1.0, 2.0, 3.0).to_tuple() == (1.0, 2.0, 3.0)

def test_add_sub_mul():
    assert Vec3(1, 2, 3).add(Vec3(4, 5, 6)) == Vec3(5, 7, 9)
    assert Vec3(4, 5, 6).sub(Vec3(1, 2, 3)) == Vec3(3, 3, 3)
    assert Vec3(1, 2, 3).mul(Vec3(4, 5, 6)) == Vec3(4, 10, 18)
    assert Vec3(1, 2, 3).scale(2.0) == Vec3(2, 4, 6)

def test_operators_match_methods():
    a = Vec3(1.0, -2.0, 0.5)
    b = Vec3(3.0, 1.0, 2.0)
    assert a + b == a.add(b)
    assert a - b == a.sub(b)
    assert a * 3.0 == a.scale(3.0)
    assert 3.0 * a == a.scale(3.0)
    assert -a == Vec3(-1.0, 2.0, -0.5)

def test_operations_return_new_vectors():
    a = Vec3(1.0, 2.0, 3.0)
    b = a.add(Vec3(1.0, 1.0, 1.0))
    assert a == Vec3(1.0, 2.0, 3.0)
    assert b is not a

def test_dot_length():
    v = Vec3(3.0, 4.0, 12.0)
    assert v.dot(Vec3(1.0, 0.0, 0.0)) == 3.0
    assert v.length_sqr() == 169.0
    assert v.length() == 13.0

def test_normalize_unit_length():
    for v in (Vec3(3.0, 4.0, 0.0), Vec3(-1.0, 2.0, 7.5), Vec3(0.01, 0.0, 0.0)):
        assert v.length_sqr() >= EPSILON
        assert v.normalize().length() == pytest.approx(1.0)

def test_normalize_degenerate_returns_unchanged():
    v = Vec3(0.001, 0.0, 0.001)
    assert v.length_sqr() < EPSILON
    n = v.normalize()
    assert n == v
    assert n is not v
    assert Vec3().normalize() == Vec3()

def test_normalize_threshold_is_inclusive(monkeypatch):
    # length_sqr of 0.25 sits exactly on the threshold
    monkeypatch.setattr(vec3_module, "EPSILON", 0.25)
    assert Vec3(0.5, 0.0, 0.0).normalize() == Vec3(1.0, 0.0, 0.0)
    monkeypatch.setattr(vec3_module, "EPSILON", 0.25 + 2.0**-54)
    assert Vec3(0.5, 0.0, 0.0).normalize() == Vec3(0.5, 0.0, 0.0)

def test_cross():
    assert Vec3.unit_x().cross(Vec3.unit_y()) == Vec3.unit_z()
    assert Vec3.unit_y().cross(Vec3.unit_x()) == Vec3(0.0, 0.0, -1.0)

def test_cross_orthogonal():
    pairs = [
        (Vec3(1.0, 2.0, 3.0), Vec3(-4.0, 0.5, 2.0)),
        (Vec3(0.3, -0.7, 0.2), Vec3(5.0, 5.0, -1.0)),
    ]
    for a, b in pairs:
        c = a.cross(b)
        assert c.dot(a) == pytest.approx(0.0, abs=1e-12)
        assert c.dot(b) == pytest.approx(0.0, abs=1e-12)

def test_clamp_length():
    assert Vec3(3.0, 0.0, 0.0).clamp_length(4.0, 5.0) == Vec3(4.0, 0.0, 0.0)
    assert Vec3(0.0, 10.0, 0.0).clamp_length(4.0, 5.0) == Vec3(0.0, 5.0, 0.0)
    assert Vec3(0.0, 0.0, 4.5).clamp_length(4.0, 5.0) == Vec3(0.0, 0.0, 4.5)

def test_clamp_length_zero_vector_gives_nan():
    c = Vec3().clamp_length(1.0, 2.0)
    assert all(math.isnan(v) for v in c.to_tuple())

def test_reflect():
    assert Vec3(1.0, -1.0, 0.0).reflect(Vec3(0.0, 1.0, 0.0)) == Vec3(1.0, 1.0, 0.0)
    assert Vec3(2.0, 3.0, -4.0).reflect(Vec3(0.0, 0.0, 1.0)) == Vec3(2.0, 3.0, 4.0)

def test_orthonormalize():
    a = Vec3(2.0, 0.0, 0.0)
    b = Vec3(1.0, 1.0, 0.0)
    assert a.orthonormalize(b) is True
    assert a.to_tuple() == approx((1.0, 0.0, 0.0))
    assert b.to_tuple() == approx((0.0, 1.0, 0.0))

def test_orthonormalize_general_basis():
    a = Vec3(1.0, 2.0, 3.0)
    b = Vec3(-2.0, 0.5, 1.0)
    assert a.orthonormalize(b)
    assert a.length() == pytest.approx(1.0)
    assert b.length() == pytest.approx(1.0)
    assert a.dot(b) == pytest.approx(0.0, abs=1e-12)

def test_orthonormalize_parallel_mutates_self_only():
    a = Vec3(2.0, 0.0, 0.0)
    b = Vec3(3.0, 0.0, 0.0)
    assert a.orthonormalize(b) is False
    # self is normalized even though the call failed
    assert a == Vec3(1.0, 0.0, 0.0)
    assert b == Vec3(3.0, 0.0, 0.0)

def test_from_barycentric():
    v1 = Vec3(0.0, 0.0, 0.0)
    v2 = Vec3(4.0, 0.0, 0.0)
    v3 = Vec3(0.0, 8.0, 0.0)
    out = Vec3()
    assert out.from_barycentric(v1, v2, v3, 0.25, 0.5) is out
    assert out == Vec3(1.0, 4.0, 0.0)

def test_transform_column_major():
    translate = [
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        1.0, 2.0, 3.0, 1.0,
    ]
    assert Vec3(1.0, 1.0, 1.0).transform(translate) == Vec3(2.0, 3.0, 4.0)
    # 90 degrees about Z: column 0 is the image of +X
    rot_z = [
        0.0, 1.0, 0.0, 0.0,
        -1.0, 0.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ]
    assert Vec3(1.0, 0.0, 0.0).transform(rot_z) == Vec3(0.0, 1.0, 0.0)

def test_component_helpers():
    v = Vec3(-1.25, 2.5, 3.75)
    assert v.abs() == Vec3(1.25, 2.5, 3.75)
    assert v.floor() == Vec3(-2.0, 2.0, 3.0)
    assert v.ceil() == Vec3(-1.0, 3.0, 4.0)
    assert v.frac() == Vec3(-0.25, 0.5, 0.75)
    assert v.min_component() == -1.25
    assert v.max_component() == 3.75
    assert v.get(1) == 2.5
    assert v.minimize(Vec3(0.0)) == Vec3(-1.25, 0.0, 0.0)
    assert v.maximize(Vec3(0.0)) == Vec3(0.0, 2.5, 3.75)
    assert v.clamp(Vec3(-1.0), Vec3(3.0)) == Vec3(-1.0, 2.5, 3.0)
    assert Vec3(0.0).lerp(Vec3(2.0, 4.0, 8.0), 0.5) == Vec3(1.0, 2.0, 4.0)

def test_copy_set_clone():
    src = Vec3(1.0, 2.0, 3.0)
    dest = Vec3()
    assert src.copy(dest) is dest
    assert dest.equals(src)
    clone = src.clone()
    assert clone == src and clone is not src
    assert dest.set(7.0) == Vec3(7.0, 7.0, 7.0)
    assert dest.set(1.0, 2.0) == Vec3(1.0, 2.0, 1.0)

def test_array_round_trip():
    v = Vec3(0.1, -2.0, math.pi)
    assert v.to_array() == [0.1, -2.0, math.pi]
    array = [0.0] * 5
    v.to_array(array, 2)
    assert array == [0.0, 0.0, 0.1, -2.0, math.pi]
    assert Vec3().from_array(array, 2) == v

def test_buffer_round_trip_f8_is_exact():
    v = Vec3(0.1, -2.0, math.pi)
    buf = bytearray(32)
    end = v.to_buffer(buf, 'f8', 8)
    assert end == 32
    out = Vec3()
    assert out.from_buffer(buf, 'f8', 8) == 32
    assert out == v

def test_buffer_f4_and_byte_order():
    v = Vec3(1.5, -2.25, 0.125)
    little = bytearray(12)
    big = bytearray(12)
    v.to_buffer(little, '<f4')
    v.to_buffer(big, '>f4')
    assert np.frombuffer(little, dtype='<f4').tolist() == [1.5, -2.25, 0.125]
    assert np.frombuffer(big, dtype='>f4').tolist() == [1.5, -2.25, 0.125]
    assert little != big
    out = Vec3()
    out.from_buffer(big, '>f4')
    assert out == v

def test_to_numpy_defaults_to_float32():
    arr = Vec3(1.0, 2.0, 3.0).to_numpy()
    assert arr.dtype == np.float32
    assert arr.tolist() == [1.0, 2.0, 3.0]
