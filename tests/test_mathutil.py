import math

import pytest

from rotorsim.mathutil import (
    Q_BR,
    Q_NG,
    FirstOrderFilter,
    Quaternion,
    Vector3,
    constrain,
    degrees_360,
    quaternion_from_small_angle,
)


def test_cross_of_unit_axes():
    assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)


def test_dot_of_orthogonal_vectors_is_zero():
    assert Vector3(1, 2, 0).dot(Vector3(-2, 1, 5)) == 0


def test_normalized_has_unit_length():
    v = Vector3(3, -4, 12).normalized()
    assert math.isclose(v.length(), 1.0)


def test_normalized_zero_vector_unchanged():
    assert Vector3().normalized() == Vector3(0, 0, 0)


def test_corrected_replaces_non_finite():
    v = Vector3(math.nan, math.inf, 2.5).corrected()
    assert v == Vector3(0.0, 0.0, 2.5)


def test_vector_arithmetic():
    a = Vector3(1, 2, 3)
    assert a + a - a == a
    assert 2 * a == a * 2
    assert -a + a == Vector3(0, 0, 0)


@pytest.mark.parametrize(
    "val, lo, hi, expected",
    [(5, 0, 10, 5), (-1, 0, 10, 0), (11, 0, 10, 10)],
)
def test_constrain(val, lo, hi, expected):
    assert constrain(val, lo, hi) == expected


@pytest.mark.parametrize("deg", [-720.5, -90.0, -1e-20, 0.0, 359.9, 360.0, 1000.0])
def test_degrees_360_range(deg):
    result = degrees_360(deg)
    assert 0.0 <= result < 360.0
    remainder = (result - deg) % 360.0
    assert min(remainder, 360.0 - remainder) < 1e-6


def test_euler_round_trip():
    q = Quaternion.from_euler(0.3, -0.2, 1.1)
    roll, pitch, yaw = q.euler()
    assert math.isclose(roll, 0.3)
    assert math.isclose(pitch, -0.2)
    assert math.isclose(yaw, 1.1)


def test_yaw_rotation_turns_x_to_y():
    q = Quaternion.from_euler(0, 0, math.pi / 2)
    rotated = q.rotate_vector(Vector3(1, 0, 0))
    assert tuple(rotated) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)


def test_rotate_preserves_length_and_inverse_undoes():
    q = Quaternion.from_euler(0.7, 0.4, -2.0)
    v = Vector3(1.5, -2.0, 0.25)
    r = q.rotate_vector(v)
    assert math.isclose(r.length(), v.length())
    back = q.inverse().rotate_vector(r)
    assert tuple(back) == pytest.approx((1.5, -2.0, 0.25), abs=1e-9)


def test_frd_flu_rotation_flips_y_and_z():
    rotated = Q_BR.rotate_vector(Vector3(1, 1, 1))
    assert tuple(rotated) == pytest.approx((1.0, -1.0, -1.0), abs=1e-9)


def test_enu_ned_rotation_swaps_axes():
    east = Q_NG.rotate_vector(Vector3(1, 0, 0))
    assert tuple(east) == pytest.approx((0.0, 1.0, 0.0), abs=1e-4)
    up = Q_NG.rotate_vector(Vector3(0, 0, 1))
    assert tuple(up) == pytest.approx((0.0, 0.0, -1.0), abs=1e-4)


def test_zero_quaternion_inverse_is_identity():
    assert Quaternion(0, 0, 0, 0).inverse() == Quaternion(1, 0, 0, 0)


def test_filter_constant_input_keeps_state():
    f = FirstOrderFilter(0.1, 0.2, 4.0)
    assert f.update(4.0, 0.01) == 4.0


def test_filter_output_between_state_and_input():
    f = FirstOrderFilter(0.1, 0.2, 0.0)
    out = f.update(10.0, 0.01)
    assert 0.0 < out < 10.0
    assert f.state == out


def test_filter_rises_faster_than_falls():
    up = FirstOrderFilter(0.01, 1.0, 0.0)
    rise = up.update(1.0, 0.05)
    down = FirstOrderFilter(0.01, 1.0, 1.0)
    fall = 1.0 - down.update(0.0, 0.05)
    assert rise > fall


def test_filter_converges_for_long_step():
    f = FirstOrderFilter(0.1, 0.1, 0.0)
    assert math.isclose(f.update(3.0, 100.0), 3.0)


def test_small_angle_zero_is_identity():
    assert quaternion_from_small_angle(Vector3()) == Quaternion(1, 0, 0, 0)


@pytest.mark.parametrize("theta", [Vector3(0.1, -0.2, 0.05), Vector3(3.0, 2.0, -1.0)])
def test_small_angle_is_unit_and_parallel(theta):
    q = quaternion_from_small_angle(theta)
    norm = math.sqrt(q.w ** 2 + q.x ** 2 + q.y ** 2 + q.z ** 2)
    assert math.isclose(norm, 1.0)
    assert q.w > 0
    vec = Vector3(q.x, q.y, q.z)
    assert math.isclose(vec.cross(theta).length(), 0.0, abs_tol=1e-12)
    assert vec.dot(theta) > 0


def test_small_angle_accepts_sequence():
    assert quaternion_from_small_angle([0.1, 0.2, 0.3]) == quaternion_from_small_angle(
        Vector3(0.1, 0.2, 0.3)
    )


def test_small_angle_wrong_size():
    with pytest.raises(ValueError):
        quaternion_from_small_angle([0.1, 0.2])