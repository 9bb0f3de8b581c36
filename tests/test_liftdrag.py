import math

import pytest

from rotorsim.liftdrag import LiftDragModel, LiftDragParams, LiftDragResult
from rotorsim.mathutil import Quaternion, Vector3

IDENTITY = Quaternion()


def test_default_params_from_source():
    params = LiftDragParams()
    assert params.cla == 1.0
    assert params.cda == 0.01
    assert params.rho == 1.2041
    assert params.alpha_stall == pytest.approx(0.5 * math.pi)
    assert params.control_joint_rad_to_cl == 4.0


def test_low_speed_produces_nothing():
    model = LiftDragModel()
    assert model.compute(Vector3(0.005, 0.0, 0.0), IDENTITY) is None


def test_directions_are_normalized():
    model = LiftDragModel(LiftDragParams(forward=Vector3(2.0, 0.0, 0.0), upward=Vector3(0.0, 0.0, 5.0)))
    assert tuple(model.forward) == pytest.approx((1.0, 0.0, 0.0), abs=1e-9)
    assert tuple(model.upward) == pytest.approx((0.0, 0.0, 1.0), abs=1e-9)


def test_zero_angle_of_attack_gives_no_force():
    result = LiftDragModel().compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    assert isinstance(result, LiftDragResult)
    assert result.alpha == pytest.approx(0.0)
    assert result.sweep == pytest.approx(0.0)
    assert tuple(result.force) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)


def test_lift_to_drag_ratio_follows_coefficients():
    model = LiftDragModel(LiftDragParams(alpha0=0.1))
    result = model.compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    assert result.alpha == pytest.approx(0.1)
    assert result.force.z > 0.0
    assert result.force.x < 0.0
    assert result.force.y == pytest.approx(0.0)
    assert result.force.z / -result.force.x == pytest.approx(1.0 / 0.01)


def test_negative_alpha_gives_negative_lift():
    pos = LiftDragModel(LiftDragParams(alpha0=0.1)).compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    neg = LiftDragModel(LiftDragParams(alpha0=-0.1)).compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    assert neg.force.z == pytest.approx(-pos.force.z)
    assert neg.force.x == pytest.approx(pos.force.x)


def test_torque_is_zero():
    result = LiftDragModel(LiftDragParams(alpha0=0.3, cma=0.5)).compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    assert tuple(result.torque) == pytest.approx((0.0, 0.0, 0.0), abs=1e-9)
    assert result.force.z > 0.0


def test_control_angle_increases_lift():
    vel = Vector3(10.0, 0.0, 0.0)
    plain = LiftDragModel(LiftDragParams(alpha0=0.1)).compute(vel, IDENTITY)
    deflected = LiftDragModel(LiftDragParams(alpha0=0.1)).compute(vel, IDENTITY, Vector3(), 0.05)
    assert deflected.force.z > plain.force.z
    assert deflected.force.x == pytest.approx(plain.force.x)


def test_stall_caps_lift_when_stall_slope_is_zero():
    vel = Vector3(10.0, 0.0, 0.0)
    at_stall = LiftDragModel(LiftDragParams(alpha_stall=0.2, alpha0=0.2)).compute(vel, IDENTITY)
    beyond = LiftDragModel(LiftDragParams(alpha_stall=0.2, alpha0=0.5)).compute(vel, IDENTITY)
    assert beyond.force.z == pytest.approx(at_stall.force.z)
    # Drag keeps growing past stall with the larger stall slope.
    assert beyond.force.x < at_stall.force.x


def test_alpha_is_folded_into_half_pi():
    model = LiftDragModel(LiftDragParams(alpha0=3.0))
    result = model.compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    assert abs(result.alpha) <= 0.5 * math.pi
    assert result.alpha == pytest.approx(3.0 - math.pi)
    assert model.alpha == result.alpha


def test_force_rotates_with_the_body():
    yaw = Quaternion.from_euler(0.0, 0.0, 0.7)
    params = LiftDragParams(alpha0=0.2)
    base = LiftDragModel(params).compute(Vector3(10.0, 0.0, 0.0), IDENTITY)
    turned = LiftDragModel(params).compute(yaw.rotate_vector(Vector3(10.0, 0.0, 0.0)), yaw)
    expected = yaw.rotate_vector(base.force)
    assert tuple(turned.force) == pytest.approx(tuple(expected), abs=1e-7)
    assert turned.alpha == pytest.approx(base.alpha)


def test_radial_symmetry_is_invariant_about_forward_axis():
    params = LiftDragParams(radial_symmetry=True)
    a = LiftDragModel(params).compute(Vector3(10.0, 0.0, 1.0), IDENTITY)
    b = LiftDragModel(params).compute(Vector3(10.0, 1.0, 0.0), IDENTITY)
    assert abs(a.alpha) == pytest.approx(abs(b.alpha))
    assert a.force.length() == pytest.approx(b.force.length())


def test_centre_of_pressure_is_corrected_and_moment_arm_uses_cog():
    model = LiftDragModel(LiftDragParams(cp=Vector3(float("nan"), 0.5, 0.0)))
    result = model.compute(Vector3(10.0, 0.0, 0.0), IDENTITY, Vector3(0.0, 0.25, 0.0))
    assert tuple(result.position) == pytest.approx((0.0, 0.5, 0.0), abs=1e-9)
    assert tuple(model.cp) == pytest.approx((0.0, 0.5, 0.0), abs=1e-9)
    second = model.compute(Vector3(10.0, 0.0, 0.0), IDENTITY, Vector3(0.0, 0.25, 0.0))
    assert tuple(second.moment_arm) == pytest.approx((0.0, 0.25, 0.0), abs=1e-9)


def test_force_is_finite():
    result = LiftDragModel(LiftDragParams(alpha0=0.4)).compute(Vector3(30.0, 2.0, -3.0), IDENTITY)
    assert all(math.isfinite(c) for c in result.force)
    assert abs(result.sweep) <= 0.5 * math.pi