"""Lift and drag on an aerodynamic surface such as a wing or control surface."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from rotorsim.mathutil import Quaternion, Vector3, constrain

# Below this speed at the centre of pressure no forces are produced.
_MIN_SPEED = 0.01


@dataclass
class LiftDragParams:
    """Aerodynamic coefficients and geometry of a lifting surface.

    Coefficients are slopes per radian of angle of attack. Directions and the
    centre of pressure are given in the link frame.
    """

    cla: float = 1.0
    cda: float = 0.01
    cma: float = 0.01
    alpha_stall: float = 0.5 * math.pi
    cla_stall: float = 0.0
    cda_stall: float = 1.0
    cma_stall: float = 0.0
    rho: float = 1.2041
    radial_symmetry: bool = False
    area: float = 1.0
    alpha0: float = 0.0
    cp: Vector3 = field(default_factory=Vector3)
    forward: Vector3 = field(default_factory=lambda: Vector3(1.0, 0.0, 0.0))
    upward: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 1.0))
    control_joint_rad_to_cl: float = 4.0


@dataclass(frozen=True)
class LiftDragResult:
    """Force and torque in the world frame, applied at position in the link frame."""

    force: Vector3
    torque: Vector3
    position: Vector3
    alpha: float
    sweep: float
    moment_arm: Vector3


def _wrap_half_pi(angle: float) -> float:
    """Fold an angle into [-pi/2, pi/2] by steps of pi."""
    while abs(angle) > 0.5 * math.pi:
        angle = angle - math.pi if angle > 0 else angle + math.pi
    return angle


class LiftDragModel:
    """Computes lift, drag and moment from the surface's inflow velocity."""

    def __init__(self, params: Optional[LiftDragParams] = None):
        self.params = params if params is not None else LiftDragParams()
        self.cp = self.params.cp
        self.forward = self.params.forward.normalized()
        self.upward = self.params.upward.normalized()
        self.alpha = 0.0
        self.sweep = 0.0

    def _coefficient(self, slope: float, stall_slope: float, cos_sweep: float) -> float:
        p = self.params
        if self.alpha > p.alpha_stall:
            return (slope * p.alpha_stall + stall_slope * (self.alpha - p.alpha_stall)) * cos_sweep
        if self.alpha < -p.alpha_stall:
            return (-slope * p.alpha_stall + stall_slope * (self.alpha + p.alpha_stall)) * cos_sweep
        return slope * self.alpha * cos_sweep

    def _stalled(self) -> int:
        if self.alpha > self.params.alpha_stall:
            return 1
        if self.alpha < -self.params.alpha_stall:
            return -1
        return 0

    def compute(
        self,
        velocity: Vector3,
        rotation: Quaternion,
        cog: Vector3 = Vector3(),
        control_angle: Optional[float] = None,
    ) -> Optional[LiftDragResult]:
        """Forces for the world-frame velocity at the centre of pressure.

        rotation is the link's world orientation, cog its centre of gravity in
        the link frame and control_angle the control joint position in radians,
        or None when there is no control joint. Returns None when the speed is
        too low to produce forces.
        """
        p = self.params
        vel_i = velocity.normalized()
        if velocity.length() <= _MIN_SPEED:
            return None

        forward_i = rotation.rotate_vector(self.forward)
        if p.radial_symmetry:
            upward_i = forward_i.cross(forward_i.cross(vel_i)).normalized()
        else:
            upward_i = rotation.rotate_vector(self.upward)

        spanwise_i = forward_i.cross(upward_i).normalized()

        sin_sweep = constrain(spanwise_i.dot(vel_i), -1.0, 1.0)
        cos_sweep = 1.0 - sin_sweep * sin_sweep
        self.sweep = _wrap_half_pi(math.asin(sin_sweep))

        vel_in_ld_plane = velocity - velocity.dot(spanwise_i) * vel_i
        drag_direction = (-vel_in_ld_plane).normalized()
        lift_i = spanwise_i.cross(vel_in_ld_plane).normalized()
        moment_direction = spanwise_i

        cos_alpha = constrain(lift_i.dot(upward_i), -1.0, 1.0)
        if lift_i.dot(forward_i) >= 0.0:
            self.alpha = p.alpha0 + math.acos(cos_alpha)
        else:
            self.alpha = p.alpha0 - math.acos(cos_alpha)
        self.alpha = _wrap_half_pi(self.alpha)

        speed = vel_in_ld_plane.length()
        q = 0.5 * p.rho * speed * speed
        stalled = self._stalled()

        cl = self._coefficient(p.cla, p.cla_stall, cos_sweep)
        if stalled > 0:
            cl = max(0.0, cl)
        elif stalled < 0:
            cl = min(0.0, cl)
        if control_angle is not None:
            cl += p.control_joint_rad_to_cl * control_angle
        lift = cl * q * p.area * lift_i

        cd = abs(self._coefficient(p.cda, p.cda_stall, cos_sweep))
        drag = cd * q * p.area * drag_direction

        # The moment coefficient is not modelled yet and is held at zero.
        cm = 0.0
        moment = cm * q * p.area * moment_direction

        moment_arm = rotation.rotate_vector(self.cp - cog)

        force = (lift + drag).corrected()
        self.cp = self.cp.corrected()
        torque = moment.corrected()

        return LiftDragResult(
            force=force,
            torque=torque,
            position=self.cp,
            alpha=self.alpha,
            sweep=self.sweep,
            moment_arm=moment_arm,
        )