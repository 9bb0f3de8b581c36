"""Underwater vehicle dynamics: thruster forces, hydrodynamic damping and added-mass Coriolis terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from rotorsim.mathutil import Vector3

ROTOR_COUNT = 4
DEFAULT_COMMAND_SUB_TOPIC = "/gazebo/command/motor_speed"

_Matrix = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]


def _matvec(m: _Matrix, v: Vector3) -> Vector3:
    return Vector3(*(row[0] * v.x + row[1] * v.y + row[2] * v.z for row in m))


@dataclass
class UUVParams:
    """Thruster constants and hydrodynamic coefficients of the vehicle.

    The added-mass and damping vectors hold the coefficients for the x, y and
    z axes (linear) or roll, pitch and yaw (angular).
    """

    namespace: str = ""
    link_name: str = ""
    command_sub_topic: str = DEFAULT_COMMAND_SUB_TOPIC
    motor_force_constant: float = 0.0
    motor_torque_constant: float = 0.0
    added_mass_linear: Vector3 = field(default_factory=Vector3)
    added_mass_angular: Vector3 = field(default_factory=Vector3)
    damping_linear: Vector3 = field(default_factory=Vector3)
    damping_angular: Vector3 = field(default_factory=Vector3)


@dataclass(frozen=True)
class UUVForces:
    """Forces and torques of one step, all in body-relative frames.

    rotor_forces[i] acts on thruster link i + 1 (link 0 is the IMU);
    rotor_torques[i] acts on the main body. body_force and body_torque are the
    combined damping and Coriolis terms on the main body.
    """

    rotor_forces: tuple[Vector3, ...]
    rotor_torques: tuple[Vector3, ...]
    damping_force: Vector3
    damping_torque: Vector3
    coriolis_force: Vector3
    coriolis_torque: Vector3
    time_delta: float

    @property
    def body_force(self) -> Vector3:
        return self.damping_force + self.coriolis_force

    @property
    def body_torque(self) -> Vector3:
        return self.damping_torque + self.coriolis_torque


class UUVModel:
    """Four-thruster underwater vehicle model."""

    def __init__(self, params: UUVParams | None = None):
        self.params = params if params is not None else UUVParams()
        self.command: list[float] = [0.0] * ROTOR_COUNT
        self.last_time = 0.0
        self.time = 0.0

    def set_command(self, motor_speeds: Sequence[float]) -> list[float]:
        """Store the first four entries of a motor speed command."""
        if len(motor_speeds) < ROTOR_COUNT:
            raise ValueError(
                f"command needs at least {ROTOR_COUNT} motor speeds, got {len(motor_speeds)}"
            )
        self.command = [float(s) for s in motor_speeds[:ROTOR_COUNT]]
        return list(self.command)

    def update(self, sim_time: float, linear_velocity: Vector3, angular_velocity: Vector3) -> UUVForces:
        """Advance to sim_time and compute forces for the body-relative velocities."""
        p = self.params
        time_delta = sim_time - self.last_time
        self.last_time = sim_time
        self.time += time_delta

        rotor_forces = []
        rotor_torques = []
        for i, c in enumerate(self.command):
            thrust = c * abs(c)
            rotor_forces.append(Vector3(p.motor_force_constant * thrust, 0.0, 0.0))
            # Odd-numbered rotors (1, 3) spin CCW, even-numbered (2, 4) CW.
            direction = 1 if (i + 1) % 2 == 0 else -1
            rotor_torques.append(Vector3(direction * p.motor_torque_constant * thrust, 0.0, 0.0))

        u, v, w = linear_velocity
        pr, q, r = angular_velocity
        x_udot, y_vdot, z_wdot = p.added_mass_linear
        k_pdot, m_qdot, n_rdot = p.added_mass_angular
        x_u, y_v, z_w = p.damping_linear
        k_p, m_q, n_r = p.damping_angular

        damping_force = Vector3(-x_u * u, -y_v * v, -z_w * w)
        damping_torque = Vector3(-k_p * pr, -m_q * q, -n_r * r)

        c_force: _Matrix = (
            (0.0, z_wdot * w, -y_vdot * v),
            (-z_wdot * w, 0.0, x_udot * u),
            (y_vdot * v, -x_udot * u, 0.0),
        )
        c_torque: _Matrix = (
            (0.0, n_rdot * r, -m_qdot * q),
            (-n_rdot * r, 0.0, k_pdot * pr),
            (m_qdot * q, -k_pdot * pr, 0.0),
        )
        coriolis_force = _matvec(c_force, angular_velocity)
        coriolis_torque = _matvec(c_force, linear_velocity) + _matvec(c_torque, angular_velocity)

        return UUVForces(
            rotor_forces=tuple(rotor_forces),
            rotor_torques=tuple(rotor_torques),
            damping_force=damping_force,
            damping_torque=damping_torque,
            coriolis_force=coriolis_force,
            coriolis_torque=coriolis_torque,
            time_delta=time_delta,
        )