"""Rotor model: thrust, drag, rolling moment and filtered rotor speed."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from rotorsim.mathutil import FirstOrderFilter, Quaternion, Vector3, constrain

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = ""
DEFAULT_COMMAND_SUB_TOPIC = "/gazebo/command/motor_speed"
DEFAULT_MOTOR_FAILURE_NUM_SUB_TOPIC = "/gazebo/motor_failure_num"
DEFAULT_MOTOR_VELOCITY_PUB_TOPIC = "/motor_speed"

# Forces are limited by the filter, so the joint force limit is left open.
DEFAULT_MAX_FORCE = sys.float_info.max
DEFAULT_MOTOR_CONSTANT = 8.54858e-06
DEFAULT_MOMENT_CONSTANT = 0.016
DEFAULT_TIME_CONSTANT_UP = 1.0 / 80.0
DEFAULT_TIME_CONSTANT_DOWN = 1.0 / 40.0
DEFAULT_MAX_ROT_VELOCITY = 838.0
DEFAULT_ROTOR_DRAG_COEFFICIENT = 1.0e-4
DEFAULT_ROLLING_MOMENT_COEFFICIENT = 1.0e-6
DEFAULT_ROTOR_VELOCITY_SLOWDOWN_SIM = 10.0

# Forward speed at which the rotor no longer produces thrust.
_THRUST_FADE_SPEED = 25.0


class TurningDirection(IntEnum):
    """Rotor spin direction."""

    CCW = 1
    CW = -1


def parse_turning_direction(value: str) -> TurningDirection:
    """Parse 'cw' or 'ccw' into a TurningDirection."""
    if value == "cw":
        return TurningDirection.CW
    if value == "ccw":
        return TurningDirection.CCW
    raise ValueError(f"turning direction must be 'cw' or 'ccw', got {value!r}")


@dataclass
class MotorParams:
    """Configuration of one rotor."""

    motor_number: int = 0
    turning_direction: TurningDirection = TurningDirection.CW
    namespace: str = DEFAULT_NAMESPACE
    command_sub_topic: str = DEFAULT_COMMAND_SUB_TOPIC
    motor_failure_sub_topic: str = DEFAULT_MOTOR_FAILURE_NUM_SUB_TOPIC
    motor_speed_pub_topic: str = DEFAULT_MOTOR_VELOCITY_PUB_TOPIC
    max_force: float = DEFAULT_MAX_FORCE
    max_rot_velocity: float = DEFAULT_MAX_ROT_VELOCITY
    moment_constant: float = DEFAULT_MOMENT_CONSTANT
    motor_constant: float = DEFAULT_MOTOR_CONSTANT
    rolling_moment_coefficient: float = DEFAULT_ROLLING_MOMENT_COEFFICIENT
    rotor_drag_coefficient: float = DEFAULT_ROTOR_DRAG_COEFFICIENT
    rotor_velocity_slowdown_sim: float = DEFAULT_ROTOR_VELOCITY_SLOWDOWN_SIM
    time_constant_down: float = DEFAULT_TIME_CONSTANT_DOWN
    time_constant_up: float = DEFAULT_TIME_CONSTANT_UP


@dataclass(frozen=True)
class MotorOutput:
    """Result of one simulation step of a rotor.

    thrust is a force in the rotor link frame, air_drag a force in the world
    frame, drag_torque a torque in the parent link frame, rolling_moment a
    torque in the world frame and joint_velocity the commanded joint speed.
    """

    thrust: Vector3
    air_drag: Vector3
    drag_torque: Vector3
    rolling_moment: Vector3
    joint_velocity: float
    failed: bool
    aliasing: bool = False


@dataclass
class MotorModel:
    """Rotor dynamics driven by speed commands and the joint state."""

    params: MotorParams = field(default_factory=MotorParams)
    reference_velocity: float = 0.0
    failure_number: int = 0
    prev_sim_time: float = 0.0

    def __post_init__(self) -> None:
        self._filter = FirstOrderFilter(
            self.params.time_constant_up,
            self.params.time_constant_down,
            self.reference_velocity,
        )
        self._screen_msg_flag = True
        self._reported_motor = 0

    @property
    def failed(self) -> bool:
        """Whether the current failure number selects this motor."""
        return self.params.motor_number == self.failure_number - 1

    def set_command(self, motor_speeds: Sequence[float]) -> float:
        """Take this motor's entry of a speed command, capped at max_rot_velocity."""
        number = self.params.motor_number
        if len(motor_speeds) <= number:
            raise IndexError(
                f"motor index {number} is outside the command of size {len(motor_speeds)}"
            )
        self.reference_velocity = min(float(motor_speeds[number]), self.params.max_rot_velocity)
        return self.reference_velocity

    def set_failure(self, failure_number: int) -> None:
        """Select the failed motor as motor_number + 1; 0 means none."""
        self.failure_number = int(failure_number)

    def update(
        self,
        sim_time: float,
        joint_velocity: float,
        body_velocity: Vector3,
        joint_axis: Vector3,
        relative_rotation: Quaternion,
    ) -> MotorOutput:
        """Advance to sim_time and return the forces, torques and joint command."""
        p = self.params
        sampling_time = sim_time - self.prev_sim_time
        self.prev_sim_time = sim_time

        aliasing = sampling_time > 0 and joint_velocity / (2 * math.pi) > 1 / (2 * sampling_time)
        if aliasing:
            logger.error(
                "Aliasing on motor [%d] might occur. Consider making smaller simulation "
                "time steps or raising the rotor_velocity_slowdown_sim param.",
                p.motor_number,
            )

        real_velocity = joint_velocity * p.rotor_velocity_slowdown_sim
        force = real_velocity * real_velocity * p.motor_constant

        scalar = constrain(1 - body_velocity.length() / _THRUST_FADE_SPEED, 0.0, 1.0)
        thrust = Vector3(0.0, 0.0, force * scalar)

        perpendicular = body_velocity - body_velocity.dot(joint_axis) * joint_axis
        air_drag = -abs(real_velocity) * p.rotor_drag_coefficient * perpendicular

        drag_torque = relative_rotation.rotate_vector(
            Vector3(0.0, 0.0, -int(p.turning_direction) * force * p.moment_constant)
        )
        rolling_moment = -abs(real_velocity) * p.rolling_moment_coefficient * perpendicular

        filtered = self._filter.update(self.reference_velocity, sampling_time)
        commanded = int(p.turning_direction) * filtered / p.rotor_velocity_slowdown_sim

        failed = self._update_failure()
        if failed:
            commanded = 0.0

        return MotorOutput(
            thrust=thrust,
            air_drag=air_drag,
            drag_torque=drag_torque,
            rolling_moment=rolling_moment,
            joint_velocity=commanded,
            failed=failed,
            aliasing=aliasing,
        )

    def _update_failure(self) -> bool:
        number = self.params.motor_number
        if self.failed:
            if self._screen_msg_flag:
                logger.warning("Motor number [%d] failed!  [Motor thrust = 0]", self.failure_number)
                self._reported_motor = self.failure_number
                self._screen_msg_flag = False
            return True
        if self.failure_number == 0 and number == self._reported_motor - 1 and not self._screen_msg_flag:
            logger.warning(
                "Motor number [%d] running! [Motor thrust = (default)]", self._reported_motor
            )
            self._screen_msg_flag = True
        return False