"""Visual-inertial odometry simulation with noise and a slowly drifting bias."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from rotorsim.mathutil import Quaternion, Vector3

DEFAULT_PUB_RATE = 30.0  # [Hz]
DEFAULT_CORRELATION_TIME = 60.0  # [s]
DEFAULT_RANDOM_WALK = 1.0  # [(m/s) / sqrt(hz)]
DEFAULT_NOISE_DENSITY = 0.0005  # [(m) / sqrt(hz)]

_COVARIANCE_SIZE = 6


@dataclass
class VisionParams:
    """Publication rate and noise parameters of the odometry estimate."""

    namespace: str = ""
    model_name: str = ""
    pub_rate: float = DEFAULT_PUB_RATE
    correlation_time: float = DEFAULT_CORRELATION_TIME
    random_walk: float = DEFAULT_RANDOM_WALK
    noise_density: float = DEFAULT_NOISE_DENSITY

    @property
    def topic(self) -> str:
        """Topic the odometry is published on."""
        return "~/" + self.model_name + "/vision_odom"


@dataclass(frozen=True)
class Odometry:
    """One odometry estimate relative to the start pose.

    The covariances are row-major 6x6 matrices.
    """

    time_usec: int
    position: Vector3
    orientation: Quaternion
    linear_velocity: Vector3
    angular_velocity: Vector3
    pose_covariance: tuple[float, ...]
    velocity_covariance: tuple[float, ...]


def _diagonal_covariance(variance: float) -> tuple[float, ...]:
    return tuple(
        variance if row == col else 0.0
        for row in range(_COVARIANCE_SIZE)
        for col in range(_COVARIANCE_SIZE)
    )


class VisionModel:
    """Produces noisy odometry at a limited rate, zeroed at the start pose."""

    def __init__(
        self,
        params: VisionParams | None = None,
        start_time: float = 0.0,
        start_position: Vector3 = Vector3(),
        start_rotation: Quaternion = Quaternion(),
        seed: int | None = None,
    ):
        self.params = params if params is not None else VisionParams()
        self.last_time = start_time
        self.last_pub_time = start_time
        self.start_position = start_position
        self.start_rotation = start_rotation
        self.bias = Vector3()
        self._rng = random.Random(seed)

    def _randn3(self, scale: float) -> Vector3:
        return Vector3(*(scale * self._rng.gauss(0.0, 1.0) for _ in range(3)))

    def update(
        self,
        current_time: float,
        position: Vector3,
        rotation: Quaternion,
        linear_velocity: Vector3,
        angular_velocity: Vector3,
    ) -> Odometry | None:
        """Return an estimate when a publication is due, otherwise None.

        position and rotation are the world pose, linear_velocity the world
        linear velocity and angular_velocity the body-relative angular rate.
        """
        p = self.params
        dt = current_time - self.last_pub_time
        if not dt > 1.0 / p.pub_rate:
            return None

        relative_position = position - self.start_position
        roll, pitch, yaw = rotation.euler()
        start_yaw = self.start_rotation.euler()[2]
        relative_rotation = Quaternion.from_euler(roll, pitch, yaw - start_yaw)

        sqrt_dt = math.sqrt(dt)
        noise_pos = self._randn3(p.noise_density * sqrt_dt)
        noise_linvel = self._randn3(p.noise_density * sqrt_dt)

        tau = p.correlation_time
        sigma_b_g_d = math.sqrt(
            -p.random_walk * p.random_walk * tau / 2.0 * (math.exp(-2.0 * dt / tau) - 1.0)
        )
        # The angular noise state starts from zero on every publication.
        noise_angvel = self._randn3(sigma_b_g_d * sqrt_dt)

        random_walk = self._randn3(p.random_walk * sqrt_dt)
        self.bias = self.bias + random_walk * dt - self.bias / tau

        variance = p.noise_density * p.noise_density
        covariance = _diagonal_covariance(variance)

        self.last_pub_time = current_time
        self.last_time = current_time

        return Odometry(
            time_usec=int(current_time * 1e6),
            position=relative_position + noise_pos + self.bias,
            orientation=relative_rotation,
            linear_velocity=linear_velocity + noise_linvel,
            angular_velocity=angular_velocity + noise_angvel,
            pose_covariance=covariance,
            velocity_covariance=covariance,
        )