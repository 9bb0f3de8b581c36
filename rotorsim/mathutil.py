"""Vector and quaternion helpers, a first order filter and frame constants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Vector3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        """Unit vector in the same direction; a zero vector is returned unchanged."""
        d = self.length()
        if d == 0.0:
            return self
        return self / d

    def dot(self, other: Vector3) -> float:
        """Scalar product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Vector product."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def corrected(self) -> Vector3:
        """Copy with every NaN or infinite component replaced by zero."""
        return Vector3(*(c if math.isfinite(c) else 0.0 for c in self))


@dataclass(frozen=True)
class Quaternion:
    """A quaternion w + xi + yj + zk."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_euler(cls, roll: float, pitch: float, yaw: float) -> Quaternion:
        """Unit quaternion from roll, pitch and yaw in radians."""
        cr, sr = math.cos(roll / 2), math.sin(roll / 2)
        cp, sp = math.cos(pitch / 2), math.sin(pitch / 2)
        cy, sy = math.cos(yaw / 2), math.sin(yaw / 2)
        q = cls(
            cr * cp * cy + sr * sp * sy,
            sr * cp * cy - cr * sp * sy,
            cr * sp * cy + sr * cp * sy,
            cr * cp * sy - sr * sp * cy,
        )
        return q._normalized()

    def _normalized(self) -> Quaternion:
        n = math.sqrt(self.w ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2)
        if n == 0.0:
            return Quaternion()
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def __mul__(self, other: Quaternion) -> Quaternion:
        return Quaternion(
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def euler(self) -> tuple[float, float, float]:
        """Roll, pitch and yaw in radians."""
        w, x, y, z = self.w, self.x, self.y, self.z
        roll = math.atan2(2 * (w * x + y * z), 1 - 2 * (x * x + y * y))
        pitch = math.asin(constrain(2 * (w * y - z * x), -1.0, 1.0))
        yaw = math.atan2(2 * (w * z + x * y), 1 - 2 * (y * y + z * z))
        return roll, pitch, yaw

    def inverse(self) -> Quaternion:
        """Multiplicative inverse; the identity for a zero quaternion."""
        s = self.w ** 2 + self.x ** 2 + self.y ** 2 + self.z ** 2
        if s == 0.0:
            return Quaternion()
        return Quaternion(self.w / s, -self.x / s, -self.y / s, -self.z / s)

    def rotate_vector(self, v: Vector3) -> Vector3:
        """Rotate a vector by this quaternion."""
        r = self * Quaternion(0.0, v.x, v.y, v.z) * self.inverse()
        return Vector3(r.x, r.y, r.z)


class FirstOrderFilter:
    """Discrete first order low-pass with separate rise and fall time constants."""

    def __init__(self, time_constant_up: float, time_constant_down: float, initial_state: float):
        self.time_constant_up = time_constant_up
        self.time_constant_down = time_constant_down
        self.state = initial_state

    def update(self, input_state: float, sampling_time: float) -> float:
        """Advance the filter by one step towards input_state and return the new state."""
        tau = self.time_constant_up if input_state > self.state else self.time_constant_down
        alpha = math.exp(-sampling_time / tau)
        self.state = alpha * self.state + (1 - alpha) * input_state
        return self.state


def constrain(val, min_val, max_val):
    """Clamp val to the range [min_val, max_val]."""
    if val < min_val:
        return min_val
    if val > max_val:
        return max_val
    return val


def degrees_360(degrees: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = degrees % 360.0
    if wrapped >= 360.0:
        wrapped -= 360.0
    return wrapped


def quaternion_from_small_angle(theta: Iterable[float]) -> Quaternion:
    """Quaternion from the three-element small angle approximation theta."""
    values = tuple(theta)
    if len(values) != 3:
        raise ValueError(f"theta must have exactly 3 elements, got {len(values)}")
    tx, ty, tz = values
    q_squared = (tx * tx + ty * ty + tz * tz) / 4.0
    if q_squared < 1:
        return Quaternion(math.sqrt(1 - q_squared), tx * 0.5, ty * 0.5, tz * 0.5)
    w = 1.0 / math.sqrt(1 + q_squared)
    f = w * 0.5
    return Quaternion(w, tx * f, ty * f, tz * f)


# Frames: g - simulator ENU, r - body FLU, b - body FRD, n - NED.
# Rotation between ENU and NED frames.
Q_NG = Quaternion(0, 0.70711, 0.70711, 0)
# Rotation between body FLU and body FRD frames.
Q_BR = Quaternion(0, 1, 0, 0)

# Sensor X-axis unit vectors in the base_link frame.
DOWNWARD_ROTATION = Vector3(0, 0, -1)
UPWARD_ROTATION = Vector3(0, 0, 1)
BACKWARD_ROTATION = Vector3(-1, 0, 0)
FORWARD_ROTATION = Vector3(1, 0, 0)
LEFT_ROTATION = Vector3(0, 1, 0)
RIGHT_ROTATION = Vector3(0, -1, 0)