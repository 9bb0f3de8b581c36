"""Sonar range readings and topic naming."""

from __future__ import annotations

import math
from dataclasses import dataclass

from rotorsim.mathutil import Quaternion


@dataclass(frozen=True)
class RangeReading:
    """One sonar measurement; field of view angles are in radians."""

    time_usec: int
    min_distance: float
    max_distance: float
    current_distance: float
    h_fov: float
    v_fov: float
    orientation: Quaternion


def split_scoped_name(scoped_name: str) -> list[str]:
    """Split a scoped name on ':' and drop empty parts."""
    return [part for part in scoped_name.split(":") if part]


def sonar_topic(scoped_name: str, topic: str | None = None) -> str:
    """Topic the sonar publishes on.

    The topic lives under the root model of the scoped parent name. Without
    an explicit topic, the second-to-last name (the sensor's model) is used.
    """
    names = split_scoped_name(scoped_name)
    if len(names) < 2:
        raise ValueError(f"scoped name {scoped_name!r} needs at least two parts")
    name = topic if topic is not None else names[-2]
    return "~/" + names[0] + "/link/" + name


def sonar_fov(radius: float, range_max: float) -> float:
    """Cone opening angle of a sonar with the given radius and maximum range."""
    if range_max == 0:
        raise ValueError("range_max must not be zero")
    return 2.0 * math.atan(radius / range_max)


def range_reading(
    time: float,
    min_distance: float,
    max_distance: float,
    current_distance: float,
    radius: float,
    orientation: Quaternion,
) -> RangeReading:
    """Build a range reading at simulation time `time` in seconds."""
    fov = sonar_fov(radius, max_distance)
    return RangeReading(
        time_usec=int(time * 1e6),
        min_distance=min_distance,
        max_distance=max_distance,
        current_distance=current_distance,
        h_fov=fov,
        v_fov=fov,
        orientation=orientation,
    )