"""Random wind and wind gust forces acting on a link."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from rotorsim.mathutil import Vector3


@dataclass
class WindParams:
    """Normal-distribution parameters of the steady wind and of a timed gust."""

    namespace: str = ""
    xyz_offset: Vector3 = field(default_factory=Vector3)
    wind_pub_topic: str = "wind"
    frame_id: str = "world"
    link_name: str = "base_link"
    wind_force_mean: float = 0.0
    wind_force_max: float = 0.0
    wind_force_variance: float = 0.0
    wind_direction_mean: Vector3 = field(default_factory=lambda: Vector3(1.0, 0.0, 0.0))
    wind_direction_variance: float = 0.0
    wind_gust_start: float = 0.0
    wind_gust_duration: float = 0.0
    wind_gust_force_mean: float = 0.0
    wind_gust_force_max: float = 0.0
    wind_gust_force_variance: float = 0.0
    wind_gust_direction_mean: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    wind_gust_direction_variance: float = 0.0

    @property
    def topic(self) -> str:
        """Default publication topic, prefixed with the namespace."""
        return "/" + self.namespace + self.wind_pub_topic


@dataclass(frozen=True)
class WindSample:
    """Wind and gust forces of one step, applied at position in the link frame."""

    wind: Vector3
    gust: Vector3
    position: Vector3
    frame_id: str
    time_usec: int

    @property
    def force(self) -> Vector3:
        return self.wind + self.gust


class WindModel:
    """Draws wind forces from normal distributions; gusts only inside their time window."""

    def __init__(self, params: WindParams | None = None, seed: int | None = None):
        self.params = params if params is not None else WindParams()
        p = self.params
        self.direction_mean = p.wind_direction_mean.normalized()
        self.gust_direction_mean = p.wind_gust_direction_mean.normalized()
        self.gust_start = p.wind_gust_start
        self.gust_end = p.wind_gust_start + p.wind_gust_duration
        self._force_std = math.sqrt(p.wind_force_variance)
        self._direction_std = math.sqrt(p.wind_direction_variance)
        self._gust_force_std = math.sqrt(p.wind_gust_force_variance)
        self._gust_direction_std = math.sqrt(p.wind_gust_direction_variance)
        seeds = random.Random(seed)
        self._force_rng = random.Random(seeds.random())
        self._direction_rng = random.Random(seeds.random())
        self._gust_force_rng = random.Random(seeds.random())
        self._gust_direction_rng = random.Random(seeds.random())

    def gust_active(self, now: float) -> bool:
        return self.gust_start <= now < self.gust_end

    @staticmethod
    def _direction(rng: random.Random, mean: Vector3, std: float) -> Vector3:
        return Vector3(*(rng.gauss(m, std) for m in mean))

    def sample(self, now: float) -> WindSample:
        """Draw the wind force, plus a gust when now lies in the gust window."""
        p = self.params
        strength = min(self._force_rng.gauss(p.wind_force_mean, self._force_std), p.wind_force_max)
        wind = strength * self._direction(self._direction_rng, self.direction_mean, self._direction_std)

        gust = Vector3()
        if self.gust_active(now):
            gust_strength = min(
                self._gust_force_rng.gauss(p.wind_gust_force_mean, self._gust_force_std),
                p.wind_gust_force_max,
            )
            gust = gust_strength * self._direction(
                self._gust_direction_rng, self.gust_direction_mean, self._gust_direction_std
            )

        return WindSample(
            wind=wind,
            gust=gust,
            position=p.xyz_offset,
            frame_id=p.frame_id,
            time_usec=int(now * 1e6),
        )