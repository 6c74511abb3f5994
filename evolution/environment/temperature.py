"""Temperature zones and seasons.

Ambient temperature at a point is the base temperature plus the
seasonal offset, the weather offset and the contribution of every
temperature zone covering that point.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from evolution.math_utils import Vector2


@dataclass
class TemperatureZone:
    """A circular hot or cold spot.

    The zone's contribution decays linearly from ``temperature`` at the
    center to zero at the edge, scaled by ``intensity``.
    """

    position: Vector2
    radius: float
    temperature: float
    intensity: float = 1.0

    def __post_init__(self) -> None:
        self.intensity = max(0.0, min(1.0, self.intensity))

    def contribution_at(self, point: Vector2) -> float:
        if self.radius <= 0:
            return 0.0
        distance = self.position.distance_to(point)
        if distance >= self.radius:
            return 0.0
        return self.temperature * (1.0 - distance / self.radius) * self.intensity

    @property
    def is_hot(self) -> bool:
        return self.temperature > 0


def zone_temperature_at(zones: Sequence[TemperatureZone], point: Vector2) -> float:
    return sum(zone.contribution_at(point) for zone in zones)


def generate_temperature_zones(
    rng: random.Random,
    width: float,
    height: float,
    count_range: tuple[int, int],
    radius_range: tuple[float, float],
) -> List[TemperatureZone]:
    low, high = sorted(count_range)
    if high <= 0:
        return []
    min_radius, max_radius = sorted(radius_range)
    zones = []
    for _ in range(rng.randint(max(0, low), high)):
        radius = rng.uniform(min_radius, max_radius)
        hot = rng.random() < 0.5
        temperature = rng.uniform(10.0, 20.0) if hot else rng.uniform(-20.0, -10.0)
        zones.append(
            TemperatureZone(
                position=Vector2(rng.uniform(0, width), rng.uniform(0, height)),
                radius=radius,
                temperature=temperature,
                intensity=rng.uniform(0.6, 1.0),
            )
        )
    return zones


class Season(Enum):
    """Seasons with their food multiplier and temperature offset."""

    SPRING = ("spring", 1.3, 0.0)
    SUMMER = ("summer", 1.2, 6.0)
    FALL = ("fall", 0.9, 0.0)
    WINTER = ("winter", 0.6, -8.0)

    def __init__(self, label: str, food_multiplier: float, temperature_offset: float) -> None:
        self.label = label
        self.food_multiplier = food_multiplier
        self.temperature_offset = temperature_offset

    @classmethod
    def for_day(cls, day: int, days_per_season: int) -> "Season":
        order = list(cls)
        if days_per_season <= 0:
            return order[0]
        return order[(day // days_per_season) % len(order)]
