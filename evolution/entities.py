"""Simulation entities: organisms, food items and obstacles.

Entities are plain mutable records. They never hold references to each
other; cross-entity links (an organism's target food, its species,
its lineage) are integer ids resolved through the owning collections.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from evolution.config import traits as defaults
from evolution.config.simulation_config import GameConfiguration
from evolution.genetics.trait import Traits
from evolution.math_utils import Vector2, rect_circle_distance


@dataclass
class Organism:
    """A single forager.

    Attributes:
        id: Stable integer handle, unique for the lifetime of a run
        traits: Heritable trait vector
        position: Current location in world coordinates
        energy: Current energy, kept within ``[0, max_energy]``
        age: Age in whole days
        generation: 0 for founders, parent's generation + 1 otherwise
        species_id: Id of the species this organism belongs to
        parent_id: Id of the parent, None for founders
        has_food_today: Whether the organism ate during the current day
        target_food_id: Food item currently being pursued, if any
    """

    id: int
    traits: Traits
    position: Vector2
    energy: float
    max_energy: float
    age: int = 0
    generation: int = 0
    species_id: int = 0
    parent_id: Optional[int] = None
    born_on_day: int = 0
    has_food_today: bool = False
    target_food_id: Optional[int] = None

    @property
    def is_exhausted(self) -> bool:
        return self.energy <= 0

    def effective_radius(self, config: GameConfiguration) -> float:
        return config.base_organism_radius * self.traits.size

    def effective_speed(self, config: GameConfiguration) -> float:
        """Base speed reduced linearly by body size, floored at 30%."""
        size_ratio = config.traits.size.ratio(self.traits.size)
        factor = max(defaults.MIN_SIZE_SPEED_FACTOR, 1.0 - config.size_speed_penalty * size_ratio)
        return self.traits.speed * factor

    def consume_energy(self, amount: float) -> None:
        self.energy = max(0.0, min(self.max_energy, self.energy - amount))

    def gain_energy(self, amount: float) -> None:
        self.energy = max(0.0, min(self.max_energy, self.energy + amount))

    def reset_daily_state(self) -> None:
        self.has_food_today = False
        self.target_food_id = None


@dataclass
class Food:
    id: int
    position: Vector2
    claimed: bool = False


class ObstacleKind(Enum):
    """Obstacle variants.

    Walls are centered rectangles, rocks and hazards are circles.
    Walls and rocks block movement; hazards kill on contact.
    """

    WALL = "wall"
    ROCK = "rock"
    HAZARD = "hazard"

    @property
    def blocks_movement(self) -> bool:
        return self is not ObstacleKind.HAZARD

    @property
    def is_lethal(self) -> bool:
        return self is ObstacleKind.HAZARD


@dataclass
class Obstacle:
    """A long-lived obstacle placed by the environment or an external command.

    ``id`` is assigned by the environment when the obstacle is added;
    callers may leave it at 0.
    """

    kind: ObstacleKind
    position: Vector2
    width: float = 50.0
    height: float = 50.0
    radius: float = 25.0
    id: int = 0

    def collides_with(self, point: Vector2, organism_radius: float) -> bool:
        if self.kind is ObstacleKind.WALL:
            distance = rect_circle_distance(self.position, self.width, self.height, point)
            return distance < organism_radius
        return math.hypot(point.x - self.position.x, point.y - self.position.y) < (
            self.radius + organism_radius
        )


@dataclass
class DeathRecord:
    """Why and where an organism died."""

    organism_id: int
    cause: str
    day: int
    age: int
    position: Vector2 = field(default_factory=Vector2)
