"""Reproduction and offspring placement.

Asexual reproduction: a fed organism may produce one child per day. The
child inherits a mutated copy of its parent's trait vector and appears a
fixed distance away at a random angle.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from evolution.config import traits as defaults
from evolution.config.simulation_config import GameConfiguration
from evolution.entities import Organism
from evolution.genetics.mutation import mutate_traits
from evolution.math_utils import Vector2, clamp, clamp_to_bounds
from evolution.util.rng import require_rng_param


def reproduction_chance(base_probability: float, fertility: float) -> float:
    return clamp(
        base_probability * fertility,
        defaults.MIN_REPRODUCTION_CHANCE,
        defaults.MAX_REPRODUCTION_CHANCE,
    )


class ReproductionEngine:
    """Produces offspring with independently mutated, bounds-clamped traits."""

    def __init__(self, config: GameConfiguration, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = require_rng_param(rng, "ReproductionEngine.__init__")

    def should_reproduce(self, organism: Organism) -> bool:
        """Roll the reproduction check. Only fed organisms may reproduce."""
        if not organism.has_food_today:
            return False
        chance = reproduction_chance(
            self.config.reproduction_probability, organism.traits.fertility
        )
        return self.rng.random() < chance

    def offspring_position(self, parent: Organism) -> Vector2:
        angle = self.rng.uniform(0, 2 * math.pi)
        offset = Vector2.from_angle(angle, self.config.spawn_distance)
        return clamp_to_bounds(
            parent.position + offset, self.config.world.width, self.config.world.height
        )

    def create_offspring(self, parent: Organism, child_id: int, day: int) -> Organism:
        """Build the child. Species assignment is left to the caller."""
        return Organism(
            id=child_id,
            traits=mutate_traits(parent.traits, self.config.traits, self.rng),
            position=self.offspring_position(parent),
            energy=self.config.energy.max_energy,
            max_energy=self.config.energy.max_energy,
            generation=parent.generation + 1,
            species_id=parent.species_id,
            parent_id=parent.id,
            born_on_day=day,
        )
