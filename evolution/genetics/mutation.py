"""Mutation of trait vectors during reproduction.

Every trait mutates independently by a uniform perturbation inside its
configured +/- range and is then clamped back into ``[min, max]``.
Discrete traits draw an integer delta so they stay integral.
"""

import random

from evolution.config.simulation_config import TraitBounds, TraitConfig
from evolution.genetics.trait import TRAIT_NAMES, Traits


def mutate_value(value: float, bounds: TraitBounds, rng: random.Random) -> float:
    """Perturb a single trait value and clamp it into its bounds."""
    normalized = bounds.normalized()
    if normalized.discrete:
        step = int(normalized.mutation_range)
        delta = rng.randint(-step, step) if step > 0 else 0
    else:
        delta = rng.uniform(-normalized.mutation_range, normalized.mutation_range)
    return bounds.clamp(value + delta)


def mutate_traits(parent: Traits, trait_config: TraitConfig, rng: random.Random) -> Traits:
    """Create a child trait vector from ``parent``.

    Traits are visited in ``TRAIT_NAMES`` order so that a seeded RNG
    always produces the same child.
    """
    return Traits(
        **{
            name: mutate_value(parent.get(name), trait_config.bounds_for(name), rng)
            for name in TRAIT_NAMES
        }
    )
