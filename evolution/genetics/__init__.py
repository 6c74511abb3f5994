"""Trait vector, mutation and genetic distance.

Design Philosophy:
- Traits are plain bounded numbers, one value per organism
- Mutation is independent per trait and always re-clamped
- Distance is normalized per trait so no single unit dominates
"""

from evolution.genetics.distance import genetic_distance
from evolution.genetics.mutation import mutate_traits, mutate_value
from evolution.genetics.trait import TRAIT_NAMES, Traits

__all__ = [
    "TRAIT_NAMES",
    "Traits",
    "genetic_distance",
    "mutate_traits",
    "mutate_value",
]
