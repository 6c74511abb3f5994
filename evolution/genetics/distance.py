"""Genetic distance between two trait vectors.

Each trait delta is normalized by that trait's configured range and the
result is the root-mean-square over the whole vector, so the distance
lies in ``[0, 1]`` and grows monotonically with any single trait's
deviation. Zero-width ranges contribute nothing.
"""

import math

from evolution.config.simulation_config import TraitConfig
from evolution.genetics.trait import TRAIT_NAMES, Traits


def genetic_distance(a: Traits, b: Traits, trait_config: TraitConfig) -> float:
    total = 0.0
    for name in TRAIT_NAMES:
        width = trait_config.bounds_for(name).width
        if width <= 0:
            continue
        normalized = min(1.0, abs(a.get(name) - b.get(name)) / width)
        total += normalized * normalized
    return math.sqrt(total / len(TRAIT_NAMES))
