"""Advisory fitness scoring.

Fitness never decides survival. It ranks organisms against the currently
active food pattern so observers can highlight an "elite" subset.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Set, Tuple

from evolution.config.simulation_config import GameConfiguration
from evolution.entities import Organism
from evolution.environment.food_spawning import FoodPattern

MAX_GENERATION_BONUS = 0.2
GENERATION_BONUS_PER_GENERATION = 0.01
FED_MULTIPLIER = 1.2
ELITE_FRACTION = 5  # Top 1/5 of the population

# (speed, sense, size, fertility) ratios -> weighted score
_Weighting = Callable[[float, float, float, float], float]


def _mid_size_bonus(size: float) -> float:
    return 1.0 - abs(size - 0.5) * 2


PATTERN_WEIGHTS: Dict[FoodPattern, _Weighting] = {
    # Balanced foraging; mid-sized bodies do best.
    FoodPattern.RANDOM: lambda s, e, z, f: (
        0.35 * s + 0.25 * e + 0.25 * _mid_size_bonus(z) + 0.15 * f
    ),
    # Dense patches are contested, so size pays off.
    FoodPattern.CLUSTERED: lambda s, e, z, f: 0.15 * s + 0.25 * e + 0.4 * z + 0.2 * f,
    # Spread-out food rewards covering ground quickly.
    FoodPattern.SCATTERED: lambda s, e, z, f: 0.45 * s + 0.35 * e + 0.1 * (1.0 - z) + 0.1 * f,
    # A distant ring rewards perception above everything.
    FoodPattern.RING: lambda s, e, z, f: 0.15 * s + 0.5 * e + 0.2 * _mid_size_bonus(z) + 0.15 * f,
}


class FitnessEvaluator:
    def __init__(self, config: GameConfiguration) -> None:
        self.config = config

    def score(self, organism: Organism, pattern: FoodPattern) -> float:
        bounds = self.config.traits
        traits = organism.traits
        base = PATTERN_WEIGHTS[pattern](
            bounds.speed.ratio(traits.speed),
            bounds.sense_range.ratio(traits.sense_range),
            bounds.size.ratio(traits.size),
            bounds.fertility.ratio(traits.fertility),
        )
        base += min(MAX_GENERATION_BONUS, organism.generation * GENERATION_BONUS_PER_GENERATION)
        if organism.has_food_today:
            base *= FED_MULTIPLIER
        return base

    def rank(
        self, organisms: Iterable[Organism], pattern: FoodPattern
    ) -> List[Tuple[Organism, float]]:
        """Organisms with their scores, best first. Ties keep population order."""
        scored = [(organism, self.score(organism, pattern)) for organism in organisms]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored

    def elite_ids(self, organisms: Iterable[Organism], pattern: FoodPattern) -> Set[int]:
        ranked = self.rank(organisms, pattern)
        if not ranked:
            return set()
        elite_count = max(1, len(ranked) // ELITE_FRACTION)
        return {organism.id for organism, _ in ranked[:elite_count]}
