"""Resource contention: who gets a food item when several organisms reach it.

A contest starts when an organism touches its target food. Every unfed
organism within the contest radius joins. A lone contestant wins
outright; otherwise each contestant scores

    aggression * W_agg + U(0, R) + (size - 1) * W_size - (1 - defense) * W_def

and the highest score wins. Ties go to whoever was evaluated first.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from evolution.config.simulation_config import ContestConfig, GameConfiguration
from evolution.entities import Food, Organism
from evolution.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContestResult:
    food_id: int
    winner_id: int
    contestant_ids: tuple[int, ...]

    @property
    def contested(self) -> bool:
        return len(self.contestant_ids) > 1


def capture_distance(organism: Organism, config: GameConfiguration) -> float:
    """Distance below which an organism touches food."""
    return organism.effective_radius(config) + config.food.food_size / 2


def contest_score(organism: Organism, contest: ContestConfig, rng: random.Random) -> float:
    traits = organism.traits
    return (
        traits.aggression * contest.aggression_weight
        + rng.uniform(0, contest.random_range)
        + (traits.size - 1.0) * contest.size_weight
        - (1.0 - traits.defense) * contest.defense_penalty
    )


class ContentionResolver:
    """Decides which organism claims a contested food item."""

    def __init__(self, config: GameConfiguration, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = require_rng_param(rng, "ContentionResolver.__init__")

    def contestants(
        self, trigger: Organism, food: Food, organisms: Iterable[Organism]
    ) -> List[Organism]:
        """Unfed, non-exhausted organisms within contest range, trigger first."""
        contest_range = self.config.contest.contest_range
        result = [trigger]
        for organism in organisms:
            if organism.id == trigger.id or organism.has_food_today or organism.is_exhausted:
                continue
            if organism.position.distance_to(food.position) <= contest_range:
                result.append(organism)
        return result

    def pick_winner(self, contestants: List[Organism]) -> Organism:
        if len(contestants) == 1:
            return contestants[0]
        winner = contestants[0]
        best = contest_score(winner, self.config.contest, self.rng)
        for organism in contestants[1:]:
            score = contest_score(organism, self.config.contest, self.rng)
            if score > best:
                winner, best = organism, score
        return winner

    def resolve(
        self, trigger: Organism, food: Food, organisms: Iterable[Organism]
    ) -> ContestResult:
        """Run the contest and apply its outcome to the winner and the food."""
        contestants = self.contestants(trigger, food, organisms)
        winner = self.pick_winner(contestants)

        food.claimed = True
        winner.has_food_today = True
        winner.target_food_id = None
        winner.gain_energy(self.config.energy.energy_gain_from_food)

        if len(contestants) > 1:
            logger.debug(
                "Organism %d won food %d against %d rival(s)",
                winner.id,
                food.id,
                len(contestants) - 1,
            )
        return ContestResult(food.id, winner.id, tuple(o.id for o in contestants))
