"""Lineage tracking for ancestry and dominance ranking.

Every organism is registered at creation and deregistered at death. A
child joins its parent's lineage; organisms without a tracked parent
(the founding population) start their own. A lineage is marked extinct
exactly once, when its last living member dies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from evolution.entities import Organism

logger = logging.getLogger(__name__)

# Dominance weights: current share dominates, history breaks ties.
POPULATION_SHARE_WEIGHT = 100.0
LONGEVITY_WEIGHT = 0.5
TOTAL_DESCENDANTS_WEIGHT = 0.1
PEAK_POPULATION_WEIGHT = 0.5


@dataclass
class Lineage:
    """A family descending from a single founder.

    Attributes:
        founder_id: Id of the original ancestor (also the lineage key)
        current_descendants: Ids of living members, founder included while alive
        total_descendants: Members ever registered, dead ones included
        peak_population: Largest simultaneous membership observed
    """

    founder_id: int
    founder_generation: int
    founded_on_day: int
    current_descendants: Set[int] = field(default_factory=set)
    total_descendants: int = 0
    peak_population: int = 0
    extinct_on_day: Optional[int] = None
    dominance_score: float = 0.0

    @property
    def is_extinct(self) -> bool:
        return self.extinct_on_day is not None

    @property
    def population(self) -> int:
        return len(self.current_descendants)

    def age(self, current_day: int) -> int:
        end = self.extinct_on_day if self.extinct_on_day is not None else current_day
        return end - self.founded_on_day

    def add_descendant(self, organism_id: int) -> None:
        self.current_descendants.add(organism_id)
        self.total_descendants += 1
        self.peak_population = max(self.peak_population, len(self.current_descendants))

    def remove_descendant(self, organism_id: int) -> None:
        self.current_descendants.discard(organism_id)

    def calculate_dominance_score(self, total_population: int, current_day: int) -> float:
        share = self.population / total_population if total_population > 0 else 0.0
        self.dominance_score = (
            share * POPULATION_SHARE_WEIGHT
            + (current_day - self.founded_on_day) * LONGEVITY_WEIGHT
            + self.total_descendants * TOTAL_DESCENDANTS_WEIGHT
            + self.peak_population * PEAK_POPULATION_WEIGHT
        )
        return self.dominance_score


@dataclass(frozen=True)
class LineageStatistics:
    active_lineages: int = 0
    extinct_lineages: int = 0
    most_successful_founder: Optional[int] = None
    most_successful_total: int = 0
    longest_lived_founder: Optional[int] = None
    longest_lived_days: int = 0
    largest_peak_founder: Optional[int] = None
    largest_peak: int = 0
    average_extinct_age: float = 0.0


class LineageTracker:
    """Tracks which lineage every living organism belongs to."""

    def __init__(self) -> None:
        self._lineages: Dict[int, Lineage] = {}
        self._organism_to_founder: Dict[int, int] = {}
        self._current_day = 0

    def register_organism(
        self, organism: Organism, parent_id: Optional[int], current_day: int
    ) -> Lineage:
        self._current_day = current_day
        founder_id = self._organism_to_founder.get(parent_id) if parent_id is not None else None
        if founder_id is not None:
            lineage = self._lineages[founder_id]
        else:
            lineage = Lineage(
                founder_id=organism.id,
                founder_generation=organism.generation,
                founded_on_day=current_day,
            )
            self._lineages[organism.id] = lineage
            founder_id = organism.id

        lineage.add_descendant(organism.id)
        self._organism_to_founder[organism.id] = founder_id
        return lineage

    def record_death(self, organism_id: int, current_day: int) -> Optional[Lineage]:
        """Remove a dead organism.

        Returns:
            The lineage if this death made it extinct, otherwise None
        """
        self._current_day = current_day
        founder_id = self._organism_to_founder.pop(organism_id, None)
        if founder_id is None:
            return None

        lineage = self._lineages[founder_id]
        lineage.remove_descendant(organism_id)
        if not lineage.current_descendants and not lineage.is_extinct:
            lineage.extinct_on_day = current_day
            logger.debug("Lineage %d extinct on day %d", founder_id, current_day)
            return lineage
        return None

    def update_dominance_scores(self, total_population: int, current_day: int) -> None:
        self._current_day = current_day
        for lineage in self._lineages.values():
            if not lineage.is_extinct:
                lineage.calculate_dominance_score(total_population, current_day)

    def top_lineages(self, count: int) -> List[Lineage]:
        active = [lineage for lineage in self._lineages.values() if not lineage.is_extinct]
        active.sort(key=lambda lineage: lineage.dominance_score, reverse=True)
        return active[: max(0, count)]

    def extinct_lineages(self) -> List[Lineage]:
        return [lineage for lineage in self._lineages.values() if lineage.is_extinct]

    def all_lineages(self) -> List[Lineage]:
        return list(self._lineages.values())

    def lineage_for(self, organism_id: int) -> Optional[Lineage]:
        founder_id = self._organism_to_founder.get(organism_id)
        if founder_id is None:
            return None
        return self._lineages[founder_id]

    def founder_of(self, organism_id: int) -> Optional[int]:
        return self._organism_to_founder.get(organism_id)

    def are_same_lineage(self, first_id: int, second_id: int) -> bool:
        first = self._organism_to_founder.get(first_id)
        second = self._organism_to_founder.get(second_id)
        return first is not None and first == second

    def statistics(self) -> LineageStatistics:
        lineages = list(self._lineages.values())
        if not lineages:
            return LineageStatistics()

        extinct = [lineage for lineage in lineages if lineage.is_extinct]
        most_successful = max(lineages, key=lambda lineage: lineage.total_descendants)
        longest_lived = max(lineages, key=lambda lineage: lineage.age(self._current_day))
        largest_peak = max(lineages, key=lambda lineage: lineage.peak_population)
        average_age = (
            sum(lineage.age(self._current_day) for lineage in extinct) / len(extinct)
            if extinct
            else 0.0
        )
        return LineageStatistics(
            active_lineages=len(lineages) - len(extinct),
            extinct_lineages=len(extinct),
            most_successful_founder=most_successful.founder_id,
            most_successful_total=most_successful.total_descendants,
            longest_lived_founder=longest_lived.founder_id,
            longest_lived_days=longest_lived.age(self._current_day),
            largest_peak_founder=largest_peak.founder_id,
            largest_peak=largest_peak.peak_population,
            average_extinct_age=average_age,
        )

    def reset(self) -> None:
        self._lineages.clear()
        self._organism_to_founder.clear()
        self._current_day = 0
