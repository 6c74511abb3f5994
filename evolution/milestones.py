"""Evolutionary records and one-shot milestones.

The tracker is a read-only observer of the population. It keeps running
maxima for notable traits, firing a milestone each time one is beaten,
and fires threshold milestones (population, generation, species count,
days survived) at most once per run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple

from evolution.entities import Organism

logger = logging.getLogger(__name__)


class MilestoneType(Enum):
    SPEED_RECORD = "Speed Record"
    SENSE_RECORD = "Perception Record"
    SIZE_RECORD = "Size Record"
    LONGEVITY_RECORD = "Longevity Record"
    EFFICIENCY_RECORD = "Efficiency Record"
    COMBAT_RECORD = "Combat Record"

    POPULATION_25 = "Population: 25"
    POPULATION_50 = "Population: 50"
    POPULATION_100 = "Population: 100"
    POPULATION_200 = "Population: 200"
    POPULATION_500 = "Population: 500"

    GENERATION_10 = "Generation 10"
    GENERATION_25 = "Generation 25"
    GENERATION_50 = "Generation 50"
    GENERATION_100 = "Generation 100"
    GENERATION_250 = "Generation 250"
    GENERATION_500 = "Generation 500"
    GENERATION_1000 = "Generation 1000"

    FIRST_SPECIATION = "First New Species"
    SPECIES_5 = "5 Species"
    SPECIES_10 = "10 Species"
    SPECIES_20 = "20 Species"

    DAY_100 = "Day 100 Survival"
    DAY_250 = "Day 250 Survival"
    DAY_500 = "Day 500 Survival"
    DAY_1000 = "Day 1000 Survival"

    MASS_EXTINCTION = "Mass Extinction"


POPULATION_THRESHOLDS: Tuple[Tuple[int, MilestoneType], ...] = (
    (25, MilestoneType.POPULATION_25),
    (50, MilestoneType.POPULATION_50),
    (100, MilestoneType.POPULATION_100),
    (200, MilestoneType.POPULATION_200),
    (500, MilestoneType.POPULATION_500),
)
GENERATION_THRESHOLDS: Tuple[Tuple[int, MilestoneType], ...] = (
    (10, MilestoneType.GENERATION_10),
    (25, MilestoneType.GENERATION_25),
    (50, MilestoneType.GENERATION_50),
    (100, MilestoneType.GENERATION_100),
    (250, MilestoneType.GENERATION_250),
    (500, MilestoneType.GENERATION_500),
    (1000, MilestoneType.GENERATION_1000),
)
SPECIES_THRESHOLDS: Tuple[Tuple[int, MilestoneType], ...] = (
    (5, MilestoneType.SPECIES_5),
    (10, MilestoneType.SPECIES_10),
    (20, MilestoneType.SPECIES_20),
)
DAY_THRESHOLDS: Tuple[Tuple[int, MilestoneType], ...] = (
    (100, MilestoneType.DAY_100),
    (250, MilestoneType.DAY_250),
    (500, MilestoneType.DAY_500),
    (1000, MilestoneType.DAY_1000),
)

MASS_EXTINCTION_LOSS = 0.5


@dataclass(frozen=True)
class Milestone:
    type: MilestoneType
    day: int
    value: float
    description: str
    organism_id: Optional[int] = None


class RecordTracker:
    """Detects new trait records and threshold crossings."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.milestones: List[Milestone] = []
        self._achieved: Set[MilestoneType] = set()
        self.speed_record = 0.0
        self.sense_record = 0.0
        self.size_record = 0.0
        self.efficiency_record = 0.0
        self.aggression_record = 0.0
        self.defense_record = 0.0
        self.longevity_record = 0
        self.peak_population = 0
        self.max_generation = 0

    def _fire(
        self,
        milestone_type: MilestoneType,
        day: int,
        value: float,
        description: str,
        organism_id: Optional[int] = None,
    ) -> Milestone:
        milestone = Milestone(milestone_type, day, value, description, organism_id)
        self.milestones.append(milestone)
        logger.info("Milestone on day %d: %s", day, description)
        return milestone

    def has_achieved(self, milestone_type: MilestoneType) -> bool:
        return milestone_type in self._achieved

    def check_records(
        self, organisms: Iterable[Organism], day: int, species_count: int
    ) -> List[Milestone]:
        """Scan the population for new records and crossed thresholds."""
        organisms = list(organisms)
        fired: List[Milestone] = []
        if not organisms:
            return fired

        for organism in organisms:
            fired.extend(self._check_trait_records(organism, day))

        population = len(organisms)
        self.peak_population = max(self.peak_population, population)
        fired.extend(
            self._check_thresholds(POPULATION_THRESHOLDS, population, day, "Population reached {}!")
        )

        max_generation = max(organism.generation for organism in organisms)
        if max_generation > self.max_generation:
            self.max_generation = max_generation
            fired.extend(
                self._check_thresholds(
                    GENERATION_THRESHOLDS, max_generation, day, "Generation {} reached!"
                )
            )

        fired.extend(
            self._check_thresholds(SPECIES_THRESHOLDS, species_count, day, "{} species coexisting!")
        )
        fired.extend(self._check_thresholds(DAY_THRESHOLDS, day, day, "Survived {} days!"))
        return fired

    def _check_trait_records(self, organism: Organism, day: int) -> List[Milestone]:
        traits = organism.traits
        fired = []
        if traits.speed > self.speed_record:
            self.speed_record = traits.speed
            fired.append(
                self._fire(
                    MilestoneType.SPEED_RECORD,
                    day,
                    traits.speed,
                    f"New speed record: {traits.speed}",
                    organism.id,
                )
            )
        if traits.sense_range > self.sense_record:
            self.sense_record = traits.sense_range
            fired.append(
                self._fire(
                    MilestoneType.SENSE_RECORD,
                    day,
                    traits.sense_range,
                    f"New perception record: {traits.sense_range}",
                    organism.id,
                )
            )
        if traits.size > self.size_record:
            self.size_record = traits.size
            fired.append(
                self._fire(
                    MilestoneType.SIZE_RECORD,
                    day,
                    traits.size,
                    f"New size record: {traits.size:.2f}",
                    organism.id,
                )
            )
        if traits.energy_efficiency > self.efficiency_record:
            self.efficiency_record = traits.energy_efficiency
            fired.append(
                self._fire(
                    MilestoneType.EFFICIENCY_RECORD,
                    day,
                    traits.energy_efficiency,
                    f"New efficiency record: {traits.energy_efficiency:.2f}",
                    organism.id,
                )
            )
        if traits.aggression > self.aggression_record:
            self.aggression_record = traits.aggression
            fired.append(
                self._fire(
                    MilestoneType.COMBAT_RECORD,
                    day,
                    traits.aggression,
                    f"New aggression record: {traits.aggression:.2f}",
                    organism.id,
                )
            )
        if traits.defense > self.defense_record:
            self.defense_record = traits.defense
            fired.append(
                self._fire(
                    MilestoneType.COMBAT_RECORD,
                    day,
                    traits.defense,
                    f"New defense record: {traits.defense:.2f}",
                    organism.id,
                )
            )
        return fired

    def _check_thresholds(
        self,
        thresholds: Tuple[Tuple[int, MilestoneType], ...],
        value: int,
        day: int,
        template: str,
    ) -> List[Milestone]:
        fired = []
        for threshold, milestone_type in thresholds:
            if value >= threshold and milestone_type not in self._achieved:
                self._achieved.add(milestone_type)
                fired.append(
                    self._fire(milestone_type, day, float(value), template.format(threshold))
                )
        return fired

    def record_longevity(self, organism: Organism, day: int) -> Optional[Milestone]:
        if organism.age <= self.longevity_record:
            return None
        self.longevity_record = organism.age
        return self._fire(
            MilestoneType.LONGEVITY_RECORD,
            day,
            float(organism.age),
            f"New longevity record: {organism.age} days",
            organism.id,
        )

    def record_mass_extinction(
        self, previous_population: int, new_population: int, day: int
    ) -> Optional[Milestone]:
        if previous_population <= 0:
            return None
        loss = (previous_population - new_population) / previous_population
        if loss < MASS_EXTINCTION_LOSS:
            return None
        return self._fire(
            MilestoneType.MASS_EXTINCTION,
            day,
            loss,
            f"Mass extinction: {int(loss * 100)}% population loss",
        )

    def record_first_speciation(self, day: int, species_id: int) -> Optional[Milestone]:
        if MilestoneType.FIRST_SPECIATION in self._achieved:
            return None
        self._achieved.add(MilestoneType.FIRST_SPECIATION)
        return self._fire(
            MilestoneType.FIRST_SPECIATION, day, 1.0, "First new species emerged!", species_id
        )

    def recent(self, count: int = 5) -> List[Milestone]:
        if count <= 0:
            return []
        return self.milestones[-count:]

    def of_type(self, milestone_type: MilestoneType) -> List[Milestone]:
        return [m for m in self.milestones if m.type is milestone_type]
