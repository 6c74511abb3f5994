"""Domain events emitted by the simulation engine.

All events are frozen so a handler cannot alter what later handlers see.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from evolution.correlation import TraitCorrelation
    from evolution.ecosystem_stats import SimulationStatistics
    from evolution.milestones import Milestone


@dataclass(frozen=True)
class OrganismBornEvent:
    organism_id: int
    parent_id: Optional[int]
    species_id: int
    generation: int
    day: int


@dataclass(frozen=True)
class OrganismDiedEvent:
    organism_id: int
    cause: str  # 'starvation', 'old_age', 'low_energy', 'hazard'
    age: int
    day: int


@dataclass(frozen=True)
class FoodClaimedEvent:
    food_id: int
    organism_id: int
    contestants: int
    day: int


@dataclass(frozen=True)
class SpeciesFoundedEvent:
    species_id: int
    name: str
    day: int


@dataclass(frozen=True)
class SpeciesExtinctEvent:
    species_id: int
    name: str
    day: int


@dataclass(frozen=True)
class MilestoneAchievedEvent:
    milestone: "Milestone"


@dataclass(frozen=True)
class CorrelationDiscoveredEvent:
    correlation: "TraitCorrelation"


@dataclass(frozen=True)
class DayEndedEvent:
    day: int
    population: int
    births: int
    deaths: int


@dataclass(frozen=True)
class StatisticsPublishedEvent:
    statistics: "SimulationStatistics"
