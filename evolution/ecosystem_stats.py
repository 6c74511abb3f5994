"""Immutable statistics snapshots handed to external consumers.

Snapshots are frozen dataclasses built from tuples. Consumers receive
them through the event bus and cannot mutate engine state through them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from evolution.correlation import TraitCorrelation
from evolution.entities import Organism
from evolution.genetics.trait import TRAIT_NAMES
from evolution.milestones import Milestone
from evolution.statistics_utils import DescriptiveStats, compute_stats

DEATH_CAUSES: Tuple[str, ...] = ("starvation", "old_age", "low_energy", "hazard")


@dataclass(frozen=True)
class DeathCauses:
    starvation: int = 0
    old_age: int = 0
    low_energy: int = 0
    hazard: int = 0

    @property
    def total(self) -> int:
        return self.starvation + self.old_age + self.low_energy + self.hazard

    @classmethod
    def from_counts(cls, counts: Dict[str, int]) -> "DeathCauses":
        return cls(**{cause: counts.get(cause, 0) for cause in DEATH_CAUSES})


@dataclass(frozen=True)
class OrganismSummary:
    id: int
    x: float
    y: float
    energy: float
    age: int
    generation: int
    species_id: int
    has_food_today: bool
    is_elite: bool
    fitness: float
    traits: Tuple[Tuple[str, float], ...]

    @classmethod
    def from_organism(cls, organism: Organism, fitness: float, is_elite: bool) -> "OrganismSummary":
        return cls(
            id=organism.id,
            x=organism.position.x,
            y=organism.position.y,
            energy=organism.energy,
            age=organism.age,
            generation=organism.generation,
            species_id=organism.species_id,
            has_food_today=organism.has_food_today,
            is_elite=is_elite,
            fitness=fitness,
            traits=tuple(organism.traits.as_dict().items()),
        )


@dataclass(frozen=True)
class SpeciesSummary:
    id: int
    name: str
    color: str
    population: int
    founded_on_day: int
    extinct_on_day: Optional[int] = None


@dataclass(frozen=True)
class DailySnapshot:
    """End-of-day population summary kept in the run history."""

    day: int
    population: int
    births: int
    deaths: int
    species_count: int
    avg_speed: float
    min_speed: float
    max_speed: float
    trait_means: Tuple[Tuple[str, float], ...] = ()


def trait_stats(organisms: Iterable[Organism]) -> Tuple[Tuple[str, DescriptiveStats], ...]:
    """Mean/min/max per trait; zeros for an empty population."""
    organisms = list(organisms)
    return tuple(
        (name, compute_stats([o.traits.get(name) for o in organisms])) for name in TRAIT_NAMES
    )


def build_daily_snapshot(
    day: int, organisms: Iterable[Organism], births: int, deaths: int, species_count: int
) -> DailySnapshot:
    stats = dict(trait_stats(organisms))
    speed = stats["speed"]
    return DailySnapshot(
        day=day,
        population=speed.count,
        births=births,
        deaths=deaths,
        species_count=species_count,
        avg_speed=speed.mean,
        min_speed=speed.min,
        max_speed=speed.max,
        trait_means=tuple((name, s.mean) for name, s in stats.items()),
    )


@dataclass(frozen=True)
class SimulationStatistics:
    """Everything an observer needs to render the current state of a run."""

    day: int
    phase: str
    population: int
    births_today: int
    deaths_today: int
    total_births: int
    total_deaths: int
    deaths_today_by_cause: DeathCauses
    deaths_by_cause: DeathCauses
    trait_stats: Tuple[Tuple[str, DescriptiveStats], ...]
    organisms: Tuple[OrganismSummary, ...]
    species: Tuple[SpeciesSummary, ...]
    history: Tuple[DailySnapshot, ...]
    new_milestones: Tuple[Milestone, ...] = ()
    new_correlations: Tuple[TraitCorrelation, ...] = ()
    food_remaining: int = 0
    food_pattern: str = "random"
    season: str = "spring"
    weather: str = "clear"
    is_night: bool = False
    time_scale: float = 1.0
    max_generation: int = 0

    def stats_for(self, trait: str) -> DescriptiveStats:
        return dict(self.trait_stats).get(trait, DescriptiveStats())
