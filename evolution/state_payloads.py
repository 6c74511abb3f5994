"""Serializable payloads for published simulation statistics.

The engine publishes frozen dataclasses. These pydantic models are the
wire/export shape of the same data, validated on construction and
dumped to JSON with orjson.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import orjson
from pydantic import BaseModel

from evolution.correlation import TraitCorrelation
from evolution.ecosystem_stats import (
    DailySnapshot,
    DeathCauses,
    OrganismSummary,
    SimulationStatistics,
    SpeciesSummary,
)
from evolution.milestones import Milestone
from evolution.statistics_utils import DescriptiveStats


class TraitStatsPayload(BaseModel):
    mean: float
    min: float
    max: float


class DeathCausesPayload(BaseModel):
    starvation: int = 0
    old_age: int = 0
    low_energy: int = 0
    hazard: int = 0


class OrganismPayload(BaseModel):
    """Public fields of one live organism."""

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
    traits: Dict[str, float]


class SpeciesPayload(BaseModel):
    id: int
    name: str
    color: str
    population: int
    founded_on_day: int
    extinct_on_day: Optional[int] = None


class DailySnapshotPayload(BaseModel):
    day: int
    population: int
    births: int
    deaths: int
    species_count: int
    avg_speed: float
    min_speed: float
    max_speed: float
    trait_means: Dict[str, float] = {}


class MilestonePayload(BaseModel):
    type: str
    day: int
    value: float
    description: str
    organism_id: Optional[int] = None


class CorrelationPayload(BaseModel):
    trait_a: str
    trait_b: str
    coefficient: float
    sample_size: int
    day_detected: int
    strength: str


class StatisticsPayload(BaseModel):
    """Complete statistics message for one published snapshot."""

    day: int
    phase: str
    population: int
    births_today: int
    deaths_today: int
    total_births: int
    total_deaths: int
    deaths_today_by_cause: DeathCausesPayload
    deaths_by_cause: DeathCausesPayload
    trait_stats: Dict[str, TraitStatsPayload]
    organisms: List[OrganismPayload]
    species: List[SpeciesPayload]
    history: List[DailySnapshotPayload]
    new_milestones: List[MilestonePayload] = []
    new_correlations: List[CorrelationPayload] = []
    food_remaining: int = 0
    food_pattern: str = "random"
    season: str = "spring"
    weather: str = "clear"
    is_night: bool = False
    time_scale: float = 1.0
    max_generation: int = 0


def _trait_stats(stats: DescriptiveStats) -> TraitStatsPayload:
    return TraitStatsPayload(mean=stats.mean, min=stats.min, max=stats.max)


def _death_causes(causes: DeathCauses) -> DeathCausesPayload:
    return DeathCausesPayload(
        starvation=causes.starvation,
        old_age=causes.old_age,
        low_energy=causes.low_energy,
        hazard=causes.hazard,
    )


def _organism(summary: OrganismSummary) -> OrganismPayload:
    return OrganismPayload(
        id=summary.id,
        x=summary.x,
        y=summary.y,
        energy=summary.energy,
        age=summary.age,
        generation=summary.generation,
        species_id=summary.species_id,
        has_food_today=summary.has_food_today,
        is_elite=summary.is_elite,
        fitness=summary.fitness,
        traits=dict(summary.traits),
    )


def _species(summary: SpeciesSummary) -> SpeciesPayload:
    return SpeciesPayload(
        id=summary.id,
        name=summary.name,
        color=summary.color,
        population=summary.population,
        founded_on_day=summary.founded_on_day,
        extinct_on_day=summary.extinct_on_day,
    )


def _snapshot(snapshot: DailySnapshot) -> DailySnapshotPayload:
    return DailySnapshotPayload(
        day=snapshot.day,
        population=snapshot.population,
        births=snapshot.births,
        deaths=snapshot.deaths,
        species_count=snapshot.species_count,
        avg_speed=snapshot.avg_speed,
        min_speed=snapshot.min_speed,
        max_speed=snapshot.max_speed,
        trait_means=dict(snapshot.trait_means),
    )


def _milestone(milestone: Milestone) -> MilestonePayload:
    return MilestonePayload(
        type=milestone.type.value,
        day=milestone.day,
        value=milestone.value,
        description=milestone.description,
        organism_id=milestone.organism_id,
    )


def _correlation(correlation: TraitCorrelation) -> CorrelationPayload:
    return CorrelationPayload(
        trait_a=correlation.trait_a,
        trait_b=correlation.trait_b,
        coefficient=correlation.coefficient,
        sample_size=correlation.sample_size,
        day_detected=correlation.day_detected,
        strength=correlation.strength,
    )


def statistics_to_payload(stats: SimulationStatistics) -> StatisticsPayload:
    return StatisticsPayload(
        day=stats.day,
        phase=stats.phase,
        population=stats.population,
        births_today=stats.births_today,
        deaths_today=stats.deaths_today,
        total_births=stats.total_births,
        total_deaths=stats.total_deaths,
        deaths_today_by_cause=_death_causes(stats.deaths_today_by_cause),
        deaths_by_cause=_death_causes(stats.deaths_by_cause),
        trait_stats={name: _trait_stats(s) for name, s in stats.trait_stats},
        organisms=[_organism(o) for o in stats.organisms],
        species=[_species(s) for s in stats.species],
        history=[_snapshot(s) for s in stats.history],
        new_milestones=[_milestone(m) for m in stats.new_milestones],
        new_correlations=[_correlation(c) for c in stats.new_correlations],
        food_remaining=stats.food_remaining,
        food_pattern=stats.food_pattern,
        season=stats.season,
        weather=stats.weather,
        is_night=stats.is_night,
        time_scale=stats.time_scale,
        max_generation=stats.max_generation,
    )


def dumps_statistics(stats: SimulationStatistics) -> bytes:
    """Serialize a statistics snapshot to JSON bytes."""
    return orjson.dumps(statistics_to_payload(stats).model_dump())
