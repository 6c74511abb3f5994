"""Day-boundary evaluation.

Runs once per day, inside the EVALUATION phase, and turns the outcome of
the movement phase into population change:

1. Every organism ages one day and pays its flat metabolism cost.
2. Every fed organism may reproduce; each child is assigned a species
   and registered with its lineage.
3. Organisms that existed at the start of the evaluation die if they
   are too old, out of energy, or did not eat. Newborns are exempt.
4. Bookkeeping: species recount, mass-extinction check, day counter,
   season and weather, next day's food, transient state reset.
5. Analytics: daily snapshot, lineage dominance, records, correlations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from evolution.entities import DeathRecord, Organism
from evolution.events.events import (
    DayEndedEvent,
    OrganismBornEvent,
    SpeciesFoundedEvent,
)

if TYPE_CHECKING:
    from evolution.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


def death_cause(organism: Organism) -> Optional[str]:
    """Why ``organism`` dies at the day boundary, or None if it survives."""
    if organism.age >= organism.traits.max_age:
        return "old_age"
    if organism.energy <= 0:
        return "low_energy"
    if not organism.has_food_today:
        return "starvation"
    return None


@dataclass(frozen=True)
class DayReport:
    """Outcome of one evaluation phase."""

    day: int  # the day that just ended
    start_population: int
    births: int
    deaths: Tuple[DeathRecord, ...]
    end_population: int


class DayCycle:
    """Executes the evaluation phase for a SimulationEngine."""

    def __init__(self, engine: "SimulationEngine") -> None:
        self._engine = engine

    def run(self) -> DayReport:
        engine = self._engine
        config = engine.config
        day = engine.day
        start_population = engine.start_of_day_population

        existing = engine.population.organisms()

        for organism in existing:
            organism.age += 1
            organism.consume_energy(
                config.energy.metabolism_energy_cost * organism.traits.metabolism
            )

        births = self._reproduce(existing, day)
        deaths = self._process_deaths(existing, day)

        engine.recount_species(day)

        survivors = len(engine.population)
        milestone = engine.records.record_mass_extinction(start_population, survivors, day)
        if milestone is not None:
            engine.queue_milestone(milestone)

        report = DayReport(
            day=day,
            start_population=start_population,
            births=births,
            deaths=tuple(deaths),
            end_population=survivors,
        )

        self._start_next_day()
        self._run_analytics(report)
        return report

    def _reproduce(self, existing: List[Organism], day: int) -> int:
        engine = self._engine
        births = 0
        for parent in existing:
            if not engine.reproduction.should_reproduce(parent):
                continue

            child = engine.reproduction.create_offspring(
                parent, engine.population.generate_id(), day
            )
            new_species = engine.species.assign_offspring(child, parent, day)
            engine.population.add(child)
            engine.lineages.register_organism(child, parent.id, day)
            engine.record_birth()
            births += 1

            engine.event_bus.emit(
                OrganismBornEvent(child.id, parent.id, child.species_id, child.generation, day)
            )
            if new_species is not None:
                engine.event_bus.emit(SpeciesFoundedEvent(new_species.id, new_species.name, day))
                milestone = engine.records.record_first_speciation(day, new_species.id)
                if milestone is not None:
                    engine.queue_milestone(milestone)
        return births

    def _process_deaths(self, existing: List[Organism], day: int) -> List[DeathRecord]:
        engine = self._engine
        records = []
        corpse_positions = []
        for organism in existing:
            cause = death_cause(organism)
            if cause is None:
                continue
            records.append(engine.kill(organism, cause))
            corpse_positions.append(organism.position.copy())

            milestone = engine.records.record_longevity(organism, day)
            if milestone is not None:
                engine.queue_milestone(milestone)

        engine.corpse_positions = corpse_positions
        return records

    def _start_next_day(self) -> None:
        engine = self._engine
        engine.day += 1
        environment = engine.environment
        environment.update_season(engine.day)
        environment.weather.advance_day()
        environment.spawn_food(engine.day, engine.corpse_positions)
        engine.corpse_positions = []

        for organism in engine.population:
            organism.reset_daily_state()

    def _run_analytics(self, report: DayReport) -> None:
        engine = self._engine
        day = engine.day
        organisms = engine.population.organisms()

        engine.take_daily_snapshot()
        engine.lineages.update_dominance_scores(len(organisms), day)

        for milestone in engine.records.check_records(organisms, day, engine.species.active_count):
            engine.queue_milestone(milestone)
        for correlation in engine.correlations.analyze(organisms, day):
            engine.queue_correlation(correlation)

        engine.event_bus.emit(
            DayEndedEvent(
                day=report.day,
                population=report.end_population,
                births=report.births,
                deaths=engine.deaths_today,
            )
        )
        logger.info(
            "Day %d ended: population %d -> %d, births %d, deaths %d",
            report.day,
            report.start_population,
            report.end_population,
            report.births,
            engine.deaths_today,
        )
