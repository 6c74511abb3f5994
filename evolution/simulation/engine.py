"""Simulation engine - the day-cycle orchestrator.

The engine owns every mutable collection of a run (population, food,
obstacles, trackers) and advances them in discrete steps. It is driven
from outside: a caller invokes ``step()`` once per frame and the engine
never blocks, sleeps or spawns threads. Pausing is simply not calling
``step()``.

Design Decisions:
-----------------
1. A single seedable ``random.Random`` is created here and injected into
   every collaborator, so a seed fully determines a run.

2. The day cycle is an explicit MOVEMENT -> EVALUATION -> MOVEMENT state
   machine. EVALUATION is entered and left inside the same step.

3. Statistics are pushed, never pulled: after each step a frozen
   ``SimulationStatistics`` is emitted on the event bus.

4. Obstacle commands mutate state synchronously between steps.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections import defaultdict
from typing import Dict, List, Optional

from evolution.config.simulation_config import GameConfiguration
from evolution.contention import ContentionResolver, capture_distance
from evolution.correlation import CorrelationAnalyzer, TraitCorrelation
from evolution.ecosystem_stats import (
    DailySnapshot,
    DeathCauses,
    OrganismSummary,
    SimulationStatistics,
    SpeciesSummary,
    build_daily_snapshot,
    trait_stats,
)
from evolution.entities import DeathRecord, Obstacle, Organism
from evolution.environment.world import Environment
from evolution.events.event_bus import EventBus
from evolution.events.events import (
    CorrelationDiscoveredEvent,
    FoodClaimedEvent,
    MilestoneAchievedEvent,
    OrganismBornEvent,
    OrganismDiedEvent,
    SpeciesExtinctEvent,
    StatisticsPublishedEvent,
)
from evolution.fitness import FitnessEvaluator
from evolution.genetics.trait import Traits
from evolution.lineage_tracker import LineageTracker
from evolution.math_utils import Vector2, clamp_to_bounds, move_towards
from evolution.milestones import Milestone, RecordTracker
from evolution.palette import SpeciesPalette
from evolution.population import Population
from evolution.reproduction import ReproductionEngine
from evolution.simulation.day_cycle import DayCycle, DayReport
from evolution.speciation import SpeciesRegistry
from evolution.state_machine import DayPhase, create_day_cycle_state_machine

logger = logging.getLogger(__name__)

DEFAULT_FRAME_DT = 1.0 / 60.0


class SimulationEngine:
    """Runs an evolutionary foraging simulation one step at a time.

    Attributes:
        config: Configuration for this run
        rng: The run's only random source
        seed: Seed the rng was created from (None if an rng was injected)
        day: Number of completed days
        population: Live organisms keyed by id
        environment: Food, obstacles and environmental modifiers
        history: One DailySnapshot per day boundary, plus the initial state
    """

    def __init__(
        self,
        config: Optional[GameConfiguration] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        palette: Optional[SpeciesPalette] = None,
        time_scale: float = 1.0,
        setup: bool = True,
    ) -> None:
        """Initialize the simulation engine.

        Args:
            config: Game configuration (defaults to ``GameConfiguration()``)
            seed: Seed for a fresh RNG (ignored when ``rng`` is given)
            rng: Shared random number generator for deterministic runs
            event_bus: Bus that receives published statistics and domain events
            palette: Color allocator for species
            time_scale: Multiplier applied to every frame's delta time
            setup: Build the founding population immediately
        """
        self.config = config or GameConfiguration()
        if rng is not None:
            self.rng: random.Random = rng
            self.seed: Optional[int] = None
        else:
            self.rng = random.Random(seed)
            self.seed = seed

        self.run_id: str = str(uuid.uuid4())
        logger.info("SimulationEngine initialized with run_id=%s seed=%s", self.run_id, self.seed)

        self.event_bus = event_bus or EventBus()
        self.population = Population()
        self.environment = Environment(self.config, rng=self.rng)
        self.contention = ContentionResolver(self.config, rng=self.rng)
        self.reproduction = ReproductionEngine(self.config, rng=self.rng)
        self.species = SpeciesRegistry(self.config, palette or SpeciesPalette())
        self.lineages = LineageTracker()
        self.fitness = FitnessEvaluator(self.config)
        self.records = RecordTracker()
        self.correlations = CorrelationAnalyzer()
        self.phase = create_day_cycle_state_machine()
        self.day_cycle = DayCycle(self)

        self._time_scale = 1.0
        self.time_scale = time_scale

        self._reset_counters()
        self.latest_statistics: Optional[SimulationStatistics] = None
        self.last_day_report: Optional[DayReport] = None

        if setup:
            self.setup()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _reset_counters(self) -> None:
        self.day = 0
        self.phase_elapsed = 0.0
        self.start_of_day_population = 0
        self.births_today = 0
        self.total_births = 0
        self.total_deaths = 0
        self.deaths_today_by_cause: Dict[str, int] = defaultdict(int)
        self.deaths_by_cause: Dict[str, int] = defaultdict(int)
        self.corpse_positions: List[Vector2] = []
        self.history: List[DailySnapshot] = []
        self.pending_milestones: List[Milestone] = []
        self.pending_correlations: List[TraitCorrelation] = []

    def setup(self) -> None:
        """Create the environment layout, founders and day-0 food."""
        self.environment.generate_layout()
        self._create_founders()
        self.environment.spawn_food(self.day)
        self.start_of_day_population = len(self.population)

        self.take_daily_snapshot()
        for milestone in self.records.check_records(
            self.population.organisms(), self.day, self.species.active_count
        ):
            self.queue_milestone(milestone)
        self._flush_pending_events()
        self.publish_statistics()

        logger.info(
            "Simulation ready: %d organisms, %d food, pattern %s",
            len(self.population),
            len(self.environment.foods),
            self.environment.food_pattern.value,
        )

    def reset(self, seed: Optional[int] = None) -> None:
        """Discard the current run and start over, optionally reseeding."""
        if seed is not None:
            self.rng.seed(seed)
            self.seed = seed
        self.population.clear()
        self.environment.reset()
        self.species.reset()
        self.lineages.reset()
        self.records.reset()
        self.correlations.reset()
        self.phase.reset()
        self._reset_counters()
        self.latest_statistics = None
        self.last_day_report = None
        self.setup()

    def _create_founders(self) -> None:
        config = self.config
        traits = Traits.from_initial(config.initial_traits, config.traits)
        founding_species = None
        for _ in range(max(0, config.initial_population)):
            organism = Organism(
                id=self.population.generate_id(),
                traits=traits,
                position=Vector2(
                    self.rng.uniform(0, config.world.width),
                    self.rng.uniform(0, config.world.height),
                ),
                energy=config.energy.max_energy,
                max_energy=config.energy.max_energy,
            )
            if founding_species is None:
                founding_species = self.species.found_species(organism, self.day)
            else:
                organism.species_id = founding_species.id
                founding_species.population += 1
            self.population.add(organism)
            self.lineages.register_organism(organism, None, self.day)
            self.event_bus.emit(
                OrganismBornEvent(organism.id, None, organism.species_id, 0, self.day)
            )

    # ------------------------------------------------------------------
    # Time scale
    # ------------------------------------------------------------------

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        """Set the simulated-seconds multiplier. Negative values clamp to 0, which freezes time."""
        if value < 0:
            logger.warning("Negative time_scale %s clamped to 0", value)
        self._time_scale = max(0.0, float(value))

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, frame_dt: float = DEFAULT_FRAME_DT) -> bool:
        """Advance the simulation by one frame.

        Args:
            frame_dt: Wall-clock duration of the frame in seconds

        Returns:
            True if this step ended a day
        """
        dt = frame_dt * self._time_scale
        self.phase_elapsed += dt
        self.environment.day_night.update(dt)

        self._move_organisms(dt)
        hazard_victims = self._hazard_victims()
        for organism in hazard_victims:
            self.kill(organism, "hazard")
        if hazard_victims:
            self.recount_species(self.day)

        self._apply_temperature(dt)
        self._resolve_food_captures()

        if self.should_end_day():
            self.end_day()
            return True

        self.publish_statistics()
        return False

    def _acquire_target(self, organism: Organism) -> None:
        if organism.target_food_id is not None:
            food = self.environment.foods.get(organism.target_food_id)
            if food is not None and not food.claimed:
                return
            organism.target_food_id = None

        food = self.environment.nearest_unclaimed_food(
            organism.position, self.environment.effective_sense_range(organism)
        )
        if food is not None:
            organism.target_food_id = food.id

    def _move_organisms(self, dt: float) -> None:
        """Move every hungry organism toward its target."""
        config = self.config
        environment = self.environment

        for organism in self.population:
            if organism.has_food_today or organism.is_exhausted:
                continue
            self._acquire_target(organism)
            if organism.target_food_id is None:
                continue

            target = environment.foods[organism.target_food_id]
            speed = organism.effective_speed(config) * environment.movement_multiplier_at(
                organism.position
            )
            old_position = organism.position
            new_position = clamp_to_bounds(
                move_towards(old_position, target.position, speed * dt),
                environment.width,
                environment.height,
            )

            obstacle = environment.colliding_obstacle(
                new_position, organism.effective_radius(config)
            )
            if obstacle is not None and obstacle.kind.blocks_movement:
                organism.target_food_id = None
                continue

            distance = old_position.distance_to(new_position)
            organism.position = new_position
            if distance > 0:
                organism.consume_energy(
                    distance
                    * config.energy.energy_cost_per_move
                    * organism.traits.metabolism
                    / organism.traits.energy_efficiency
                )

    def _hazard_victims(self) -> List[Organism]:
        """Live organisms touching a hazard."""
        victims = []
        for organism in self.population:
            obstacle = self.environment.colliding_obstacle(
                organism.position, organism.effective_radius(self.config)
            )
            if obstacle is not None and obstacle.kind.is_lethal:
                victims.append(organism)
        return victims

    def _apply_temperature(self, dt: float) -> None:
        for organism in self.population:
            if organism.is_exhausted:
                continue
            effect = self.environment.temperature_effect(organism, dt)
            if effect.lethal:
                organism.energy = 0.0
                logger.debug(
                    "Organism %d succumbed to %.1f degrees", organism.id, effect.temperature
                )
            elif effect.energy_cost > 0:
                organism.consume_energy(effect.energy_cost)

    def _resolve_food_captures(self) -> None:
        config = self.config
        for organism in self.population:
            if organism.has_food_today or organism.is_exhausted or organism.target_food_id is None:
                continue
            food = self.environment.foods.get(organism.target_food_id)
            if food is None or food.claimed:
                organism.target_food_id = None
                continue
            if organism.position.distance_to(food.position) >= capture_distance(organism, config):
                continue

            result = self.contention.resolve(organism, food, self.population)
            for other in self.population:
                if other.target_food_id == food.id:
                    other.target_food_id = None
            self.event_bus.emit(
                FoodClaimedEvent(food.id, result.winner_id, len(result.contestant_ids), self.day)
            )

    def all_organisms_fed(self) -> bool:
        return len(self.population) > 0 and all(o.has_food_today for o in self.population)

    def should_end_day(self) -> bool:
        if self.environment.all_food_claimed() or self.all_organisms_fed():
            return True
        limit = self.config.movement_phase_duration
        return limit is not None and self.phase_elapsed >= limit

    def end_day(self) -> DayReport:
        """Run the evaluation phase and start the next day's movement phase."""
        self.phase.transition(DayPhase.EVALUATION, day=self.day, reason="day complete")
        report = self.day_cycle.run()
        self.phase.transition(DayPhase.MOVEMENT, day=self.day, reason="new day")
        self.last_day_report = report

        self._flush_pending_events()
        self.publish_statistics()

        self.phase_elapsed = 0.0
        self.start_of_day_population = len(self.population)
        self.births_today = 0
        self.deaths_today_by_cause = defaultdict(int)
        return report

    def force_next_day(self) -> DayReport:
        """End the current day immediately, whatever the food situation."""
        logger.info("Forcing end of day %d", self.day)
        return self.end_day()

    # ------------------------------------------------------------------
    # Population bookkeeping (also used by DayCycle)
    # ------------------------------------------------------------------

    def record_birth(self) -> None:
        self.births_today += 1
        self.total_births += 1

    def kill(self, organism: Organism, cause: str) -> DeathRecord:
        """Remove ``organism`` and record why it died.

        Species counts are not refreshed here; call ``recount_species``
        once a batch of deaths has been processed.
        """
        self.population.remove(organism.id)
        self.lineages.record_death(organism.id, self.day)
        self.deaths_today_by_cause[cause] += 1
        self.deaths_by_cause[cause] += 1
        self.total_deaths += 1
        self.event_bus.emit(OrganismDiedEvent(organism.id, cause, organism.age, self.day))
        logger.debug("Organism %d died of %s at age %d", organism.id, cause, organism.age)
        return DeathRecord(organism.id, cause, self.day, organism.age, organism.position.copy())

    def recount_species(self, day: int) -> None:
        for species in self.species.recompute_populations(self.population, day):
            self.event_bus.emit(SpeciesExtinctEvent(species.id, species.name, day))

    @property
    def deaths_today(self) -> int:
        return sum(self.deaths_today_by_cause.values())

    # ------------------------------------------------------------------
    # Obstacle commands
    # ------------------------------------------------------------------

    def add_obstacle(self, obstacle: Obstacle) -> int:
        obstacle_id = self.environment.add_obstacle(obstacle)
        logger.debug("Added %s obstacle %d", obstacle.kind.value, obstacle_id)
        return obstacle_id

    def remove_obstacle(self, obstacle_id: int) -> bool:
        return self.environment.remove_obstacle(obstacle_id)

    def clear_obstacles(self) -> None:
        self.environment.clear_obstacles()

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def queue_milestone(self, milestone: Milestone) -> None:
        self.pending_milestones.append(milestone)

    def queue_correlation(self, correlation: TraitCorrelation) -> None:
        self.pending_correlations.append(correlation)

    def _flush_pending_events(self) -> None:
        for milestone in self.pending_milestones:
            self.event_bus.emit(MilestoneAchievedEvent(milestone))
        for correlation in self.pending_correlations:
            self.event_bus.emit(CorrelationDiscoveredEvent(correlation))

    def take_daily_snapshot(self) -> DailySnapshot:
        snapshot = build_daily_snapshot(
            self.day,
            self.population.organisms(),
            self.births_today,
            self.deaths_today,
            self.species.active_count,
        )
        self.history.append(snapshot)
        return snapshot

    def build_statistics(self) -> SimulationStatistics:
        organisms = self.population.organisms()
        pattern = self.environment.food_pattern
        ranked = self.fitness.rank(organisms, pattern)
        elite = self.fitness.elite_ids(organisms, pattern)
        fitness_by_id = {organism.id: score for organism, score in ranked}

        return SimulationStatistics(
            day=self.day,
            phase=self.phase.state.value,
            population=len(organisms),
            births_today=self.births_today,
            deaths_today=self.deaths_today,
            total_births=self.total_births,
            total_deaths=self.total_deaths,
            deaths_today_by_cause=DeathCauses.from_counts(self.deaths_today_by_cause),
            deaths_by_cause=DeathCauses.from_counts(self.deaths_by_cause),
            trait_stats=trait_stats(organisms),
            organisms=tuple(
                OrganismSummary.from_organism(o, fitness_by_id.get(o.id, 0.0), o.id in elite)
                for o in organisms
            ),
            species=tuple(
                SpeciesSummary(
                    s.id, s.name, s.color, s.population, s.founded_on_day, s.extinct_on_day
                )
                for s in self.species.active_species()
            ),
            history=tuple(self.history),
            new_milestones=tuple(self.pending_milestones),
            new_correlations=tuple(self.pending_correlations),
            food_remaining=len(self.environment.unclaimed_food()),
            food_pattern=pattern.value,
            season=self.environment.season.label,
            weather=self.environment.weather.current.label,
            is_night=self.environment.day_night.is_night(),
            time_scale=self._time_scale,
            max_generation=max((o.generation for o in organisms), default=0),
        )

    def publish_statistics(self) -> SimulationStatistics:
        """Build a fresh snapshot and push it to subscribers.

        Newly fired milestones and correlations are delivered exactly once,
        in the first snapshot published after they fire.
        """
        statistics = self.build_statistics()
        self.latest_statistics = statistics
        self.pending_milestones = []
        self.pending_correlations = []
        self.event_bus.emit(StatisticsPublishedEvent(statistics))
        return statistics

    # ------------------------------------------------------------------
    # Headless driver
    # ------------------------------------------------------------------

    def run_days(
        self, days: int, frame_dt: float = DEFAULT_FRAME_DT, max_steps_per_day: int = 100_000
    ) -> int:
        """Step until ``days`` more days complete or the population dies out.

        Returns:
            Number of days actually completed
        """
        completed = 0
        while completed < days and len(self.population) > 0:
            steps = 0
            while not self.step(frame_dt):
                steps += 1
                if steps >= max_steps_per_day:
                    self.force_next_day()
                    break
            completed += 1
        return completed
