"""Integration tests for the step-driven simulation engine."""

import pytest

from evolution.entities import Obstacle, ObstacleKind
from evolution.events import (
    DayEndedEvent,
    FoodClaimedEvent,
    OrganismBornEvent,
    SpeciesFoundedEvent,
    StatisticsPublishedEvent,
)
from evolution.environment.temperature import TemperatureZone
from evolution.math_utils import Vector2
from evolution.simulation import SimulationEngine
from evolution.state_machine import DayPhase

MAX_STEPS = 10_000


def _run_one_day(engine, frame_dt=0.1):
    for _ in range(MAX_STEPS):
        if engine.step(frame_dt):
            return engine.last_day_report
    raise AssertionError("day never ended")


def _lone_forager(quiet_config):
    """Engine with one organism at (300, 300) and one food item at (400, 300)."""
    quiet_config.initial_population = 1
    engine = SimulationEngine(quiet_config, seed=1)
    organism = engine.population.organisms()[0]
    organism.position = Vector2(300, 300)
    engine.environment.foods.clear()
    engine.environment.add_food(Vector2(400, 300))
    return engine, organism


class TestSetup:
    def test_founders(self, simulation_engine):
        organisms = simulation_engine.population.organisms()
        assert len(organisms) == 10
        assert all(o.generation == 0 and o.parent_id is None for o in organisms)
        assert {o.species_id for o in organisms} == {organisms[0].id}
        assert simulation_engine.species.get(organisms[0].id).population == 10

    def test_initial_state(self, simulation_engine):
        assert simulation_engine.day == 0
        assert simulation_engine.phase.state is DayPhase.MOVEMENT
        assert len(simulation_engine.environment.foods) > 0
        assert [s.day for s in simulation_engine.history] == [0]
        assert simulation_engine.latest_statistics.population == 10

    def test_first_statistics_carry_initial_milestones(self, simulation_engine):
        assert simulation_engine.latest_statistics.new_milestones
        simulation_engine.step()
        assert simulation_engine.latest_statistics.new_milestones == ()

    def test_negative_time_scale_is_clamped_to_zero(self):
        assert SimulationEngine(seed=1, time_scale=-1.0).time_scale == 0.0

    def test_zero_time_scale_freezes_movement(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        engine.time_scale = 0

        for _ in range(5):
            assert not engine.step(0.1)

        assert organism.position == Vector2(300, 300)
        assert engine.phase_elapsed == 0.0


class TestDayCycle:
    def test_fed_survive_and_unfed_starve(self, quiet_config):
        engine = SimulationEngine(quiet_config, seed=3)
        fed_ids = set()
        born_ids = set()
        engine.event_bus.subscribe(FoodClaimedEvent, lambda e: fed_ids.add(e.organism_id))
        engine.event_bus.subscribe(OrganismBornEvent, lambda e: born_ids.add(e.organism_id))
        founders = set(engine.population.ids())

        report = _run_one_day(engine)

        dead_ids = {record.organism_id for record in report.deaths}
        assert dead_ids == founders - fed_ids
        assert all(record.cause == "starvation" for record in report.deaths)
        assert set(engine.population.ids()) == fed_ids | born_ids
        assert report.end_population == len(fed_ids) + report.births
        assert len(fed_ids) <= quiet_config.food.food_per_day

    def test_day_ends_when_all_food_is_eaten(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        report = _run_one_day(engine)
        assert report.deaths == ()
        assert engine.day == 1
        assert organism.id in engine.population
        assert organism.age == 1

    def test_stalled_day_ends_at_time_limit(self, quiet_config):
        quiet_config.movement_phase_duration = 2.0
        engine, _ = _lone_forager(quiet_config)
        engine.environment.foods.clear()
        engine.environment.add_food(Vector2(790, 590))

        steps = 0
        while not engine.step(0.1):
            steps += 1
        assert 18 <= steps <= 20
        assert engine.deaths_by_cause["starvation"] == 1

    def test_force_next_day(self, simulation_engine):
        report = simulation_engine.force_next_day()
        assert report.day == 0
        assert simulation_engine.day == 1
        assert simulation_engine.phase.state is DayPhase.MOVEMENT
        assert [s.day for s in simulation_engine.history] == [0, 1]

    def test_day_ended_event(self, simulation_engine):
        ended = []
        simulation_engine.event_bus.subscribe(DayEndedEvent, ended.append)
        report = simulation_engine.force_next_day()
        assert ended == [
            DayEndedEvent(0, report.end_population, report.births, len(report.deaths))
        ]

    def test_old_age_is_reported_first(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        organism.traits = organism.traits.replace(max_age=1)
        report = _run_one_day(engine)
        assert [r.cause for r in report.deaths] == ["old_age"]

    def test_lethal_heat_kills_a_fed_organism(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        engine.environment.temperature_zones.append(
            TemperatureZone(Vector2(300, 300), radius=50, temperature=200)
        )
        organism.has_food_today = True

        assert engine.step(0.1)

        assert [(r.organism_id, r.cause) for r in engine.last_day_report.deaths] == [
            (organism.id, "low_energy")
        ]
        assert organism.id not in engine.population
        assert engine.deaths_by_cause["low_energy"] == 1

    def test_divergent_offspring_founds_species_on_birth_day(self, quiet_config, monkeypatch):
        engine, parent = _lone_forager(quiet_config)
        parent.has_food_today = True
        create_offspring = engine.reproduction.create_offspring

        def divergent_offspring(organism, child_id, day):
            child = create_offspring(organism, child_id, day)
            child.traits = organism.traits.replace(aggression=organism.traits.aggression + 0.3)
            return child

        monkeypatch.setattr(engine.reproduction, "should_reproduce", lambda organism: True)
        monkeypatch.setattr(engine.reproduction, "create_offspring", divergent_offspring)
        founded = []
        engine.event_bus.subscribe(SpeciesFoundedEvent, founded.append)

        report = engine.force_next_day()

        assert report.births == 1
        child = next(o for o in engine.population if o.id != parent.id)
        species = engine.species.get(child.id)
        assert child.species_id == child.id
        assert species.population == 1
        assert species.founded_on_day == report.day
        assert engine.species.get(parent.species_id).population == 1
        assert [e.species_id for e in founded] == [child.id]
        summaries = {s.id: s.population for s in engine.latest_statistics.species}
        assert summaries == {parent.species_id: 1, child.id: 1}


class TestInvariants:
    @pytest.fixture
    def evolved(self):
        engine = SimulationEngine(seed=11)
        engine.run_days(8)
        return engine

    def test_species_populations_match_live_organisms(self, evolved):
        active = {s.id: s.population for s in evolved.species.active_species()}
        assert sum(active.values()) == len(evolved.population)
        assert evolved.population.by_species() == {k: v for k, v in active.items() if v}
        for species in evolved.species.all_species():
            if species.is_extinct:
                assert species.population == 0

    def test_lineages_hold_only_living_organisms(self, evolved):
        live = set(evolved.population.ids())
        for lineage in evolved.lineages.all_lineages():
            assert lineage.current_descendants <= live

    def test_traits_stay_in_bounds(self, evolved):
        config = evolved.config
        for organism in evolved.population:
            for name, value in organism.traits.as_dict().items():
                bounds = config.traits.bounds_for(name)
                assert bounds.min_value <= value <= bounds.max_value

    def test_history_has_one_snapshot_per_day(self, evolved):
        assert [s.day for s in evolved.history] == list(range(evolved.day + 1))

    def test_seeded_runs_are_reproducible(self):
        first = SimulationEngine(seed=5)
        second = SimulationEngine(seed=5)
        first.run_days(4)
        second.run_days(4)
        assert first.latest_statistics.organisms == second.latest_statistics.organisms
        assert first.history == second.history


class TestObstacles:
    def test_obstacle_commands(self, simulation_engine):
        obstacle_id = simulation_engine.add_obstacle(
            Obstacle(ObstacleKind.ROCK, Vector2(100, 100))
        )
        assert obstacle_id in simulation_engine.environment.obstacles
        assert simulation_engine.remove_obstacle(obstacle_id)
        assert not simulation_engine.remove_obstacle(obstacle_id)
        simulation_engine.add_obstacle(Obstacle(ObstacleKind.WALL, Vector2(10, 10)))
        simulation_engine.clear_obstacles()
        assert simulation_engine.environment.obstacles == {}

    def test_hazard_kills_on_contact(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        engine.add_obstacle(Obstacle(ObstacleKind.HAZARD, Vector2(305, 300)))

        assert not engine.step(0.1)

        assert organism.id not in engine.population
        assert engine.deaths_by_cause["hazard"] == 1
        assert engine.species.active_count == 0
        assert engine.latest_statistics.deaths_today_by_cause.hazard == 1

    def test_hazard_kills_idle_organism(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        engine.environment.foods.clear()
        engine.environment.add_food(Vector2(790, 590))
        engine.add_obstacle(Obstacle(ObstacleKind.HAZARD, Vector2(300, 300)))

        assert not engine.step(0.1)

        assert organism.id not in engine.population
        assert engine.deaths_by_cause["hazard"] == 1

    def test_hazard_kills_fed_organism(self, quiet_config):
        quiet_config.initial_population = 2
        engine = SimulationEngine(quiet_config, seed=1)
        fed, hungry = engine.population.organisms()
        fed.position = Vector2(300, 300)
        fed.has_food_today = True
        hungry.position = Vector2(600, 500)
        engine.environment.foods.clear()
        engine.environment.add_food(Vector2(10, 10))
        engine.add_obstacle(Obstacle(ObstacleKind.HAZARD, Vector2(300, 300)))

        engine.step(0.1)

        assert fed.id not in engine.population
        assert hungry.id in engine.population
        assert engine.deaths_by_cause["hazard"] == 1

    def test_wall_blocks_movement(self, quiet_config):
        engine, organism = _lone_forager(quiet_config)
        engine.add_obstacle(Obstacle(ObstacleKind.WALL, Vector2(305, 300), width=10, height=100))

        engine.step(0.1)

        assert organism.position == Vector2(300, 300)
        assert organism.target_food_id is None
        assert organism.energy == organism.max_energy


class TestStatistics:
    def test_statistics_are_published_every_step(self, simulation_engine):
        published = []
        simulation_engine.event_bus.subscribe(StatisticsPublishedEvent, published.append)
        simulation_engine.step()
        simulation_engine.step()
        assert len(published) == 2
        assert published[-1].statistics is simulation_engine.latest_statistics

    def test_statistics_summary(self, simulation_engine):
        stats = simulation_engine.build_statistics()
        assert stats.population == len(stats.organisms) == 10
        assert stats.stats_for("speed").mean == 10
        assert sum(o.is_elite for o in stats.organisms) == 2
        assert stats.phase == "movement"
        assert stats.food_pattern == "random"

    def test_reset_starts_a_new_run(self, simulation_engine):
        simulation_engine.run_days(3)
        simulation_engine.reset(seed=9)
        assert simulation_engine.day == 0
        assert len(simulation_engine.population) == 10
        assert simulation_engine.total_births == 0
        assert [s.day for s in simulation_engine.history] == [0]
        assert sorted(simulation_engine.population.ids()) == list(range(1, 11))
