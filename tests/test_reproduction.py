"""Tests for reproduction probability and offspring creation."""

import pytest

from evolution.reproduction import ReproductionEngine, reproduction_chance
from evolution.util.rng import MissingRNGError


def test_reproduction_chance_is_clamped():
    assert reproduction_chance(0.7, 1.0) == pytest.approx(0.7)
    assert reproduction_chance(0.7, 1.5) == pytest.approx(0.95)
    assert reproduction_chance(0.7, 0.1) == pytest.approx(0.1)


def test_engine_requires_rng(config):
    with pytest.raises(MissingRNGError):
        ReproductionEngine(config)


def test_unfed_organisms_never_reproduce(config, seeded_rng, make_organism):
    engine = ReproductionEngine(config, rng=seeded_rng)
    organism = make_organism(fertility=1.5)
    assert not any(engine.should_reproduce(organism) for _ in range(200))


def test_reproduction_frequency_matches_probability(config, seeded_rng, make_organism):
    engine = ReproductionEngine(config, rng=seeded_rng)
    organism = make_organism(fertility=1.0)
    organism.has_food_today = True

    trials = 2000
    successes = sum(engine.should_reproduce(organism) for _ in range(trials))
    assert 0.65 <= successes / trials <= 0.75


def test_offspring_inherits_lineage_fields(config, seeded_rng, make_organism):
    engine = ReproductionEngine(config, rng=seeded_rng)
    parent = make_organism(organism_id=5, position=(400.0, 300.0))
    parent.generation = 3
    parent.species_id = 5

    child = engine.create_offspring(parent, child_id=42, day=7)

    assert child.id == 42
    assert child.parent_id == 5
    assert child.generation == 4
    assert child.species_id == 5
    assert child.born_on_day == 7
    assert child.age == 0
    assert child.energy == config.energy.max_energy
    assert not child.has_food_today
    assert child.position.distance_to(parent.position) == pytest.approx(config.spawn_distance)


def test_offspring_near_edge_is_clamped_into_world(config, seeded_rng, make_organism):
    engine = ReproductionEngine(config, rng=seeded_rng)
    parent = make_organism(position=(0.0, 0.0))
    for child_id in range(100, 150):
        child = engine.create_offspring(parent, child_id, day=1)
        assert 0 <= child.position.x <= config.world.width
        assert 0 <= child.position.y <= config.world.height
