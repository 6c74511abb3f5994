"""Pytest configuration and fixtures for evolution simulation tests."""

import itertools
import random

import pytest

from evolution.config.simulation_config import GameConfiguration
from evolution.entities import Organism
from evolution.genetics.trait import Traits
from evolution.math_utils import Vector2


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def config():
    return GameConfiguration()


@pytest.fixture
def quiet_config():
    """A configuration with every environmental modifier switched off."""
    config = GameConfiguration()
    config.day_night.enabled = False
    config.seasons.enabled = False
    config.environment.weather_enabled = False
    config.environment.terrain_patch_count = (0, 0)
    config.environment.temperature_zone_count = (0, 0)
    return config


@pytest.fixture
def make_organism(config):
    """Factory for founder-like organisms with optional trait overrides."""
    ids = itertools.count(1)

    def _make(organism_id=None, position=(100.0, 100.0), **trait_overrides):
        traits = Traits.from_initial(config.initial_traits, config.traits)
        if trait_overrides:
            traits = traits.replace(**trait_overrides)
        return Organism(
            id=next(ids) if organism_id is None else organism_id,
            traits=traits,
            position=Vector2(*position),
            energy=config.energy.max_energy,
            max_energy=config.energy.max_energy,
        )

    return _make


@pytest.fixture
def simulation_engine():
    """Setup a simulation engine for testing with deterministic seed."""
    from evolution.simulation.engine import SimulationEngine

    return SimulationEngine(seed=42)
