"""Tests for the trait vector, mutation and genetic distance."""

import random

import pytest

from evolution.config.simulation_config import TraitBounds
from evolution.exceptions import ConfigurationError, GeneticsError
from evolution.genetics import TRAIT_NAMES, Traits, genetic_distance, mutate_traits, mutate_value

DISCRETE_TRAITS = ("speed", "sense_range", "max_age")


def _extreme_traits(config, use_max):
    values = {}
    for name in TRAIT_NAMES:
        bounds = config.traits.bounds_for(name)
        values[name] = bounds.max_value if use_max else bounds.min_value
    return Traits(**values)


def test_founder_traits_are_within_bounds(config):
    traits = Traits.from_initial(config.initial_traits, config.traits)
    for name in TRAIT_NAMES:
        bounds = config.traits.bounds_for(name)
        assert bounds.min_value <= traits.get(name) <= bounds.max_value


@pytest.mark.parametrize("use_max", [False, True])
def test_mutation_never_leaves_bounds(config, seeded_rng, use_max):
    parent = _extreme_traits(config, use_max)
    for _ in range(500):
        child = mutate_traits(parent, config.traits, seeded_rng)
        for name in TRAIT_NAMES:
            bounds = config.traits.bounds_for(name)
            assert bounds.min_value <= child.get(name) <= bounds.max_value, name


def test_mutation_deviation_is_within_mutation_range(config, seeded_rng):
    parent = Traits.from_initial(config.initial_traits, config.traits)
    for _ in range(300):
        child = mutate_traits(parent, config.traits, seeded_rng)
        for name in TRAIT_NAMES:
            bounds = config.traits.bounds_for(name)
            assert abs(child.get(name) - parent.get(name)) <= bounds.mutation_range + 1e-9


def test_discrete_traits_stay_integral(config, seeded_rng):
    traits = Traits.from_initial(config.initial_traits, config.traits)
    for _ in range(50):
        traits = mutate_traits(traits, config.traits, seeded_rng)
        for name in DISCRETE_TRAITS:
            assert isinstance(traits.get(name), int)


def test_mutation_is_deterministic_for_a_seed(config):
    parent = Traits.from_initial(config.initial_traits, config.traits)
    first = mutate_traits(parent, config.traits, random.Random(7))
    second = mutate_traits(parent, config.traits, random.Random(7))
    assert first == second


def test_zero_mutation_range_leaves_value_unchanged(seeded_rng):
    bounds = TraitBounds(0.0, 1.0, 0.0)
    assert mutate_value(0.4, bounds, seeded_rng) == 0.4


def test_inverted_bounds_are_normalized():
    bounds = TraitBounds(10, 1, -2)
    normalized = bounds.normalized()
    assert (normalized.min_value, normalized.max_value) == (1, 10)
    assert normalized.mutation_range == 2
    assert bounds.clamp(20) == 10
    assert bounds.clamp(-5) == 1


def test_discrete_values_stay_inside_fractional_bounds(seeded_rng):
    bounds = TraitBounds(1.0, 29.5, 2, discrete=True)
    values = [mutate_value(29.5, bounds, seeded_rng) for _ in range(200)]

    assert max(values) == 29
    assert all(1.0 <= v <= 29.5 and isinstance(v, int) for v in values)
    assert bounds.clamp(0.4) == 1
    assert TraitBounds(0.5, 2.5, 1, discrete=True).clamp(0.6) == 1


def test_discrete_range_without_an_integer_uses_plain_clamp():
    assert TraitBounds(1.2, 1.8, 1, discrete=True).clamp(5) == 1.8


def test_ratio_of_zero_width_range_is_zero():
    assert TraitBounds(5.0, 5.0, 1.0).ratio(5.0) == 0.0
    assert TraitBounds(0.0, 2.0, 0.1).ratio(1.0) == pytest.approx(0.5)


def test_unknown_trait_names_are_rejected(config):
    traits = Traits.from_initial(config.initial_traits, config.traits)
    with pytest.raises(GeneticsError):
        traits.get("wings")
    with pytest.raises(GeneticsError):
        traits.replace(wings=1.0)
    with pytest.raises(ConfigurationError):
        config.traits.bounds_for("wings")


class TestGeneticDistance:
    def test_identical_vectors_have_zero_distance(self, config):
        traits = Traits.from_initial(config.initial_traits, config.traits)
        assert genetic_distance(traits, traits, config.traits) == 0.0

    def test_opposite_extremes_have_unit_distance(self, config):
        low = _extreme_traits(config, use_max=False)
        high = _extreme_traits(config, use_max=True)
        assert genetic_distance(low, high, config.traits) == pytest.approx(1.0)

    def test_distance_is_symmetric(self, config, seeded_rng):
        parent = Traits.from_initial(config.initial_traits, config.traits)
        child = mutate_traits(parent, config.traits, seeded_rng)
        assert genetic_distance(parent, child, config.traits) == pytest.approx(
            genetic_distance(child, parent, config.traits)
        )

    def test_distance_grows_with_single_trait_deviation(self, config):
        base = Traits.from_initial(config.initial_traits, config.traits)
        small = genetic_distance(base, base.replace(speed=12), config.traits)
        large = genetic_distance(base, base.replace(speed=20), config.traits)
        assert 0 < small < large

    def test_zero_width_traits_contribute_nothing(self, config):
        config.traits.aggression = TraitBounds(0.5, 0.5, 0.0)
        base = Traits.from_initial(config.initial_traits, config.traits)
        assert genetic_distance(base, base.replace(aggression=0.9), config.traits) == 0.0
