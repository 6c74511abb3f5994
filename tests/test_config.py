"""Tests for configuration presets."""

import pytest

from evolution.config import PRESETS, GameConfiguration
from evolution.exceptions import ConfigurationError


@pytest.mark.parametrize("name", sorted(PRESETS))
def test_every_preset_builds(name):
    config = GameConfiguration.preset(name)
    assert isinstance(config, GameConfiguration)
    assert config.initial_population > 0


def test_unknown_preset_is_rejected():
    with pytest.raises(ConfigurationError, match="Unknown preset"):
        GameConfiguration.preset("warp_speed")


def test_presets_differ_from_default():
    default = GameConfiguration()
    assert GameConfiguration.preset("fast_evolution").food.food_per_day > default.food.food_per_day
    assert GameConfiguration.preset("high_mutation").traits.speed.mutation_range == 5
    assert GameConfiguration.preset("extreme_speed").traits.speed.max_value == 50


def test_presets_do_not_share_state():
    first = GameConfiguration.preset("default")
    first.traits.speed.max_value = 99
    assert GameConfiguration.preset("default").traits.speed.max_value == 30


def test_copy_is_deep():
    original = GameConfiguration()
    clone = original.copy()
    clone.set_mutation_range("size", 0.5)
    clone.food.food_per_day = 1
    assert original.traits.size.mutation_range == 0.15
    assert original.food.food_per_day == 5


def test_set_mutation_range_rejects_unknown_trait():
    with pytest.raises(ConfigurationError):
        GameConfiguration().set_mutation_range("wings", 1.0)
