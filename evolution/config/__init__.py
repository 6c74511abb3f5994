"""Configuration package for the evolution simulation.

Constants live in ``evolution.config.traits``; the dataclasses that the
engine consumes live in ``evolution.config.simulation_config``.
"""

from evolution.config.simulation_config import (
    PRESETS,
    ContestConfig,
    DayNightConfig,
    EnergyConfig,
    EnvironmentConfig,
    FoodConfig,
    GameConfiguration,
    InitialTraits,
    SeasonConfig,
    TemperatureConfig,
    TraitBounds,
    TraitConfig,
    WorldConfig,
)

__all__ = [
    "PRESETS",
    "ContestConfig",
    "DayNightConfig",
    "EnergyConfig",
    "EnvironmentConfig",
    "FoodConfig",
    "GameConfiguration",
    "InitialTraits",
    "SeasonConfig",
    "TemperatureConfig",
    "TraitBounds",
    "TraitConfig",
    "WorldConfig",
]
