"""Simulation configuration dataclasses and named presets.

The engine treats a ``GameConfiguration`` as an opaque, already
validated input. Values that violate ``min <= max`` are not rejected;
they are normalized at the point of use so a bad preset degrades
gracefully instead of crashing a running simulation.
"""

from __future__ import annotations

import copy
import logging
import math
from dataclasses import dataclass, field, fields
from typing import Callable, Dict, Optional

from evolution.config import traits as defaults
from evolution.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TraitBounds:
    """Legal range and mutation step for one heritable trait."""

    min_value: float
    max_value: float
    mutation_range: float
    discrete: bool = False

    def normalized(self) -> "TraitBounds":
        """Return bounds with ``min <= max`` and a non-negative mutation range."""
        low, high = self.min_value, self.max_value
        if low > high:
            low, high = high, low
        return TraitBounds(low, high, abs(self.mutation_range), self.discrete)

    def clamp(self, value: float) -> float:
        """Clamp ``value`` into range. Discrete values snap to an integer inside it.

        A discrete range that holds no integer falls back to the plain clamp.
        """
        bounds = self.normalized()
        if self.discrete:
            low, high = math.ceil(bounds.min_value), math.floor(bounds.max_value)
            if low <= high:
                return max(low, min(high, int(round(value))))
        return max(bounds.min_value, min(bounds.max_value, value))

    def ratio(self, value: float) -> float:
        """Position of ``value`` within the range, 0.0 for a zero-width range."""
        bounds = self.normalized()
        width = bounds.max_value - bounds.min_value
        if width <= 0:
            return 0.0
        return max(0.0, min(1.0, (value - bounds.min_value) / width))

    @property
    def width(self) -> float:
        bounds = self.normalized()
        return bounds.max_value - bounds.min_value


@dataclass
class TraitConfig:
    """Bounds for every trait in the trait vector."""

    speed: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.SPEED_MIN, defaults.SPEED_MAX, defaults.SPEED_MUTATION, discrete=True
        )
    )
    sense_range: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.SENSE_RANGE_MIN,
            defaults.SENSE_RANGE_MAX,
            defaults.SENSE_RANGE_MUTATION,
            discrete=True,
        )
    )
    size: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.SIZE_MIN, defaults.SIZE_MAX, defaults.SIZE_MUTATION
        )
    )
    fertility: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.FERTILITY_MIN, defaults.FERTILITY_MAX, defaults.FERTILITY_MUTATION
        )
    )
    energy_efficiency: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.EFFICIENCY_MIN, defaults.EFFICIENCY_MAX, defaults.EFFICIENCY_MUTATION
        )
    )
    max_age: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.MAX_AGE_MIN, defaults.MAX_AGE_MAX, defaults.MAX_AGE_MUTATION, discrete=True
        )
    )
    aggression: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.AGGRESSION_MIN, defaults.AGGRESSION_MAX, defaults.AGGRESSION_MUTATION
        )
    )
    defense: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.DEFENSE_MIN, defaults.DEFENSE_MAX, defaults.DEFENSE_MUTATION
        )
    )
    metabolism: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.METABOLISM_MIN, defaults.METABOLISM_MAX, defaults.METABOLISM_MUTATION
        )
    )
    heat_tolerance: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.TOLERANCE_MIN, defaults.TOLERANCE_MAX, defaults.TOLERANCE_MUTATION
        )
    )
    cold_tolerance: TraitBounds = field(
        default_factory=lambda: TraitBounds(
            defaults.TOLERANCE_MIN, defaults.TOLERANCE_MAX, defaults.TOLERANCE_MUTATION
        )
    )

    def bounds_for(self, name: str) -> TraitBounds:
        bounds = getattr(self, name, None)
        if not isinstance(bounds, TraitBounds):
            raise ConfigurationError(f"Unknown trait: {name}")
        return bounds

    def as_dict(self) -> Dict[str, TraitBounds]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class InitialTraits:
    """Trait values given to every organism of the founding population."""

    speed: float = defaults.INITIAL_SPEED
    sense_range: float = defaults.INITIAL_SENSE_RANGE
    size: float = defaults.INITIAL_SIZE
    fertility: float = defaults.INITIAL_FERTILITY
    energy_efficiency: float = defaults.INITIAL_ENERGY_EFFICIENCY
    max_age: float = defaults.INITIAL_MAX_AGE
    aggression: float = defaults.INITIAL_AGGRESSION
    defense: float = defaults.INITIAL_DEFENSE
    metabolism: float = defaults.INITIAL_METABOLISM
    heat_tolerance: float = defaults.INITIAL_HEAT_TOLERANCE
    cold_tolerance: float = defaults.INITIAL_COLD_TOLERANCE


@dataclass
class WorldConfig:
    width: float = defaults.WORLD_WIDTH
    height: float = defaults.WORLD_HEIGHT
    spawn_margin: float = defaults.SPAWN_MARGIN


@dataclass
class FoodConfig:
    food_per_day: int = defaults.FOOD_PER_DAY
    food_size: float = defaults.FOOD_SIZE
    pattern_rotation_days: int = defaults.PATTERN_ROTATION_DAYS


@dataclass
class EnergyConfig:
    max_energy: float = defaults.MAX_ENERGY
    energy_cost_per_move: float = defaults.ENERGY_COST_PER_MOVE
    energy_gain_from_food: float = defaults.ENERGY_GAIN_FROM_FOOD
    metabolism_energy_cost: float = defaults.METABOLISM_ENERGY_COST


@dataclass
class ContestConfig:
    contest_range: float = defaults.FOOD_CONTEST_RANGE
    aggression_weight: float = defaults.CONTEST_AGGRESSION_WEIGHT
    random_range: float = defaults.CONTEST_RANDOM_RANGE
    size_weight: float = defaults.CONTEST_SIZE_WEIGHT
    defense_penalty: float = defaults.CONTEST_DEFENSE_PENALTY


@dataclass
class TemperatureConfig:
    base_temperature: float = defaults.BASE_TEMPERATURE
    energy_multiplier: float = defaults.TEMPERATURE_ENERGY_MULTIPLIER
    death_threshold: float = defaults.TEMPERATURE_DEATH_THRESHOLD
    tolerance_cost_reduction: float = defaults.TOLERANCE_COST_REDUCTION


@dataclass
class DayNightConfig:
    enabled: bool = True
    cycle_duration: float = defaults.DAY_NIGHT_CYCLE_DURATION
    darkness_threshold: float = defaults.NIGHT_DARKNESS_THRESHOLD
    night_sense_multiplier: float = defaults.NIGHT_SENSE_RANGE_MULTIPLIER
    night_energy_multiplier: float = defaults.NIGHT_ENERGY_MULTIPLIER


@dataclass
class SeasonConfig:
    enabled: bool = True
    days_per_season: int = defaults.DAYS_PER_SEASON


@dataclass
class EnvironmentConfig:
    """Random layout of environmental modifiers created at reset.

    Set any count to zero to disable that modifier entirely.
    """

    weather_enabled: bool = True
    terrain_patch_count: tuple[int, int] = (3, 5)
    terrain_patch_size: tuple[float, float] = (80.0, 180.0)
    temperature_zone_count: tuple[int, int] = (2, 4)
    temperature_zone_radius: tuple[float, float] = (80.0, 150.0)
    obstacle_count: int = 0
    wall_size: tuple[float, float] = (50.0, 50.0)
    obstacle_radius: float = 25.0


@dataclass
class GameConfiguration:
    """Everything the engine needs to build and run a simulation."""

    initial_population: int = defaults.INITIAL_POPULATION
    initial_traits: InitialTraits = field(default_factory=InitialTraits)
    traits: TraitConfig = field(default_factory=TraitConfig)
    world: WorldConfig = field(default_factory=WorldConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    energy: EnergyConfig = field(default_factory=EnergyConfig)
    contest: ContestConfig = field(default_factory=ContestConfig)
    temperature: TemperatureConfig = field(default_factory=TemperatureConfig)
    day_night: DayNightConfig = field(default_factory=DayNightConfig)
    seasons: SeasonConfig = field(default_factory=SeasonConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)

    reproduction_probability: float = defaults.REPRODUCTION_PROBABILITY
    spawn_distance: float = defaults.SPAWN_DISTANCE
    base_organism_radius: float = defaults.BASE_ORGANISM_RADIUS
    size_speed_penalty: float = defaults.SIZE_SPEED_PENALTY

    speciation_enabled: bool = True
    speciation_threshold: float = defaults.SPECIATION_THRESHOLD

    movement_phase_duration: Optional[float] = defaults.MOVEMENT_PHASE_DURATION

    @classmethod
    def preset(cls, name: str) -> "GameConfiguration":
        """Build a configuration from a named preset.

        Raises:
            ConfigurationError: If ``name`` is not a known preset
        """
        try:
            factory = PRESETS[name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown preset {name!r}. Available: {sorted(PRESETS)}"
            ) from None
        logger.debug("Building configuration preset %s", name)
        return factory()

    def copy(self) -> "GameConfiguration":
        return copy.deepcopy(self)

    def set_mutation_range(self, trait_name: str, mutation_range: float) -> None:
        self.traits.bounds_for(trait_name).mutation_range = mutation_range


# =============================================================================
# PRESETS
# =============================================================================


def _fast_evolution() -> GameConfiguration:
    config = GameConfiguration(initial_population=15, reproduction_probability=0.85)
    config.food.food_per_day = 8
    return config


def _slow_evolution() -> GameConfiguration:
    config = GameConfiguration(initial_population=8, reproduction_probability=0.5)
    config.food.food_per_day = 3
    return config


def _high_mutation() -> GameConfiguration:
    config = GameConfiguration(reproduction_probability=0.8)
    config.set_mutation_range("speed", 5)
    return config


def _extreme_speed() -> GameConfiguration:
    config = GameConfiguration()
    config.traits.speed.max_value = 50
    config.set_mutation_range("speed", 3)
    return config


PRESETS: Dict[str, Callable[[], GameConfiguration]] = {
    "default": GameConfiguration,
    "fast_evolution": _fast_evolution,
    "slow_evolution": _slow_evolution,
    "high_mutation": _high_mutation,
    "extreme_speed": _extreme_speed,
}
