"""The environment an organism forages in.

Environment aggregates every external modifier of organism behavior:
food, obstacles, terrain, temperature zones, weather, season and the
day/night cycle. It answers spatial queries (nearest food, collisions,
local temperature and speed multipliers) and owns the daily food supply.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from evolution.config.simulation_config import GameConfiguration
from evolution.entities import Food, Obstacle, ObstacleKind, Organism
from evolution.environment.food_spawning import FoodPattern, FoodSpawner
from evolution.environment.temperature import (
    Season,
    TemperatureZone,
    generate_temperature_zones,
    zone_temperature_at,
)
from evolution.environment.terrain import TerrainPatch, generate_terrain, speed_multiplier_at
from evolution.environment.time_system import DayNightCycle
from evolution.environment.weather import WeatherState
from evolution.math_utils import Vector2
from evolution.util.rng import require_rng_param

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemperatureEffect:
    """Result of exposing one organism to its local temperature for one tick."""

    temperature: float
    lethal: bool
    energy_cost: float


class Environment:
    """Spatial world state shared by every organism.

    Attributes:
        foods: Today's food items keyed by id
        obstacles: Placed obstacles keyed by id
        terrain: Terrain patches (slowest overlapping patch wins)
        temperature_zones: Hot and cold spots
        weather: Active weather event
        season: Current season
        day_night: Day/night cycle
    """

    def __init__(self, config: GameConfiguration, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.rng = require_rng_param(rng, "Environment.__init__")
        self.width = float(config.world.width)
        self.height = float(config.world.height)

        self.foods: Dict[int, Food] = {}
        self.obstacles: Dict[int, Obstacle] = {}
        self.terrain: List[TerrainPatch] = []
        self.temperature_zones: List[TemperatureZone] = []

        self.food_spawner = FoodSpawner(config.world, config.food, rng=self.rng)
        self.day_night = DayNightCycle(config.day_night)
        self.weather = WeatherState(self.rng, enabled=config.environment.weather_enabled)
        self.season = Season.SPRING

        self._next_food_id = 1
        self._next_obstacle_id = 1

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def generate_layout(self) -> None:
        """Randomize terrain, temperature zones and initial obstacles."""
        env = self.config.environment
        self.terrain = generate_terrain(
            self.rng, self.width, self.height, env.terrain_patch_count, env.terrain_patch_size
        )
        self.temperature_zones = generate_temperature_zones(
            self.rng,
            self.width,
            self.height,
            env.temperature_zone_count,
            env.temperature_zone_radius,
        )
        for _ in range(max(0, env.obstacle_count)):
            kind = self.rng.choice(list(ObstacleKind))
            self.add_obstacle(
                Obstacle(
                    kind=kind,
                    position=Vector2(
                        self.rng.uniform(0, self.width), self.rng.uniform(0, self.height)
                    ),
                    width=env.wall_size[0],
                    height=env.wall_size[1],
                    radius=env.obstacle_radius,
                )
            )
        logger.debug(
            "Environment layout: %d terrain patches, %d temperature zones, %d obstacles",
            len(self.terrain),
            len(self.temperature_zones),
            len(self.obstacles),
        )

    def reset(self) -> None:
        self.foods.clear()
        self.obstacles.clear()
        self.terrain = []
        self.temperature_zones = []
        self.food_spawner.pattern = FoodPattern.RANDOM
        self.day_night.reset()
        self.weather = WeatherState(self.rng, enabled=self.config.environment.weather_enabled)
        self.season = Season.SPRING
        self._next_food_id = 1
        self._next_obstacle_id = 1

    # ------------------------------------------------------------------
    # Obstacles
    # ------------------------------------------------------------------

    def add_obstacle(self, obstacle: Obstacle) -> int:
        obstacle.id = self._next_obstacle_id
        self._next_obstacle_id += 1
        self.obstacles[obstacle.id] = obstacle
        return obstacle.id

    def remove_obstacle(self, obstacle_id: int) -> bool:
        return self.obstacles.pop(obstacle_id, None) is not None

    def clear_obstacles(self) -> None:
        self.obstacles.clear()

    def colliding_obstacle(self, point: Vector2, radius: float) -> Optional[Obstacle]:
        """First obstacle hit at ``point``, preferring hazards over blockers."""
        blocker = None
        for obstacle in self.obstacles.values():
            if not obstacle.collides_with(point, radius):
                continue
            if obstacle.kind.is_lethal:
                return obstacle
            if blocker is None:
                blocker = obstacle
        return blocker

    # ------------------------------------------------------------------
    # Food
    # ------------------------------------------------------------------

    def spawn_food(self, day: int, corpse_positions: Sequence[Vector2] = ()) -> List[Food]:
        """Replace yesterday's food with today's supply."""
        self.foods.clear()
        self.food_spawner.update_pattern(day)
        positions = self.food_spawner.spawn_positions(
            self.food_multiplier(), corpse_positions
        )
        for position in positions:
            self.add_food(position)
        return list(self.foods.values())

    def add_food(self, position: Vector2) -> Food:
        food = Food(id=self._next_food_id, position=position)
        self._next_food_id += 1
        self.foods[food.id] = food
        return food

    def unclaimed_food(self) -> List[Food]:
        return [food for food in self.foods.values() if not food.claimed]

    def all_food_claimed(self) -> bool:
        return all(food.claimed for food in self.foods.values())

    def nearest_unclaimed_food(self, point: Vector2, max_range: float) -> Optional[Food]:
        nearest = None
        best = max_range
        for food in self.foods.values():
            if food.claimed:
                continue
            distance = point.distance_to(food.position)
            if distance <= best:
                nearest = food
                best = distance
        return nearest

    @property
    def food_pattern(self) -> FoodPattern:
        return self.food_spawner.pattern

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def effective_sense_range(self, organism: Organism) -> float:
        return (
            organism.traits.sense_range
            * self.day_night.sense_multiplier()
            * self.weather.visibility_multiplier
        )

    def movement_multiplier_at(self, point: Vector2) -> float:
        return speed_multiplier_at(self.terrain, point) * self.weather.movement_multiplier

    def update_season(self, day: int) -> bool:
        """Returns True when the season changed."""
        seasons = self.config.seasons
        if not seasons.enabled:
            return False
        season = Season.for_day(day, seasons.days_per_season)
        if season is self.season:
            return False
        logger.info("Season changed %s -> %s on day %d", self.season.label, season.label, day)
        self.season = season
        return True

    def food_multiplier(self) -> float:
        if not self.config.seasons.enabled:
            return 1.0
        return self.season.food_multiplier

    def seasonal_temperature_offset(self) -> float:
        if not self.config.seasons.enabled:
            return 0.0
        return self.season.temperature_offset

    def ambient_temperature(self, point: Vector2) -> float:
        return (
            self.config.temperature.base_temperature
            + self.seasonal_temperature_offset()
            + self.weather.temperature_offset
            + zone_temperature_at(self.temperature_zones, point)
        )

    def temperature_effect(self, organism: Organism, dt: float) -> TemperatureEffect:
        """Energy consequence of the organism's local temperature over ``dt`` seconds.

        Deviation from the comfort baseline is softened by heat tolerance
        when it is hotter and cold tolerance when it is colder. Deviation
        that still exceeds the death threshold after tolerance is lethal.
        """
        settings = self.config.temperature
        temperature = self.ambient_temperature(organism.position)
        diff = abs(temperature - settings.base_temperature)
        if diff == 0:
            return TemperatureEffect(temperature, False, 0.0)

        if temperature > settings.base_temperature:
            tolerance = organism.traits.heat_tolerance
        else:
            tolerance = organism.traits.cold_tolerance

        if diff > settings.death_threshold and diff * (1 - tolerance) > settings.death_threshold:
            return TemperatureEffect(temperature, True, organism.energy)

        cost = (
            diff
            * (1 - tolerance * settings.tolerance_cost_reduction)
            * settings.energy_multiplier
            * dt
            * self.day_night.energy_multiplier()
        )
        return TemperatureEffect(temperature, False, cost)
