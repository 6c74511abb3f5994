"""Environmental modifiers: food, terrain, weather, temperature and time."""

from evolution.environment.food_spawning import FoodPattern, FoodSpawner
from evolution.environment.temperature import Season, TemperatureZone
from evolution.environment.terrain import TerrainPatch, TerrainType
from evolution.environment.time_system import DayNightCycle
from evolution.environment.weather import WeatherState, WeatherType
from evolution.environment.world import Environment, TemperatureEffect

__all__ = [
    "DayNightCycle",
    "Environment",
    "FoodPattern",
    "FoodSpawner",
    "Season",
    "TemperatureEffect",
    "TemperatureZone",
    "TerrainPatch",
    "TerrainType",
    "WeatherState",
    "WeatherType",
]
