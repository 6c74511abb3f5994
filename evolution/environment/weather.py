"""Weather events.

Weather changes only at day boundaries. Each event lasts a random
number of days drawn from its type's duration range and then expires
into a new, randomly chosen type (possibly the same one again).
"""

from __future__ import annotations

import logging
import random
from enum import Enum

logger = logging.getLogger(__name__)


class WeatherType(Enum):
    """Weather variants.

    Payload: (temperature offset, visibility multiplier,
    movement multiplier, min days, max days).
    """

    CLEAR = ("clear", 0.0, 1.0, 1.0, 3, 6)
    RAIN = ("rain", -2.0, 0.8, 0.9, 1, 3)
    STORM = ("storm", -4.0, 0.6, 0.7, 1, 1)
    HEATWAVE = ("heatwave", 8.0, 1.0, 0.85, 2, 4)
    COLD_SNAP = ("cold_snap", -10.0, 0.9, 0.75, 2, 3)
    FOG = ("fog", -1.0, 0.5, 1.0, 1, 2)

    def __init__(
        self,
        label: str,
        temperature_offset: float,
        visibility_multiplier: float,
        movement_multiplier: float,
        min_days: int,
        max_days: int,
    ) -> None:
        self.label = label
        self.temperature_offset = temperature_offset
        self.visibility_multiplier = visibility_multiplier
        self.movement_multiplier = movement_multiplier
        self.min_days = min_days
        self.max_days = max_days


class WeatherState:
    """The active weather event and its remaining duration."""

    def __init__(
        self,
        rng: random.Random,
        weather: WeatherType = WeatherType.CLEAR,
        enabled: bool = True,
    ) -> None:
        self.rng = rng
        self.enabled = enabled
        self.current = weather if enabled else WeatherType.CLEAR
        self.days_remaining = self._roll_duration(self.current)

    def _roll_duration(self, weather: WeatherType) -> int:
        return self.rng.randint(weather.min_days, weather.max_days)

    def advance_day(self) -> bool:
        """Count one day down.

        Returns:
            True if the previous event expired and a new one was drawn
        """
        if not self.enabled:
            return False
        self.days_remaining -= 1
        if self.days_remaining > 0:
            return False
        previous = self.current
        self.current = self.rng.choice(list(WeatherType))
        self.days_remaining = self._roll_duration(self.current)
        logger.debug(
            "Weather changed %s -> %s for %d day(s)",
            previous.label,
            self.current.label,
            self.days_remaining,
        )
        return True

    @property
    def temperature_offset(self) -> float:
        return self.current.temperature_offset

    @property
    def visibility_multiplier(self) -> float:
        return self.current.visibility_multiplier

    @property
    def movement_multiplier(self) -> float:
        return self.current.movement_multiplier
