"""Day/night cycle.

Tracks a continuous cycle progress in ``[0, 1)`` driven by simulated
seconds. Darkness follows a cosine curve: 0 at progress 0 (noon) and 1
at progress 0.5 (midnight). It is considered night while darkness
exceeds the configured threshold.
"""

import math

from evolution.config.simulation_config import DayNightConfig


class DayNightCycle:
    """Manages the day/night cycle and its behavioral modifiers.

    Attributes:
        progress: Position in the current cycle, ``0.0 <= progress < 1.0``
        config: Day/night tunables
    """

    def __init__(self, config: DayNightConfig) -> None:
        self.config = config
        self.progress: float = 0.0
        self.cycles_elapsed: int = 0

    def update(self, dt: float) -> None:
        """Advance the cycle by ``dt`` simulated seconds."""
        if not self.config.enabled or self.config.cycle_duration <= 0:
            return
        advanced = self.progress + dt / self.config.cycle_duration
        self.cycles_elapsed += int(advanced)
        self.progress = advanced % 1.0

    @property
    def darkness(self) -> float:
        if not self.config.enabled:
            return 0.0
        return 1.0 - (math.cos(2 * math.pi * self.progress) + 1.0) / 2.0

    def is_night(self) -> bool:
        return self.darkness > self.config.darkness_threshold

    def sense_multiplier(self) -> float:
        return self.config.night_sense_multiplier if self.is_night() else 1.0

    def energy_multiplier(self) -> float:
        """Night slows metabolism, reducing temperature stress."""
        return self.config.night_energy_multiplier if self.is_night() else 1.0

    def reset(self) -> None:
        self.progress = 0.0
        self.cycles_elapsed = 0
