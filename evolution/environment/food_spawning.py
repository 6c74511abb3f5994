"""Food spawning system.

This module places each day's food. The spawn layout follows one of four
patterns that rotate every few days so that no single trait profile is
favoured forever:

- RANDOM: uniform across the playable area
- CLUSTERED: a few dense patches (rewards size and contest strength)
- SCATTERED: one item per grid cell (rewards speed and sense range)
- RING: a ring around the center (rewards sense range)
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum
from typing import List, Optional, Sequence

from evolution.config.simulation_config import FoodConfig, WorldConfig
from evolution.math_utils import Vector2, clamp
from evolution.util.rng import require_rng_param

logger = logging.getLogger(__name__)


class FoodPattern(Enum):
    RANDOM = "random"
    CLUSTERED = "clustered"
    SCATTERED = "scattered"
    RING = "ring"

    def next(self) -> "FoodPattern":
        order = list(FoodPattern)
        return order[(order.index(self) + 1) % len(order)]


class FoodSpawner:
    """Chooses food positions for each new day.

    Attributes:
        pattern: The currently active spawn pattern
        rng: Random number generator for deterministic spawning
    """

    def __init__(
        self,
        world: WorldConfig,
        food: FoodConfig,
        rng: Optional[random.Random] = None,
        pattern: FoodPattern = FoodPattern.RANDOM,
    ) -> None:
        self.world = world
        self.food = food
        self.rng = require_rng_param(rng, "FoodSpawner.__init__")
        self.pattern = pattern

    def update_pattern(self, day: int) -> bool:
        """Rotate to the next pattern on every rotation boundary.

        Returns:
            True if the pattern changed
        """
        interval = self.food.pattern_rotation_days
        if interval > 0 and day > 0 and day % interval == 0:
            previous = self.pattern
            self.pattern = self.pattern.next()
            logger.info("Food pattern %s -> %s on day %d", previous.value, self.pattern.value, day)
            return True
        return False

    def daily_count(self, season_multiplier: float = 1.0) -> int:
        return max(1, int(self.food.food_per_day * season_multiplier))

    def spawn_positions(
        self,
        season_multiplier: float = 1.0,
        corpse_positions: Sequence[Vector2] = (),
    ) -> List[Vector2]:
        """Positions for a whole day: corpse sites first, then the pattern."""
        positions = [p.copy() for p in corpse_positions]
        positions.extend(self.generate_positions(self.daily_count(season_multiplier), self.pattern))
        return positions

    def _playable_area(self) -> tuple[float, float, float, float]:
        margin = self.world.spawn_margin
        return margin, self.world.width - margin, margin, self.world.height - margin

    def generate_positions(self, count: int, pattern: FoodPattern) -> List[Vector2]:
        if count <= 0:
            return []

        min_x, max_x, min_y, max_y = self._playable_area()
        if max_x <= min_x or max_y <= min_y:
            # World too small for the margin: pile everything in the middle.
            center = Vector2(self.world.width / 2, self.world.height / 2)
            return [center.copy() for _ in range(count)]

        if pattern is FoodPattern.CLUSTERED:
            return self._clustered(count, min_x, max_x, min_y, max_y)
        if pattern is FoodPattern.SCATTERED:
            return self._scattered(count, min_x, max_x, min_y, max_y)
        if pattern is FoodPattern.RING:
            return self._ring(count, min_x, max_x, min_y, max_y)
        return [self._random_point(min_x, max_x, min_y, max_y) for _ in range(count)]

    def _random_point(self, min_x: float, max_x: float, min_y: float, max_y: float) -> Vector2:
        return Vector2(self.rng.uniform(min_x, max_x), self.rng.uniform(min_y, max_y))

    def _clustered(
        self, count: int, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> List[Vector2]:
        cluster_count = self.rng.randint(2, 3)
        per_cluster = count // cluster_count
        cluster_radius = min(80.0, (max_x - min_x) / 4, (max_y - min_y) / 4)

        positions: List[Vector2] = []
        for _ in range(cluster_count):
            cluster_x = self.rng.uniform(min_x, max_x)
            cluster_y = self.rng.uniform(min_y, max_y)
            for _ in range(per_cluster):
                angle = self.rng.uniform(0, 2 * math.pi)
                radius = self.rng.uniform(0, cluster_radius)
                positions.append(
                    Vector2(
                        clamp(cluster_x + math.cos(angle) * radius, min_x, max_x),
                        clamp(cluster_y + math.sin(angle) * radius, min_y, max_y),
                    )
                )

        # Remainder of an uneven split lands anywhere.
        while len(positions) < count:
            positions.append(self._random_point(min_x, max_x, min_y, max_y))
        return positions

    def _scattered(
        self, count: int, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> List[Vector2]:
        cols = max(1, int(math.sqrt(count)))
        rows = max(1, (count + cols - 1) // cols)
        cell_w = max(1.0, (max_x - min_x) / cols)
        cell_h = max(1.0, (max_y - min_y) / rows)

        positions = []
        for i in range(count):
            cell_x = min_x + (i % cols) * cell_w
            cell_y = min_y + (i // cols) * cell_h
            x = cell_x + self.rng.uniform(0, max(0.0, min(cell_w, max_x - cell_x)))
            y = cell_y + self.rng.uniform(0, max(0.0, min(cell_h, max_y - cell_y)))
            positions.append(Vector2(clamp(x, min_x, max_x), clamp(y, min_y, max_y)))
        return positions

    def _ring(
        self, count: int, min_x: float, max_x: float, min_y: float, max_y: float
    ) -> List[Vector2]:
        center_x = (min_x + max_x) / 2
        center_y = (min_y + max_y) / 2
        radius = min(max_x - min_x, max_y - min_y) / 3
        variation = min(30.0, radius / 2)

        positions = []
        for i in range(count):
            angle = 2 * math.pi * i / count
            r = radius + self.rng.uniform(-variation, variation)
            positions.append(
                Vector2(
                    clamp(center_x + math.cos(angle) * r, min_x, max_x),
                    clamp(center_y + math.sin(angle) * r, min_y, max_y),
                )
            )
        return positions
