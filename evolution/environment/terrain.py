"""Terrain patches that slow organisms down."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from evolution.math_utils import Vector2, rect_contains


class TerrainType(Enum):
    """Terrain variants with their movement speed multiplier."""

    GRASS = ("grass", 1.0)
    SAND = ("sand", 0.7)
    WATER = ("water", 0.5)
    MUD = ("mud", 0.6)
    ROCK = ("rock", 0.8)

    def __init__(self, label: str, speed_multiplier: float) -> None:
        self.label = label
        self.speed_multiplier = speed_multiplier


@dataclass
class TerrainPatch:
    """An axis-aligned rectangle of terrain centered on ``position``."""

    terrain: TerrainType
    position: Vector2
    width: float
    height: float

    def contains(self, point: Vector2) -> bool:
        return rect_contains(self.position, self.width, self.height, point)


def speed_multiplier_at(patches: Sequence[TerrainPatch], point: Vector2) -> float:
    """Slowest multiplier among the patches covering ``point``, 1.0 on open grass."""
    multiplier = 1.0
    for patch in patches:
        if patch.contains(point):
            multiplier = min(multiplier, patch.terrain.speed_multiplier)
    return multiplier


def generate_terrain(
    rng: random.Random,
    width: float,
    height: float,
    count_range: tuple[int, int],
    size_range: tuple[float, float],
) -> List[TerrainPatch]:
    """Scatter random non-grass patches across the world."""
    low, high = sorted(count_range)
    if high <= 0:
        return []
    choices = [t for t in TerrainType if t is not TerrainType.GRASS]
    min_size, max_size = sorted(size_range)
    patches = []
    for _ in range(rng.randint(max(0, low), high)):
        patch_w = rng.uniform(min_size, max_size)
        patch_h = rng.uniform(min_size, max_size)
        center = Vector2(
            rng.uniform(patch_w / 2, max(patch_w / 2, width - patch_w / 2)),
            rng.uniform(patch_h / 2, max(patch_h / 2, height - patch_h / 2)),
        )
        patches.append(TerrainPatch(rng.choice(choices), center, patch_w, patch_h))
    return patches
