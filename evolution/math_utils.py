"""Centralized math utilities for the simulation.

This module provides a small Vector2 implementation plus the geometry
helpers shared by movement, obstacle collision and terrain lookup.
"""

from __future__ import annotations

import math


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2":
        length = self.length()
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def copy(self) -> "Vector2":
        """Return a copy of this vector."""
        return Vector2(self.x, self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __hash__(self) -> int:
        return hash((round(self.x, 9), round(self.y, 9)))

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    @staticmethod
    def from_angle(angle: float, length: float = 1.0) -> "Vector2":
        """Build a vector of the given length pointing along ``angle`` radians."""
        return Vector2(math.cos(angle) * length, math.sin(angle) * length)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def clamp_to_bounds(position: Vector2, width: float, height: float) -> Vector2:
    """Clamp a position to the playable rectangle ``[0, width] x [0, height]``."""
    return Vector2(clamp(position.x, 0.0, width), clamp(position.y, 0.0, height))


def move_towards(current: Vector2, target: Vector2, max_step: float) -> Vector2:
    """Step from ``current`` toward ``target`` by at most ``max_step``.

    Snaps onto the target when it is closer than one step so organisms
    never overshoot and oscillate around food.
    """
    delta = target - current
    distance = delta.length()
    if distance <= max_step or distance == 0:
        return target.copy()
    return current + delta * (max_step / distance)


def rect_contains(
    center: Vector2, width: float, height: float, point: Vector2
) -> bool:
    """Check whether ``point`` lies inside a rectangle centered on ``center``."""
    return (
        abs(point.x - center.x) <= width / 2
        and abs(point.y - center.y) <= height / 2
    )


def rect_circle_distance(
    center: Vector2, width: float, height: float, point: Vector2
) -> float:
    """Distance from ``point`` to the closest point of a centered rectangle."""
    half_w = width / 2
    half_h = height / 2
    closest_x = clamp(point.x, center.x - half_w, center.x + half_w)
    closest_y = clamp(point.y, center.y - half_h, center.y + half_h)
    return math.hypot(point.x - closest_x, point.y - closest_y)
