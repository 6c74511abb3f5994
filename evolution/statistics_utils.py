"""Reusable statistics calculation utilities.

All helpers handle empty inputs gracefully and return zeros (or None
for correlations) instead of raising on degenerate data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional
from collections.abc import Sequence


@dataclass(frozen=True)
class DescriptiveStats:
    """Basic descriptive statistics for a dataset.

    Attributes:
        mean: Arithmetic mean of values
        min: Minimum value
        max: Maximum value
        count: Number of values
    """

    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0
    count: int = 0


def compute_stats(values: Sequence[float]) -> DescriptiveStats:
    """Compute mean/min/max for ``values``; all zeros for an empty sequence."""
    if not values:
        return DescriptiveStats()
    return DescriptiveStats(
        mean=sum(values) / len(values),
        min=min(values),
        max=max(values),
        count=len(values),
    )


def pearson(xs: Sequence[float], ys: Sequence[float]) -> Optional[float]:
    """Pearson correlation coefficient of two equal-length samples.

    Returns:
        The coefficient in ``[-1, 1]``, or None when fewer than two paired
        samples exist or either sample has zero variance
    """
    n = min(len(xs), len(ys))
    if n <= 1:
        return None

    mean_x = sum(xs[:n]) / n
    mean_y = sum(ys[:n]) / n
    cov = var_x = var_y = 0.0
    for x, y in zip(xs[:n], ys[:n]):
        dx = x - mean_x
        dy = y - mean_y
        cov += dx * dy
        var_x += dx * dx
        var_y += dy * dy

    if var_x == 0 or var_y == 0:
        return None
    r = cov / math.sqrt(var_x * var_y)
    return max(-1.0, min(1.0, r))
