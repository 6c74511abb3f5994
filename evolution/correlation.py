"""Trait correlation analysis.

Periodically computes the Pearson correlation of every unordered trait
pair over the live population and reports the pairs that are strongly
related. A pair that has already been reported is only reported again
once its coefficient has moved noticeably.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Sequence, Tuple

from evolution.entities import Organism
from evolution.genetics.trait import TRAIT_NAMES
from evolution.statistics_utils import pearson

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 20
REPORT_THRESHOLD = 0.3
REPORT_DELTA = 0.2

# Negative correlations that read as evolutionary trade-offs.
TRADEOFF_PAIRS: Tuple[Tuple[str, str, str], ...] = (
    ("size", "speed", "Larger organisms are evolving to be slower"),
    ("aggression", "defense", "Fighters and defenders are diverging"),
    ("fertility", "energy_efficiency", "Prolific breeders are burning energy faster"),
    ("size", "metabolism", "Larger organisms are evolving slower metabolisms"),
)
TRADEOFF_STRENGTH = 0.4


@dataclass(frozen=True)
class TraitCorrelation:
    """Correlation between two traits across the population."""

    trait_a: str
    trait_b: str
    coefficient: float  # -1.0 to +1.0
    sample_size: int
    day_detected: int
    p_value: float = 1.0  # Rough significance estimate (lower is better)

    @property
    def pair(self) -> Tuple[str, str]:
        return (self.trait_a, self.trait_b)

    @property
    def is_positive(self) -> bool:
        return self.coefficient > 0

    @property
    def strength(self) -> str:
        magnitude = abs(self.coefficient)
        if magnitude >= 0.8:
            return "very strong"
        if magnitude >= 0.6:
            return "strong"
        if magnitude >= 0.4:
            return "moderate"
        if magnitude >= 0.2:
            return "weak"
        if magnitude > 0:
            return "very weak"
        return "none"

    @property
    def description(self) -> str:
        direction = "positive" if self.is_positive else "negative"
        return (
            f"{self.strength} {direction} correlation between "
            f"{self.trait_a} and {self.trait_b} (r={self.coefficient:.2f})"
        )


def _p_value(r: float, n: int) -> float:
    """Simplified t-test estimate of significance."""
    if abs(r) <= 0.01 or n <= 2:
        return 1.0
    if abs(r) >= 1.0:
        return 0.001
    t_stat = r * math.sqrt((n - 2) / (1 - r * r))
    return max(0.001, 1.0 / (1.0 + abs(t_stat)))


class CorrelationAnalyzer:
    """Discovers trait relationships in the live population."""

    def __init__(
        self,
        min_sample_size: int = MIN_SAMPLE_SIZE,
        threshold: float = REPORT_THRESHOLD,
        report_delta: float = REPORT_DELTA,
        traits: Sequence[str] = TRAIT_NAMES,
    ) -> None:
        self.min_sample_size = min_sample_size
        self.threshold = threshold
        self.report_delta = report_delta
        self.traits = tuple(traits)
        self.discovered: List[TraitCorrelation] = []
        self.current: Dict[Tuple[str, str], TraitCorrelation] = {}

    def compute_all(self, organisms: Iterable[Organism], day: int) -> List[TraitCorrelation]:
        """Coefficients for every defined pair, without any reporting filter."""
        organisms = list(organisms)
        if len(organisms) < self.min_sample_size:
            return []

        columns = {name: [o.traits.get(name) for o in organisms] for name in self.traits}
        results = []
        for trait_a, trait_b in combinations(self.traits, 2):
            r = pearson(columns[trait_a], columns[trait_b])
            if r is None:
                continue
            results.append(
                TraitCorrelation(
                    trait_a, trait_b, r, len(organisms), day, _p_value(r, len(organisms))
                )
            )
        return results

    def analyze(self, organisms: Iterable[Organism], day: int) -> List[TraitCorrelation]:
        """Return newly reportable correlations and remember them."""
        reported = []
        for correlation in self.compute_all(organisms, day):
            if abs(correlation.coefficient) < self.threshold:
                continue
            previous = self.current.get(correlation.pair)
            if (
                previous is not None
                and abs(correlation.coefficient - previous.coefficient) <= self.report_delta
            ):
                continue
            self.current[correlation.pair] = correlation
            self.discovered.append(correlation)
            reported.append(correlation)
            logger.info("Day %d: %s", day, correlation.description)
        return reported

    def top_correlations(self, count: int = 5) -> List[TraitCorrelation]:
        ranked = sorted(self.current.values(), key=lambda c: abs(c.coefficient), reverse=True)
        return ranked[: max(0, count)]

    def correlations_for(self, trait: str) -> List[TraitCorrelation]:
        return [c for c in self.current.values() if trait in c.pair]

    def insights(self) -> List[str]:
        """Human-readable observations about the strongest relationships."""
        notes = []
        for trait_a, trait_b, message in TRADEOFF_PAIRS:
            correlation = self.current.get((trait_a, trait_b)) or self.current.get(
                (trait_b, trait_a)
            )
            if correlation is not None and correlation.coefficient <= -TRADEOFF_STRENGTH:
                notes.append(f"Trade-off: {message} (r={correlation.coefficient:.2f})")

        positives = [c for c in self.current.values() if c.is_positive]
        if positives:
            strongest = max(positives, key=lambda c: c.coefficient)
            notes.append(
                f"{strongest.trait_a} and {strongest.trait_b} are evolving together "
                f"(r={strongest.coefficient:.2f})"
            )
        return notes

    def reset(self) -> None:
        self.discovered.clear()
        self.current.clear()
