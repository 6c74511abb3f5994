"""Heritable trait vector.

This module provides:
- TRAIT_NAMES: the canonical ordering of the trait vector
- Traits: an immutable record of one organism's trait values
- Helpers to build and clamp trait vectors against a TraitConfig
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import TYPE_CHECKING, Dict, Tuple

from evolution.exceptions import GeneticsError

if TYPE_CHECKING:
    from evolution.config.simulation_config import InitialTraits, TraitConfig


TRAIT_NAMES: Tuple[str, ...] = (
    "speed",
    "sense_range",
    "size",
    "fertility",
    "energy_efficiency",
    "max_age",
    "aggression",
    "defense",
    "metabolism",
    "heat_tolerance",
    "cold_tolerance",
)


@dataclass(frozen=True)
class Traits:
    """Trait values of a single organism.

    Integer-valued traits (speed, sense_range, max_age) are stored as
    ints once they have been clamped against a discrete TraitBounds.
    """

    speed: float
    sense_range: float
    size: float
    fertility: float
    energy_efficiency: float
    max_age: float
    aggression: float
    defense: float
    metabolism: float
    heat_tolerance: float
    cold_tolerance: float

    def get(self, name: str) -> float:
        if name not in TRAIT_NAMES:
            raise GeneticsError(f"Unknown trait: {name}")
        return getattr(self, name)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in TRAIT_NAMES)

    def replace(self, **changes: float) -> "Traits":
        unknown = set(changes) - set(TRAIT_NAMES)
        if unknown:
            raise GeneticsError(f"Unknown trait(s): {sorted(unknown)}")
        return replace(self, **changes)

    def clamped(self, trait_config: "TraitConfig") -> "Traits":
        """Return a copy with every value clamped into its configured bounds."""
        return Traits(
            **{
                name: trait_config.bounds_for(name).clamp(getattr(self, name))
                for name in TRAIT_NAMES
            }
        )

    @classmethod
    def from_initial(
        cls, initial: "InitialTraits", trait_config: "TraitConfig"
    ) -> "Traits":
        values = {f.name: getattr(initial, f.name) for f in fields(initial)}
        return cls(**values).clamped(trait_config)
