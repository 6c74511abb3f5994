"""Species detection and bookkeeping.

A child founds a new species when its genetic distance from its parent
reaches the speciation threshold; its own id becomes the species id.
Species populations are recounted from the live population, and a
species whose count reaches zero is marked extinct permanently.
"""

from __future__ import annotations

import logging
import zlib
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from evolution.config.simulation_config import GameConfiguration
from evolution.entities import Organism
from evolution.genetics.distance import genetic_distance
from evolution.genetics.trait import Traits
from evolution.palette import SpeciesPalette

logger = logging.getLogger(__name__)

NAME_PREFIXES = ("Neo", "Proto", "Mega", "Micro", "Ultra", "Hyper", "Paleo", "Eu")
NAME_ROOTS = (
    "thermus",
    "rapidus",
    "fortis",
    "sapiens",
    "agilis",
    "robustus",
    "gracilis",
    "validus",
)
NAME_SUFFIXES = ("", " alpha", " beta", " gamma", " prime")


def generate_species_name(traits: Traits, generation: int) -> str:
    """Deterministic binomial-style name derived from the founder's traits."""
    signature = ",".join(f"{value:.3f}" for value in traits.as_tuple())
    prefix = NAME_PREFIXES[zlib.crc32(signature.encode()) % len(NAME_PREFIXES)]
    root = NAME_ROOTS[zlib.crc32(f"{signature}{generation}".encode()) % len(NAME_ROOTS)]
    suffix = NAME_SUFFIXES[generation % len(NAME_SUFFIXES)]
    return f"{prefix}{root}{suffix}"


@dataclass
class Species:
    id: int
    founder_id: int
    name: str
    color: str
    founded_on_day: int
    population: int = 0
    extinct_on_day: Optional[int] = None

    @property
    def is_extinct(self) -> bool:
        return self.extinct_on_day is not None


class SpeciesRegistry:
    """Owns every species seen during a run, living or extinct."""

    def __init__(self, config: GameConfiguration, palette: Optional[SpeciesPalette] = None) -> None:
        self.config = config
        self.palette = palette or SpeciesPalette()
        self._species: Dict[int, Species] = {}

    def found_species(self, founder: Organism, day: int) -> Species:
        """Create a species founded by ``founder`` and assign it."""
        species = Species(
            id=founder.id,
            founder_id=founder.id,
            name=generate_species_name(founder.traits, founder.generation),
            color=self.palette.allocate(),
            founded_on_day=day,
            population=1,
        )
        self._species[species.id] = species
        founder.species_id = species.id
        logger.info("Species %s (%d) founded on day %d", species.name, species.id, day)
        return species

    def is_new_species(self, child: Organism, parent: Organism) -> bool:
        if not self.config.speciation_enabled:
            return False
        distance = genetic_distance(child.traits, parent.traits, self.config.traits)
        return distance >= self.config.speciation_threshold

    def assign_offspring(self, child: Organism, parent: Organism, day: int) -> Optional[Species]:
        """Place ``child`` in its parent's species or found a new one.

        Returns:
            The newly founded species, or None if the child joined its parent's
        """
        if self.is_new_species(child, parent):
            return self.found_species(child, day)

        child.species_id = parent.species_id
        species = self._species.get(parent.species_id)
        if species is not None and not species.is_extinct:
            species.population += 1
        return None

    def recompute_populations(self, organisms: Iterable[Organism], day: int) -> List[Species]:
        """Recount every living species and mark empty ones extinct.

        Returns:
            Species that went extinct during this call
        """
        counts: Dict[int, int] = {}
        for organism in organisms:
            counts[organism.species_id] = counts.get(organism.species_id, 0) + 1

        newly_extinct = []
        for species in self._species.values():
            if species.is_extinct:
                continue
            species.population = counts.get(species.id, 0)
            if species.population == 0:
                species.extinct_on_day = day
                newly_extinct.append(species)
                logger.info("Species %s (%d) went extinct on day %d", species.name, species.id, day)
        return newly_extinct

    def get(self, species_id: int) -> Optional[Species]:
        return self._species.get(species_id)

    def active_species(self) -> List[Species]:
        return [s for s in self._species.values() if not s.is_extinct]

    def all_species(self) -> List[Species]:
        return list(self._species.values())

    @property
    def active_count(self) -> int:
        return sum(1 for s in self._species.values() if not s.is_extinct)

    def reset(self) -> None:
        self._species.clear()
        self.palette.reset()
