"""Organism arena and id allocation.

The population is the single owner of every live organism. Organisms
are addressed by a stable integer id; all auxiliary tables (species
membership, lineage descendant sets) key on that same id, so no
component ever keeps a direct reference to an organism across steps.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterator, List, Optional

from evolution.entities import Organism
from evolution.exceptions import EntityError

logger = logging.getLogger(__name__)


class Population:
    """Insertion-ordered arena of live organisms keyed by id."""

    def __init__(self) -> None:
        self._organisms: Dict[int, Organism] = {}
        self._next_id = 1

    def generate_id(self) -> int:
        """Allocate the next organism id. Ids are never reused within a run."""
        organism_id = self._next_id
        self._next_id += 1
        return organism_id

    def add(self, organism: Organism) -> None:
        if organism.id in self._organisms:
            raise EntityError(f"Organism {organism.id} is already in the population")
        self._organisms[organism.id] = organism
        if organism.id >= self._next_id:
            self._next_id = organism.id + 1

    def remove(self, organism_id: int) -> Organism:
        try:
            return self._organisms.pop(organism_id)
        except KeyError:
            raise EntityError(f"Organism {organism_id} is not in the population") from None

    def get(self, organism_id: int) -> Optional[Organism]:
        return self._organisms.get(organism_id)

    def ids(self) -> List[int]:
        return list(self._organisms)

    def organisms(self) -> List[Organism]:
        """Snapshot list, safe to iterate while the arena is mutated."""
        return list(self._organisms.values())

    def by_species(self) -> Dict[int, int]:
        counts: Dict[int, int] = defaultdict(int)
        for organism in self._organisms.values():
            counts[organism.species_id] += 1
        return dict(counts)

    def clear(self) -> None:
        self._organisms.clear()
        self._next_id = 1

    def __iter__(self) -> Iterator[Organism]:
        return iter(list(self._organisms.values()))

    def __len__(self) -> int:
        return len(self._organisms)

    def __contains__(self, organism_id: object) -> bool:
        return organism_id in self._organisms
