"""Tests for species founding, membership and extinction."""

import math

import pytest

from evolution.genetics import genetic_distance
from evolution.palette import DISTINCT_COLORS, SpeciesPalette, to_hex
from evolution.speciation import SpeciesRegistry, generate_species_name


def test_founder_species_uses_founder_id(config, make_organism):
    registry = SpeciesRegistry(config)
    founder = make_organism(organism_id=3)

    species = registry.found_species(founder, day=0)

    assert species.id == 3
    assert founder.species_id == 3
    assert species.population == 1
    assert registry.active_count == 1


def test_divergent_child_founds_new_species(config, make_organism):
    registry = SpeciesRegistry(config)
    parent = make_organism(organism_id=1)
    parent_species = registry.found_species(parent, day=0)
    # A lone aggression shift of 0.24 over a unit range is 0.24 / sqrt(11) ~= 0.0724.
    child = make_organism(organism_id=2, aggression=parent.traits.aggression + 0.24)
    child.species_id = parent.species_id

    distance = genetic_distance(child.traits, parent.traits, config.traits)
    assert distance == pytest.approx(0.24 / math.sqrt(11))
    assert config.speciation_threshold == 0.07
    assert distance > config.speciation_threshold

    new_species = registry.assign_offspring(child, parent, day=4)

    assert new_species is not None
    assert new_species.id == child.id
    assert child.species_id == child.id
    assert new_species.population == 1
    assert new_species.founded_on_day == 4
    assert parent_species.population == 1
    assert registry.active_count == 2


def test_child_just_under_threshold_stays_in_parent_species(config, make_organism):
    registry = SpeciesRegistry(config)
    parent = make_organism(organism_id=1)
    species = registry.found_species(parent, day=0)
    child = make_organism(organism_id=2, aggression=parent.traits.aggression + 0.22)

    assert genetic_distance(child.traits, parent.traits, config.traits) < 0.07
    assert registry.assign_offspring(child, parent, day=1) is None
    assert child.species_id == species.id


def test_similar_child_joins_parent_species(config, make_organism):
    registry = SpeciesRegistry(config)
    parent = make_organism(organism_id=1)
    species = registry.found_species(parent, day=0)
    child = make_organism(organism_id=2)

    assert registry.assign_offspring(child, parent, day=1) is None
    assert child.species_id == species.id
    assert species.population == 2


def test_speciation_can_be_disabled(config, make_organism):
    config.speciation_threshold = 0.0
    config.speciation_enabled = False
    registry = SpeciesRegistry(config)
    parent = make_organism(organism_id=1)
    registry.found_species(parent, day=0)
    child = make_organism(organism_id=2, speed=25)

    assert registry.assign_offspring(child, parent, day=1) is None
    assert registry.active_count == 1


def test_recompute_marks_extinction_exactly_once(config, make_organism):
    registry = SpeciesRegistry(config)
    first = make_organism(organism_id=1)
    second = make_organism(organism_id=2)
    registry.found_species(first, day=0)
    registry.found_species(second, day=0)

    extinct = registry.recompute_populations([second], day=5)
    assert [s.id for s in extinct] == [1]
    assert registry.get(1).extinct_on_day == 5
    assert registry.get(2).population == 1

    assert registry.recompute_populations([second], day=6) == []
    assert registry.get(1).extinct_on_day == 5
    assert [s.id for s in registry.active_species()] == [2]
    assert len(registry.all_species()) == 2


def test_active_populations_sum_to_population_size(config, make_organism):
    registry = SpeciesRegistry(config)
    organisms = [make_organism(organism_id=i) for i in range(1, 7)]
    registry.found_species(organisms[0], day=0)
    registry.found_species(organisms[3], day=0)
    for organism in organisms[1:3]:
        organism.species_id = 1
    for organism in organisms[4:]:
        organism.species_id = 4

    registry.recompute_populations(organisms, day=1)

    assert sum(s.population for s in registry.active_species()) == len(organisms)


def test_species_names_are_deterministic(config, make_organism):
    organism = make_organism()
    assert generate_species_name(organism.traits, 3) == generate_species_name(organism.traits, 3)


class TestSpeciesPalette:
    def test_colors_are_distinct_until_exhausted(self):
        palette = SpeciesPalette()
        colors = [palette.allocate() for _ in DISTINCT_COLORS]
        assert len(set(colors)) == len(DISTINCT_COLORS)

    def test_palette_recycles_after_exhaustion(self):
        palette = SpeciesPalette(colors=((1, 2, 3), (4, 5, 6)))
        palette.allocate()
        palette.allocate()
        assert palette.allocate() == to_hex((1, 2, 3))

    def test_reset_restarts_allocation(self):
        palette = SpeciesPalette()
        first = palette.allocate()
        palette.allocate()
        palette.reset()
        assert palette.allocate() == first

    def test_registries_do_not_share_colors(self, config, make_organism):
        first = SpeciesRegistry(config)
        second = SpeciesRegistry(config)
        a = first.found_species(make_organism(), day=0)
        b = second.found_species(make_organism(), day=0)
        assert a.color == b.color == to_hex(DISTINCT_COLORS[0])
