"""Tests for record and threshold milestones."""

from evolution.milestones import MilestoneType, RecordTracker


def _types(milestones):
    return [m.type for m in milestones]


def test_empty_population_fires_nothing():
    assert RecordTracker().check_records([], day=1, species_count=0) == []


def test_first_scan_sets_trait_records(make_organism):
    tracker = RecordTracker()
    fired = tracker.check_records([make_organism()], day=0, species_count=1)

    assert MilestoneType.SPEED_RECORD in _types(fired)
    assert tracker.speed_record == 10


def test_records_fire_only_when_beaten(make_organism):
    tracker = RecordTracker()
    organism = make_organism()
    tracker.check_records([organism], day=0, species_count=1)

    assert tracker.check_records([organism], day=1, species_count=1) == []

    faster = make_organism(speed=12)
    fired = tracker.check_records([organism, faster], day=2, species_count=1)
    assert _types(fired) == [MilestoneType.SPEED_RECORD]
    assert fired[0].organism_id == faster.id


def test_population_threshold_fires_once(make_organism):
    tracker = RecordTracker()
    organisms = [make_organism() for _ in range(25)]

    first = tracker.check_records(organisms, day=1, species_count=1)
    second = tracker.check_records(organisms + [make_organism()], day=2, species_count=1)

    assert _types(first).count(MilestoneType.POPULATION_25) == 1
    assert MilestoneType.POPULATION_25 not in _types(second)
    assert tracker.has_achieved(MilestoneType.POPULATION_25)
    assert not tracker.has_achieved(MilestoneType.POPULATION_50)


def test_generation_thresholds_fire_in_order(make_organism):
    tracker = RecordTracker()
    organism = make_organism()
    organism.generation = 30

    fired = tracker.check_records([organism], day=1, species_count=1)

    generation_types = [t for t in _types(fired) if t.name.startswith("GENERATION")]
    assert generation_types == [MilestoneType.GENERATION_10, MilestoneType.GENERATION_25]


def test_day_threshold_fires_once(make_organism):
    tracker = RecordTracker()
    organism = make_organism()
    tracker.check_records([organism], day=99, species_count=1)

    assert MilestoneType.DAY_100 in _types(tracker.check_records([organism], day=100, species_count=1))
    assert tracker.check_records([organism], day=101, species_count=1) == []


def test_species_threshold(make_organism):
    tracker = RecordTracker()
    fired = tracker.check_records([make_organism()], day=1, species_count=5)
    assert MilestoneType.SPECIES_5 in _types(fired)


def test_mass_extinction():
    tracker = RecordTracker()
    assert tracker.record_mass_extinction(0, 0, day=1) is None
    assert tracker.record_mass_extinction(10, 6, day=1) is None

    milestone = tracker.record_mass_extinction(10, 4, day=2)
    assert milestone.type is MilestoneType.MASS_EXTINCTION
    assert milestone.value == 0.6
    assert milestone.description == "Mass extinction: 60% population loss"


def test_first_speciation_fires_once():
    tracker = RecordTracker()
    assert tracker.record_first_speciation(3, species_id=12).organism_id == 12
    assert tracker.record_first_speciation(4, species_id=20) is None
    assert len(tracker.of_type(MilestoneType.FIRST_SPECIATION)) == 1


def test_longevity_record(make_organism):
    tracker = RecordTracker()
    organism = make_organism()
    organism.age = 30
    assert tracker.record_longevity(organism, day=30) is not None
    assert tracker.record_longevity(organism, day=31) is None


def test_recent_and_reset(make_organism):
    tracker = RecordTracker()
    tracker.check_records([make_organism()], day=0, species_count=1)
    assert len(tracker.recent(2)) == 2
    assert tracker.recent(0) == []

    tracker.reset()
    assert tracker.milestones == []
    assert tracker.speed_record == 0.0
