"""Tests for statistics serialization and the headless runner."""

import logging

import orjson

from evolution.logging_config import configure_logging
from evolution.state_payloads import StatisticsPayload, dumps_statistics, statistics_to_payload
from main import run_headless


def test_payload_mirrors_statistics(simulation_engine):
    stats = simulation_engine.latest_statistics
    payload = statistics_to_payload(stats)

    assert isinstance(payload, StatisticsPayload)
    assert payload.day == 0
    assert payload.population == 10
    assert len(payload.organisms) == 10
    assert set(payload.trait_stats) == set(dict(stats.trait_stats))
    assert payload.species[0].color.startswith("#")
    assert payload.new_milestones


def test_dumps_produces_json_bytes(simulation_engine):
    data = dumps_statistics(simulation_engine.latest_statistics)

    assert isinstance(data, bytes)
    decoded = orjson.loads(data)
    assert decoded["day"] == 0
    assert decoded["deaths_by_cause"] == {"starvation": 0, "old_age": 0, "low_energy": 0, "hazard": 0}
    assert decoded["history"][0]["population"] == 10
    assert decoded["organisms"][0]["traits"]["speed"] == 10


def test_payload_validates_against_model(simulation_engine):
    simulation_engine.force_next_day()
    decoded = orjson.loads(dumps_statistics(simulation_engine.latest_statistics))
    restored = StatisticsPayload.model_validate(decoded)
    assert restored.day == 1
    assert restored.total_deaths == decoded["total_deaths"]


def test_run_headless_exports_statistics(tmp_path):
    export = tmp_path / "stats.json"
    engine = run_headless(2, preset="fast_evolution", seed=3, export_stats=str(export))

    decoded = orjson.loads(export.read_bytes())
    assert decoded["day"] == engine.day
    assert decoded["population"] == len(engine.population)


def test_configure_logging_honors_env(monkeypatch):
    monkeypatch.setenv("EVOLUTION_LOG_LEVEL", "warning")
    logger = configure_logging()
    assert logger.name == "evolution"
    assert logger.level == logging.WARNING

    assert configure_logging(level="debug").level == logging.DEBUG
