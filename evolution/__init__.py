"""Evolutionary foraging simulation engine.

This package contains the pure simulation logic with no UI dependencies.
Key modules include:

- simulation: the step-driven engine and its day cycle
- environment: food patterns, terrain, weather, temperature, day/night
- genetics: trait vector, mutation and genetic distance
- speciation / lineage_tracker: population structure over time
- fitness / milestones / correlation: read-only analytics
- state_payloads: JSON export of published statistics

Design note: this module exposes a small, explicit public API via ``__all__``.
"""

from evolution.config.simulation_config import GameConfiguration
from evolution.events.event_bus import EventBus
from evolution.simulation.engine import SimulationEngine

__all__ = [
    "EventBus",
    "GameConfiguration",
    "SimulationEngine",
]

__version__ = "0.1.0"
