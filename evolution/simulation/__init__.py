"""Simulation engine and day-cycle orchestration."""

from evolution.simulation.day_cycle import DayCycle, DayReport
from evolution.simulation.engine import SimulationEngine

__all__ = ["DayCycle", "DayReport", "SimulationEngine"]
