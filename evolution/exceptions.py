"""Evolution simulation exception hierarchy.

Centralised base classes so callers can catch simulation failures
narrowly instead of relying on bare ``except Exception`` blocks.
"""


class EvolutionError(Exception):
    """Root of all evolution-simulation domain exceptions."""


class SimulationError(EvolutionError):
    """Errors during simulation execution (engine, day cycle, systems)."""


class EntityError(SimulationError):
    """An entity-level failure (unknown id, duplicate registration)."""


class GeneticsError(SimulationError):
    """Trait lookup, mutation, or distance failure."""


class ConfigurationError(EvolutionError):
    """Invalid or missing configuration."""
