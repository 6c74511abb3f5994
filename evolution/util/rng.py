"""RNG utilities for deterministic simulation.

Every component that draws random numbers receives the engine's
``random.Random`` explicitly. These helpers fail loudly when that
contract is broken rather than silently creating an unseeded fallback.
"""

import random
from typing import Optional


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but was not injected.

    This indicates a wiring bug: the engine owns the only RNG and
    passes it to every collaborator at construction time.
    """


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Args:
        rng: The RNG parameter to validate
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None

    Example:
        self.rng = require_rng_param(rng, "FoodSpawner.__init__")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG parameter is required but was None (context: {context}). "
            "Pass the engine's rng explicitly to keep runs reproducible."
        )
    return rng
