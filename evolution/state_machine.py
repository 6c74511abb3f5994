"""State machine abstractions for explicit state management.

The day cycle is modelled as an explicit state machine so that an
out-of-order phase change (for example running the evaluation twice
without a movement phase in between) fails immediately instead of
silently double-counting births and deaths.

Usage:
------
    transitions = {
        DayPhase.MOVEMENT: [DayPhase.EVALUATION],
        DayPhase.EVALUATION: [DayPhase.MOVEMENT],
    }

    phase = StateMachine(DayPhase.MOVEMENT, transitions)
    phase.transition(DayPhase.EVALUATION)  # OK
    phase.transition(DayPhase.EVALUATION)  # Raises! Already evaluating
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, TypeVar

from evolution.exceptions import SimulationError

S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging.

    Attributes:
        from_state: The state before transition
        to_state: The state after transition
        day: The simulation day when the transition occurred
        reason: Optional description of why transition happened
    """

    from_state: S
    to_state: S
    day: int
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation."""

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 100,
    ) -> None:
        """Initialize the state machine.

        Args:
            initial_state: The starting state
            valid_transitions: Map of state -> list of valid target states
            track_history: Whether to record transition history
            max_history: Maximum number of transitions to keep in history
        """
        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )

        self._initial_state = initial_state
        self._state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        """Get the current state."""
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Get transition history (empty if tracking disabled)."""
        return self._history.copy()

    def can_transition(self, target: S) -> bool:
        return target in self._transitions.get(self._state, [])

    def try_transition(self, target: S, day: int = 0, reason: str = "") -> bool:
        """Attempt to transition to a new state.

        Returns:
            True if the transition happened, False if it was invalid
        """
        if not self.can_transition(target):
            return False

        old_state = self._state
        self._state = target
        if self._track_history:
            self._record_transition(old_state, target, day, reason)
        return True

    def transition(self, target: S, day: int = 0, reason: str = "") -> S:
        """Transition to a new state, raising on invalid transition.

        Raises:
            SimulationError: If the transition is not allowed from the current state
        """
        if not self.try_transition(target, day, reason):
            valid_targets = self._transitions.get(self._state, [])
            raise SimulationError(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {[t.name for t in valid_targets]}"
            )
        return target

    def reset(self) -> None:
        """Return to the initial state and drop history."""
        self._state = self._initial_state
        self._history.clear()

    def _record_transition(self, from_state: S, to_state: S, day: int, reason: str) -> None:
        self._history.append(
            StateTransition(from_state=from_state, to_state=to_state, day=day, reason=reason)
        )
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history :]

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"


# ============================================================================
# Day Cycle State Machine
# ============================================================================


class DayPhase(Enum):
    """Phases of a simulated day.

    MOVEMENT is where organisms forage tick by tick. EVALUATION is
    instantaneous: it is entered and left within a single step while
    ageing, reproduction, deaths and the next day's food are resolved.
    """

    MOVEMENT = "movement"
    EVALUATION = "evaluation"


DAY_PHASE_TRANSITIONS: Dict[DayPhase, List[DayPhase]] = {
    DayPhase.MOVEMENT: [DayPhase.EVALUATION],
    DayPhase.EVALUATION: [DayPhase.MOVEMENT],
}


def create_day_cycle_state_machine(track_history: bool = False) -> StateMachine[DayPhase]:
    """Create a state machine for the Movement/Evaluation day cycle."""
    return StateMachine(
        initial_state=DayPhase.MOVEMENT,
        valid_transitions=DAY_PHASE_TRANSITIONS,
        track_history=track_history,
    )
