"""Tests for the day-cycle state machine."""

import pytest

from evolution.exceptions import SimulationError
from evolution.state_machine import DayPhase, StateMachine, create_day_cycle_state_machine


def test_day_cycle_alternates_phases():
    phase = create_day_cycle_state_machine()
    assert phase.state is DayPhase.MOVEMENT
    phase.transition(DayPhase.EVALUATION)
    phase.transition(DayPhase.MOVEMENT)
    assert phase.state is DayPhase.MOVEMENT


def test_invalid_transition_raises():
    phase = create_day_cycle_state_machine()
    with pytest.raises(SimulationError, match="MOVEMENT -> MOVEMENT"):
        phase.transition(DayPhase.MOVEMENT)


def test_try_transition_reports_failure_without_raising():
    phase = create_day_cycle_state_machine()
    assert not phase.try_transition(DayPhase.MOVEMENT)
    assert phase.try_transition(DayPhase.EVALUATION)
    assert phase.state is DayPhase.EVALUATION


def test_history_is_tracked_and_bounded():
    phase = StateMachine(
        DayPhase.MOVEMENT,
        {DayPhase.MOVEMENT: [DayPhase.EVALUATION], DayPhase.EVALUATION: [DayPhase.MOVEMENT]},
        track_history=True,
        max_history=3,
    )
    for day in range(4):
        phase.transition(DayPhase.EVALUATION, day=day, reason="day complete")
        phase.transition(DayPhase.MOVEMENT, day=day, reason="new day")

    history = phase.history
    assert len(history) == 3
    assert history[-1].to_state is DayPhase.MOVEMENT
    assert history[-1].day == 3


def test_reset_returns_to_initial_state():
    phase = create_day_cycle_state_machine(track_history=True)
    phase.transition(DayPhase.EVALUATION)
    phase.reset()
    assert phase.state is DayPhase.MOVEMENT
    assert phase.history == []


def test_initial_state_must_be_known():
    with pytest.raises(ValueError):
        StateMachine(DayPhase.EVALUATION, {DayPhase.MOVEMENT: [DayPhase.EVALUATION]})
