"""Tests for MachineInstance: transitions, history, reset, errors."""
from __future__ import annotations

import pytest

from conftest import Door, DoorInput
from tick_automaton import (
    DEFAULT_MAX_HISTORY_SIZE,
    InstanceConfig,
    InvalidInputError,
    MachineInstance,
    NoTransitionError,
    ReentrantTransitionError,
    TransitionError,
    TransitionRecord,
)


class GappyDefinition:
    """Declares 'go' valid in 'a' but has no next state for it."""

    def states(self):
        return ["a"]

    def inputs(self):
        return ["go"]

    def initial_state(self):
        return "a"

    def valid_inputs(self, state):
        return ["go"]

    def next_state(self, state, input):
        return None

    def state_name(self, state):
        return state

    def input_name(self, input):
        return input


class TestTransitions:

    def test_initial_state(self, door):
        sm = MachineInstance(door)
        assert sm.current_state == Door.CLOSED
        assert sm.history_is_empty()
        assert sm.history_len() == 0

    def test_valid_transition_returns_new_state(self, traffic_light):
        sm = MachineInstance(traffic_light)
        assert sm.transition("Timer") == "Green"
        assert sm.current_state == "Green"
        assert sm.transition("Timer") == "Yellow"

    def test_valid_inputs_and_can_accept(self, door):
        sm = MachineInstance(door)
        assert sm.valid_inputs() == [DoorInput.OPEN_DOOR, DoorInput.LOCK]
        assert sm.can_accept(DoorInput.LOCK)
        assert not sm.can_accept(DoorInput.UNLOCK)

    def test_invalid_input_leaves_state_and_history(self, door):
        """OpenDoor then Lock: Lock is not valid from OPEN."""
        sm = MachineInstance(door)
        sm.transition(DoorInput.OPEN_DOOR)

        with pytest.raises(InvalidInputError) as info:
            sm.transition(DoorInput.LOCK)

        assert info.value.state == Door.OPEN
        assert info.value.input == DoorInput.LOCK
        assert sm.current_state == Door.OPEN
        assert sm.history == (TransitionRecord(Door.CLOSED, DoorInput.OPEN_DOOR),)

    def test_invalid_input_fires_no_callbacks(self, door):
        sm = MachineInstance(door)
        fired = []
        sm.on_any_transition(lambda *a: fired.append(a))
        sm.on_any_state_exit(fired.append)

        with pytest.raises(InvalidInputError):
            sm.transition(DoorInput.UNLOCK)

        assert fired == []

    def test_unknown_input_value_is_invalid(self, order):
        sm = MachineInstance(order)
        with pytest.raises(InvalidInputError):
            sm.transition("Teleport")

    def test_no_transition_for_definition_gap(self):
        sm = MachineInstance(GappyDefinition())
        fired = []
        sm.on_any_transition(lambda *a: fired.append(a))

        with pytest.raises(NoTransitionError) as info:
            sm.transition("go")

        assert info.value.state == "a"
        assert sm.current_state == "a"
        assert sm.history_is_empty()
        assert fired == []

    def test_errors_share_base_class(self):
        assert issubclass(InvalidInputError, TransitionError)
        assert issubclass(NoTransitionError, TransitionError)

    def test_determinism_across_instances(self, traffic_light):
        for state in traffic_light.states():
            for inp in traffic_light.valid_inputs(state):
                results = set()
                for _ in range(3):
                    sm = MachineInstance(traffic_light)
                    # Timer cycles through every state
                    while sm.current_state != state:
                        sm.transition("Timer")
                    results.add(sm.transition(inp))
                assert len(results) == 1


class TestTryTransition:

    def test_success(self, order):
        sm = MachineInstance(order)
        result = sm.try_transition("Pay")
        assert result.ok
        assert result.state == "Paid"
        assert result.error is None

    def test_failure_returns_error_value(self, order):
        sm = MachineInstance(order)
        result = sm.try_transition("Deliver")
        assert not result.ok
        assert result.state == "Created"
        assert isinstance(result.error, InvalidInputError)
        assert sm.current_state == "Created"


class TestHistory:

    def test_default_size(self, door):
        sm = MachineInstance(door)
        assert sm.max_history_size == DEFAULT_MAX_HISTORY_SIZE == 512

    def test_size_one_keeps_latest(self, door):
        """OpenDoor then CloseDoor with capacity 1 keeps only (OPEN, CLOSE_DOOR)."""
        sm = MachineInstance.with_max_history(door, 1)
        sm.transition(DoorInput.OPEN_DOOR)
        sm.transition(DoorInput.CLOSE_DOOR)

        assert sm.history == (TransitionRecord(Door.OPEN, DoorInput.CLOSE_DOOR),)

    def test_size_zero_keeps_nothing(self, door):
        sm = MachineInstance.with_max_history(door, 0)
        fired = []
        sm.on_any_state_entry(fired.append)
        sm.transition(DoorInput.OPEN_DOOR)

        assert sm.history_len() == 0
        assert sm.current_state == Door.OPEN
        assert fired == [Door.OPEN]

    @pytest.mark.parametrize("capacity", [0, 1, 3, 10])
    def test_bound_and_fifo_eviction(self, traffic_light, capacity):
        sm = MachineInstance(traffic_light, InstanceConfig(max_history_size=capacity))
        applied = []
        for _ in range(7):
            before = sm.current_state
            sm.transition("Timer")
            applied.append(TransitionRecord(before, "Timer"))

        assert sm.history_len() == min(7, capacity)
        assert list(sm.history) == (applied[-capacity:] if capacity else [])

    def test_records_unpack(self, order):
        sm = MachineInstance(order)
        sm.transition("Pay")
        ((state, inp),) = sm.history
        assert (state, inp) == ("Created", "Pay")

    def test_history_is_snapshot(self, order):
        sm = MachineInstance(order)
        snapshot = sm.history
        sm.transition("Pay")
        assert snapshot == ()
        assert len(sm.history) == 1

    def test_negative_size_rejected(self, door):
        with pytest.raises(ValueError):
            MachineInstance.with_max_history(door, -1)


class TestReset:

    def test_reset_restores_initial_and_clears_history(self, order):
        sm = MachineInstance(order)
        sm.transition("Pay")
        sm.transition("Ship")
        sm.reset()

        assert sm.current_state == "Created"
        assert sm.history_is_empty()

    def test_reset_keeps_callbacks(self, order):
        sm = MachineInstance(order)
        sm.on_any_transition(lambda *a: None)
        sm.reset()
        assert sm.callback_count() == 1


class TestReentrancy:

    def test_transition_inside_callback_raises(self, traffic_light):
        sm = MachineInstance(traffic_light)
        sm.on_state_entry("Green", lambda s: sm.transition("Timer"))

        with pytest.raises(ReentrantTransitionError):
            sm.transition("Timer")

    def test_reset_inside_callback_raises(self, traffic_light):
        sm = MachineInstance(traffic_light)
        sm.on_any_transition(lambda *a: sm.reset())

        with pytest.raises(ReentrantTransitionError):
            sm.transition("Timer")

    def test_instance_usable_after_callback_error(self, traffic_light):
        sm = MachineInstance(traffic_light)

        def boom(state):
            raise RuntimeError("boom")

        sm.on_state_exit("Red", boom)
        with pytest.raises(RuntimeError, match="boom"):
            sm.transition("Timer")

        sm.clear_callbacks()
        assert sm.current_state == "Red"
        assert sm.transition("Timer") == "Green"
