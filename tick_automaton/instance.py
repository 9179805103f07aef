"""MachineInstance - current state, bounded history, and callback dispatch."""
from __future__ import annotations

import logging
from collections import deque
from typing import Hashable

from tick_automaton.callbacks import CallbackRegistry, StateCallback, TransitionCallback
from tick_automaton.config import InstanceConfig
from tick_automaton.definition import MachineDefinition
from tick_automaton.types import (
    InvalidInputError,
    NoTransitionError,
    ReentrantTransitionError,
    TransitionError,
    TransitionRecord,
    TransitionResult,
)

logger = logging.getLogger(__name__)


class MachineInstance:
    """A live run of a definition.

    One instance has one owner. Nothing here is locked; callers sharing an
    instance across threads must serialize access themselves. Callbacks
    must not call ``transition()`` or ``reset()`` on the instance that is
    dispatching them; doing so raises ``ReentrantTransitionError``.
    """

    def __init__(
        self,
        definition: MachineDefinition,
        config: InstanceConfig | None = None,
    ) -> None:
        self._definition = definition
        self._config = config if config is not None else InstanceConfig()
        self._state = definition.initial_state()
        self._history: deque[TransitionRecord] = deque(maxlen=self._config.max_history_size)
        self._callbacks = CallbackRegistry()
        self._dispatching = False

    @classmethod
    def with_max_history(cls, definition: MachineDefinition, max_size: int) -> MachineInstance:
        return cls(definition, InstanceConfig(max_history_size=max_size))

    @property
    def definition(self) -> MachineDefinition:
        return self._definition

    @property
    def current_state(self) -> Hashable:
        return self._state

    @property
    def history(self) -> tuple[TransitionRecord, ...]:
        """Snapshot of ``(state, input)`` records, oldest first."""
        return tuple(self._history)

    @property
    def max_history_size(self) -> int:
        return self._config.max_history_size

    @property
    def callbacks(self) -> CallbackRegistry:
        return self._callbacks

    def history_len(self) -> int:
        return len(self._history)

    def history_is_empty(self) -> bool:
        return not self._history

    def valid_inputs(self) -> list[Hashable]:
        return self._definition.valid_inputs(self._state)

    def can_accept(self, input: Hashable) -> bool:
        return input in self.valid_inputs()

    def transition(self, input: Hashable) -> Hashable:
        """Apply ``input`` and return the new state.

        Dispatch order: global exit, specific exit, global transition,
        specific transition, global entry, specific entry. Exit and entry
        callbacks are skipped for self-loops.

        Raises:
            InvalidInputError: ``input`` is not valid for the current state.
            NoTransitionError: the definition has no next state for a
                declared-valid input.
            ReentrantTransitionError: called from inside a callback.
        """
        if self._dispatching:
            raise ReentrantTransitionError("transition() called from inside a callback")
        old = self._state
        if not self.can_accept(input):
            logger.debug("Rejected input %r in state %r", input, old)
            raise InvalidInputError(old, input)
        new = self._definition.next_state(old, input)
        if new is None:
            logger.debug("No transition for input %r in state %r", input, old)
            raise NoTransitionError(old, input)

        changed = old != new
        self._dispatching = True
        try:
            if changed:
                self._callbacks.trigger_state_exit(old)
            self._callbacks.trigger_transition(old, input, new)
            self._history.append(TransitionRecord(old, input))
            self._state = new
            if changed:
                self._callbacks.trigger_state_entry(new)
        finally:
            self._dispatching = False
        logger.debug("Transition %r --%r--> %r", old, input, new)
        return new

    def try_transition(self, input: Hashable) -> TransitionResult:
        """Like ``transition()``, but rejected inputs come back as values.

        On failure ``result.state`` is the unchanged current state and
        ``result.error`` holds the ``TransitionError``.
        """
        try:
            return TransitionResult(self.transition(input))
        except TransitionError as exc:
            return TransitionResult(self._state, exc)

    def reset(self) -> None:
        """Return to the initial state and clear history. Callbacks stay."""
        if self._dispatching:
            raise ReentrantTransitionError("reset() called from inside a callback")
        self._state = self._definition.initial_state()
        self._history.clear()
        logger.debug("Reset to %r", self._state)

    def on_state_entry(self, state: Hashable, fn: StateCallback) -> None:
        self._callbacks.on_state_entry(state, fn)

    def on_state_exit(self, state: Hashable, fn: StateCallback) -> None:
        self._callbacks.on_state_exit(state, fn)

    def on_transition(self, state: Hashable, input: Hashable, fn: TransitionCallback) -> None:
        self._callbacks.on_transition(state, input, fn)

    def on_any_state_entry(self, fn: StateCallback) -> None:
        self._callbacks.on_any_state_entry(fn)

    def on_any_state_exit(self, fn: StateCallback) -> None:
        self._callbacks.on_any_state_exit(fn)

    def on_any_transition(self, fn: TransitionCallback) -> None:
        self._callbacks.on_any_transition(fn)

    def clear_callbacks(self) -> None:
        self._callbacks.clear()

    def callback_count(self) -> int:
        return self._callbacks.callback_count()

    def __repr__(self) -> str:
        return (
            f"MachineInstance(state={self._state!r}, history={len(self._history)}"
            f"/{self._config.max_history_size})"
        )
