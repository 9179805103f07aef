"""Callback registry for state entry, state exit, and transition events."""
from __future__ import annotations

from typing import Any, Callable, Hashable

StateCallback = Callable[[Any], None]
TransitionCallback = Callable[[Any, Any, Any], None]


class CallbackRegistry:
    """Six dispatch surfaces: entry/exit/transition, each specific and global.

    Within one surface callbacks run in registration order. Global
    callbacks run before the specific ones for the same event. Callbacks
    run synchronously; exceptions propagate to the caller.
    """

    def __init__(self) -> None:
        self._entry: dict[Hashable, list[StateCallback]] = {}
        self._exit: dict[Hashable, list[StateCallback]] = {}
        self._transition: dict[tuple[Hashable, Hashable], list[TransitionCallback]] = {}
        self._any_entry: list[StateCallback] = []
        self._any_exit: list[StateCallback] = []
        self._any_transition: list[TransitionCallback] = []

    def on_state_entry(self, state: Hashable, fn: StateCallback) -> None:
        self._entry.setdefault(state, []).append(fn)

    def on_state_exit(self, state: Hashable, fn: StateCallback) -> None:
        self._exit.setdefault(state, []).append(fn)

    def on_transition(self, state: Hashable, input: Hashable, fn: TransitionCallback) -> None:
        """Register for transitions leaving ``state`` on ``input``."""
        self._transition.setdefault((state, input), []).append(fn)

    def on_any_state_entry(self, fn: StateCallback) -> None:
        self._any_entry.append(fn)

    def on_any_state_exit(self, fn: StateCallback) -> None:
        self._any_exit.append(fn)

    def on_any_transition(self, fn: TransitionCallback) -> None:
        self._any_transition.append(fn)

    def trigger_state_entry(self, state: Hashable) -> None:
        for fn in self._any_entry:
            fn(state)
        for fn in self._entry.get(state, ()):
            fn(state)

    def trigger_state_exit(self, state: Hashable) -> None:
        for fn in self._any_exit:
            fn(state)
        for fn in self._exit.get(state, ()):
            fn(state)

    def trigger_transition(self, old: Hashable, input: Hashable, new: Hashable) -> None:
        for fn in self._any_transition:
            fn(old, input, new)
        for fn in self._transition.get((old, input), ()):
            fn(old, input, new)

    def clear(self) -> None:
        """Drop every registered callback from all six surfaces."""
        self._entry = {}
        self._exit = {}
        self._transition = {}
        self._any_entry = []
        self._any_exit = []
        self._any_transition = []

    def callback_count(self) -> int:
        return (
            sum(len(v) for v in self._entry.values())
            + sum(len(v) for v in self._exit.values())
            + sum(len(v) for v in self._transition.values())
            + len(self._any_entry)
            + len(self._any_exit)
            + len(self._any_transition)
        )

    def __len__(self) -> int:
        return self.callback_count()

    def __repr__(self) -> str:
        return f"CallbackRegistry(callback_count={self.callback_count()})"
