"""Shared types and errors for tick-automaton."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Hashable, Iterator, TypeVar

StateT = TypeVar("StateT", bound=Hashable)
InputT = TypeVar("InputT", bound=Hashable)

DEFAULT_MAX_HISTORY_SIZE = 512


@dataclass(frozen=True, slots=True)
class TransitionRecord(Generic[StateT, InputT]):
    """One history entry: the state left and the input applied."""

    state: StateT
    input: InputT

    def __iter__(self) -> Iterator[Any]:
        yield self.state
        yield self.input


@dataclass(frozen=True, slots=True)
class TransitionResult(Generic[StateT]):
    """Outcome of ``MachineInstance.try_transition``."""

    state: StateT
    error: TransitionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TransitionError(Exception):
    """Base class for rejected transitions. No state was changed."""

    def __init__(self, state: Any, input: Any, message: str) -> None:
        self.state = state
        self.input = input
        super().__init__(message)


class InvalidInputError(TransitionError):
    """Raised when the input is not declared valid for the current state."""

    def __init__(self, state: Any, input: Any) -> None:
        super().__init__(state, input, f"Invalid input {input!r} for state {state!r}")


class NoTransitionError(TransitionError):
    """Raised when a declared-valid input has no next state in the definition."""

    def __init__(self, state: Any, input: Any) -> None:
        super().__init__(
            state, input,
            f"No valid transition from state {state!r} with input {input!r}",
        )


class DefinitionError(ValueError):
    """Raised when a transition table is malformed."""


class ReentrantTransitionError(RuntimeError):
    """Raised when a callback drives the instance that is dispatching it."""
