"""Configuration dataclasses."""
from __future__ import annotations

from dataclasses import dataclass

from tick_automaton.types import DEFAULT_MAX_HISTORY_SIZE


@dataclass(frozen=True)
class InstanceConfig:
    """Immutable configuration for a machine instance.

    Attributes:
        max_history_size: Transition records retained, oldest evicted first.
            Zero keeps no history.
    """

    max_history_size: int = DEFAULT_MAX_HISTORY_SIZE

    def __post_init__(self) -> None:
        if self.max_history_size < 0:
            raise ValueError(
                f"max_history_size must be >= 0, got {self.max_history_size}"
            )


@dataclass(frozen=True)
class DocConfig:
    """Immutable configuration for the documentation renderer.

    Attributes:
        hidden_prefix: Inputs whose display name starts with this are skipped
            in the diagram and the transition table.
        self_loop_split_threshold: Self-loops with more inputs than this are
            drawn one edge per input instead of one merged edge.
        title: Heading of the full document.
    """

    hidden_prefix: str = "_"
    self_loop_split_threshold: int = 2
    title: str = "State Machine Documentation"

    def __post_init__(self) -> None:
        if not self.hidden_prefix:
            raise ValueError("hidden_prefix must be non-empty")
        if self.self_loop_split_threshold < 0:
            raise ValueError(
                "self_loop_split_threshold must be >= 0, "
                f"got {self.self_loop_split_threshold}"
            )
