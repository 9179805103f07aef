"""tick-automaton - Deterministic finite state machines with history, callbacks, and graph queries."""
from __future__ import annotations

from tick_automaton.callbacks import CallbackRegistry
from tick_automaton.config import DocConfig, InstanceConfig
from tick_automaton.definition import (
    MachineDefinition,
    TableDefinition,
    define_machine,
    display_name,
    is_hidden_input,
)
from tick_automaton.doc import (
    generate_full_documentation,
    generate_mermaid,
    generate_statistics,
    generate_transition_table,
)
from tick_automaton.instance import MachineInstance
from tick_automaton.query import (
    has_path,
    is_strongly_connected,
    reachable_states,
    shortest_path,
    states_leading_to,
    successors,
    terminal_states,
)
from tick_automaton.types import (
    DEFAULT_MAX_HISTORY_SIZE,
    DefinitionError,
    InvalidInputError,
    NoTransitionError,
    ReentrantTransitionError,
    TransitionError,
    TransitionRecord,
    TransitionResult,
)

__all__ = [
    "CallbackRegistry",
    "DocConfig",
    "InstanceConfig",
    "MachineDefinition",
    "TableDefinition",
    "define_machine",
    "display_name",
    "is_hidden_input",
    "generate_full_documentation",
    "generate_mermaid",
    "generate_statistics",
    "generate_transition_table",
    "MachineInstance",
    "has_path",
    "is_strongly_connected",
    "reachable_states",
    "shortest_path",
    "states_leading_to",
    "successors",
    "terminal_states",
    "DEFAULT_MAX_HISTORY_SIZE",
    "DefinitionError",
    "InvalidInputError",
    "NoTransitionError",
    "ReentrantTransitionError",
    "TransitionError",
    "TransitionRecord",
    "TransitionResult",
]
