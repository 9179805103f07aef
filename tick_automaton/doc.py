"""Documentation rendering: Mermaid diagrams, transition tables, statistics.

Inputs whose display name starts with ``DocConfig.hidden_prefix`` are left
out of the diagram and the table. Output follows declaration order.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Hashable

from tick_automaton.config import DocConfig
from tick_automaton.definition import is_hidden_input
from tick_automaton.query import successors

if TYPE_CHECKING:
    from tick_automaton.definition import MachineDefinition


def _visible_edges(
    definition: MachineDefinition, config: DocConfig,
) -> list[tuple[Hashable, Hashable, Hashable]]:
    return [
        (state, input, nxt)
        for state in definition.states()
        for input, nxt in successors(definition, state)
        if not is_hidden_input(definition.input_name(input), config.hidden_prefix)
    ]


def generate_mermaid(definition: MachineDefinition, config: DocConfig | None = None) -> str:
    """Render a ``stateDiagram-v2`` block.

    Parallel edges between the same two states share one label joined by
    ``" / "``. Self-loops come after the other edges; a state with more
    self-loop inputs than ``config.self_loop_split_threshold`` gets one
    edge per input.
    """
    config = config or DocConfig()
    sname = definition.state_name
    iname = definition.input_name

    edges: dict[tuple[Hashable, Hashable], list[Hashable]] = {}
    loops: dict[Hashable, list[Hashable]] = {}
    for state, input, nxt in _visible_edges(definition, config):
        if state == nxt:
            loops.setdefault(state, []).append(input)
        else:
            edges.setdefault((state, nxt), []).append(input)

    lines = ["stateDiagram-v2", f"    [*] --> {sname(definition.initial_state())}"]
    for (src, dst), inputs in edges.items():
        label = " / ".join(iname(i) for i in inputs)
        lines.append(f"    {sname(src)} --> {sname(dst)} : {label}")
    for state, inputs in loops.items():
        name = sname(state)
        if len(inputs) <= config.self_loop_split_threshold:
            label = " / ".join(iname(i) for i in inputs)
            lines.append(f"    {name} --> {name} : {label}")
        else:
            for input in inputs:
                lines.append(f"    {name} --> {name} : {iname(input)}")
    return "\n".join(lines) + "\n"


def generate_transition_table(
    definition: MachineDefinition, config: DocConfig | None = None,
) -> str:
    """Render a Markdown table of every visible transition."""
    config = config or DocConfig()
    lines = [
        "# State Transition Table",
        "",
        "| Current State | Input | Next State |",
        "|---------------|-------|------------|",
    ]
    for state, input, nxt in _visible_edges(definition, config):
        lines.append(
            f"| {definition.state_name(state)} | {definition.input_name(input)} "
            f"| {definition.state_name(nxt)} |"
        )
    return "\n".join(lines) + "\n"


def generate_statistics(definition: MachineDefinition) -> str:
    """Counts over all edges, hidden inputs included."""
    states = definition.states()
    transitions = 0
    self_loops = 0
    for state in states:
        for _, nxt in successors(definition, state):
            if nxt == state:
                self_loops += 1
            else:
                transitions += 1
    return (
        "# State Machine Statistics\n\n"
        f"- **Number of States**: {len(states)}\n"
        f"- **Number of Input Types**: {len(definition.inputs())}\n"
        f"- **Number of Transitions**: {transitions}\n"
        f"- **Number of Self-loops**: {self_loops}\n"
        f"- **Total Transitions**: {transitions + self_loops}\n"
        f"- **Initial State**: {definition.state_name(definition.initial_state())}\n"
    )


def generate_full_documentation(
    definition: MachineDefinition, config: DocConfig | None = None,
) -> str:
    config = config or DocConfig()
    return (
        f"# {config.title}\n\n"
        f"{generate_statistics(definition)}\n"
        f"{generate_transition_table(definition, config)}\n"
        "# State Diagram\n\n"
        "```mermaid\n"
        f"{generate_mermaid(definition, config)}"
        "```\n"
    )
