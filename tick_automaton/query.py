"""Graph queries over a machine definition.

Edges are ``state --input--> next_state`` for every valid input. Nothing
here touches an instance; results depend on the definition alone.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Hashable, Iterator

if TYPE_CHECKING:
    from tick_automaton.definition import MachineDefinition


def successors(
    definition: MachineDefinition, state: Hashable,
) -> Iterator[tuple[Hashable, Hashable]]:
    """Yield ``(input, next_state)`` for each outgoing edge, in declaration order."""
    for input in definition.valid_inputs(state):
        nxt = definition.next_state(state, input)
        if nxt is not None:
            yield input, nxt


def reachable_states(definition: MachineDefinition, start: Hashable) -> set[Hashable]:
    """All states reachable from ``start``, ``start`` included."""
    reachable: set[Hashable] = set()
    stack = [start]
    while stack:
        current = stack.pop()
        if current in reachable:
            continue
        reachable.add(current)
        for _, nxt in successors(definition, current):
            if nxt not in reachable:
                stack.append(nxt)
    return reachable


def states_leading_to(definition: MachineDefinition, target: Hashable) -> list[Hashable]:
    """States with at least one edge into ``target``, each listed once."""
    return [
        state for state in definition.states()
        if any(nxt == target for _, nxt in successors(definition, state))
    ]


def has_path(definition: MachineDefinition, start: Hashable, goal: Hashable) -> bool:
    return goal in reachable_states(definition, start)


def shortest_path(
    definition: MachineDefinition, start: Hashable, goal: Hashable,
) -> list[Hashable] | None:
    """Fewest-edge state sequence from ``start`` to ``goal``, both included.

    Breadth-first, expanding edges in declaration order; among equal-length
    paths the first discovered wins. Returns None if ``goal`` is unreachable.
    """
    if start == goal:
        return [start]

    queue: deque[Hashable] = deque([start])
    came_from: dict[Hashable, Hashable] = {}
    visited: set[Hashable] = {start}

    while queue:
        current = queue.popleft()
        for _, nxt in successors(definition, current):
            if nxt in visited:
                continue
            visited.add(nxt)
            came_from[nxt] = current
            if nxt == goal:
                path = [nxt]
                while nxt in came_from:
                    nxt = came_from[nxt]
                    path.append(nxt)
                path.reverse()
                return path
            queue.append(nxt)

    return None


def terminal_states(definition: MachineDefinition) -> list[Hashable]:
    """States with no valid inputs."""
    return [s for s in definition.states() if not definition.valid_inputs(s)]


def is_strongly_connected(definition: MachineDefinition) -> bool:
    """True if every state reaches every other state. Vacuously true when empty."""
    states = definition.states()
    if not states:
        return True
    first = states[0]
    if not reachable_states(definition, first).issuperset(states):
        return False
    return all(has_path(definition, s, first) for s in states[1:])
