"""Machine definitions: the contract and the table-driven implementation."""
from __future__ import annotations

import enum
import logging
import re
from typing import Any, Hashable, Iterable, Protocol

from tick_automaton.types import DefinitionError

logger = logging.getLogger(__name__)

Rule = tuple[Hashable, Hashable, Hashable] | str

_RULE_RE = re.compile(r"^\s*(\S+)\s*\+\s*(\S+)\s*=>\s*(\S+)\s*$")


class MachineDefinition(Protocol):
    """Read-only description of a deterministic machine.

    Every ``(state, input)`` pair maps to at most one next state.
    """

    def states(self) -> list[Any]: ...
    def inputs(self) -> list[Any]: ...
    def initial_state(self) -> Any: ...
    def valid_inputs(self, state: Any) -> list[Any]: ...
    def next_state(self, state: Any, input: Any) -> Any | None: ...
    def state_name(self, state: Any) -> str: ...
    def input_name(self, input: Any) -> str: ...


def display_name(value: Any) -> str:
    """Enum members display by member name, everything else by ``str()``."""
    if isinstance(value, enum.Enum):
        return value.name
    return str(value)


def is_hidden_input(name: str, prefix: str = "_") -> bool:
    """Hidden inputs work in transitions but are left out of rendered docs."""
    return name.startswith(prefix)


class TableDefinition:
    """Immutable definition built from ``(from, input, to)`` rules.

    Rules are validated once: every state and input must be declared, and
    each ``(state, input)`` pair may appear in at most one rule. Valid
    inputs for a state are reported in rule declaration order.
    """

    __slots__ = ("_name", "_states", "_inputs", "_initial", "_table", "_valid")

    def __init__(
        self,
        name: str,
        states: Iterable[Hashable],
        inputs: Iterable[Hashable],
        initial: Hashable,
        rules: Iterable[tuple[Hashable, Hashable, Hashable]],
    ) -> None:
        if not name:
            raise DefinitionError("Machine name must be non-empty")
        state_list = _unique(states, "state", name)
        input_list = _unique(inputs, "input", name)
        if not state_list:
            raise DefinitionError(f"Machine '{name}' declares no states")
        if None in state_list:
            raise DefinitionError(
                f"Machine '{name}': None cannot be a state, it means 'no transition'"
            )
        state_set = set(state_list)
        input_set = set(input_list)
        if initial not in state_set:
            raise DefinitionError(
                f"Machine '{name}': initial state {initial!r} is not a declared state"
            )

        table: dict[tuple[Hashable, Hashable], Hashable] = {}
        valid: dict[Hashable, list[Hashable]] = {s: [] for s in state_list}
        for src, inp, dst in rules:
            if src not in state_set:
                raise DefinitionError(f"Machine '{name}': unknown state {src!r}")
            if dst not in state_set:
                raise DefinitionError(f"Machine '{name}': unknown state {dst!r}")
            if inp not in input_set:
                raise DefinitionError(f"Machine '{name}': unknown input {inp!r}")
            key = (src, inp)
            if key in table:
                prev = table[key]
                kind = "duplicate" if prev == dst else "conflicting"
                raise DefinitionError(
                    f"Machine '{name}': {kind} rule {src!r} + {inp!r} "
                    f"(already => {prev!r}, got => {dst!r})"
                )
            table[key] = dst
            valid[src].append(inp)

        self._name = name
        self._states = tuple(state_list)
        self._inputs = tuple(input_list)
        self._initial = initial
        self._table = table
        self._valid = {s: tuple(v) for s, v in valid.items()}
        logger.debug(
            "Defined machine %s: %d states, %d inputs, %d transitions",
            name, len(self._states), len(self._inputs), len(table),
        )

    @property
    def name(self) -> str:
        return self._name

    def states(self) -> list[Hashable]:
        return list(self._states)

    def inputs(self) -> list[Hashable]:
        return list(self._inputs)

    def initial_state(self) -> Hashable:
        return self._initial

    def valid_inputs(self, state: Hashable) -> list[Hashable]:
        return list(self._valid.get(state, ()))

    def next_state(self, state: Hashable, input: Hashable) -> Hashable | None:
        return self._table.get((state, input))

    def state_name(self, state: Hashable) -> str:
        return display_name(state)

    def input_name(self, input: Hashable) -> str:
        return display_name(input)

    def transitions(self) -> list[tuple[Hashable, Hashable, Hashable]]:
        """All rules as ``(from, input, to)`` in declaration order."""
        return [
            (src, inp, self._table[(src, inp)])
            for src in self._states
            for inp in self._valid[src]
        ]

    def __repr__(self) -> str:
        return (
            f"TableDefinition(name={self._name!r}, states={len(self._states)}, "
            f"inputs={len(self._inputs)}, transitions={len(self._table)})"
        )


def define_machine(
    name: str,
    states: Iterable[Hashable] | type[enum.Enum],
    inputs: Iterable[Hashable] | type[enum.Enum],
    initial: Hashable | str,
    transitions: Iterable[Rule],
) -> TableDefinition:
    """Build a ``TableDefinition`` from a declarative table.

    ``states`` and ``inputs`` accept any iterable of hashable values, an
    ``Enum`` class included. ``transitions`` holds ``(from, input, to)``
    triples or rule strings such as ``"Closed + OpenDoor => Open"``; rule
    strings and a string ``initial`` are resolved by display name.

    Raises DefinitionError for unknown names, duplicate declarations, and
    duplicate or conflicting rules.
    """
    state_list = list(states)
    input_list = list(inputs)
    states_by_name = _names(state_list, "state", name)
    inputs_by_name = _names(input_list, "input", name)

    if isinstance(initial, str) and initial not in state_list:
        initial = _lookup(states_by_name, initial, "state", name)

    rules: list[tuple[Hashable, Hashable, Hashable]] = []
    for rule in transitions:
        if isinstance(rule, str):
            match = _RULE_RE.match(rule)
            if match is None:
                raise DefinitionError(
                    f"Machine '{name}': cannot parse rule {rule!r}, "
                    "expected 'From + Input => To'"
                )
            src, inp, dst = match.groups()
            rules.append((
                _lookup(states_by_name, src, "state", name),
                _lookup(inputs_by_name, inp, "input", name),
                _lookup(states_by_name, dst, "state", name),
            ))
        else:
            try:
                src, inp, dst = rule
            except (TypeError, ValueError):
                raise DefinitionError(
                    f"Machine '{name}': rule {rule!r} is not a (from, input, to) triple"
                ) from None
            rules.append((src, inp, dst))

    return TableDefinition(name, state_list, input_list, initial, rules)


def _unique(values: Iterable[Hashable], kind: str, machine: str) -> list[Hashable]:
    seen: set[Hashable] = set()
    out: list[Hashable] = []
    for value in values:
        if value in seen:
            raise DefinitionError(f"Machine '{machine}': {kind} {value!r} declared twice")
        seen.add(value)
        out.append(value)
    return out


def _names(values: list[Hashable], kind: str, machine: str) -> dict[str, Hashable]:
    by_name: dict[str, Hashable] = {}
    for value in values:
        label = display_name(value)
        if label in by_name and by_name[label] != value:
            raise DefinitionError(
                f"Machine '{machine}': two {kind}s share the display name '{label}'"
            )
        by_name[label] = value
    return by_name


def _lookup(by_name: dict[str, Hashable], label: str, kind: str, machine: str) -> Hashable:
    try:
        return by_name[label]
    except KeyError:
        raise DefinitionError(f"Machine '{machine}': unknown {kind} '{label}'") from None
