"""Shared machine fixtures."""
from __future__ import annotations

import enum

import pytest

from tick_automaton import define_machine


class Door(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    LOCKED = "locked"


class DoorInput(enum.Enum):
    OPEN_DOOR = "open_door"
    CLOSE_DOOR = "close_door"
    LOCK = "lock"
    UNLOCK = "unlock"


@pytest.fixture
def door():
    return define_machine(
        name="Door",
        states=Door,
        inputs=DoorInput,
        initial=Door.CLOSED,
        transitions=[
            (Door.CLOSED, DoorInput.OPEN_DOOR, Door.OPEN),
            (Door.OPEN, DoorInput.CLOSE_DOOR, Door.CLOSED),
            (Door.CLOSED, DoorInput.LOCK, Door.LOCKED),
            (Door.LOCKED, DoorInput.UNLOCK, Door.CLOSED),
        ],
    )


@pytest.fixture
def order():
    return define_machine(
        name="Order",
        states=["Created", "Paid", "Shipped", "Delivered", "Cancelled"],
        inputs=["Pay", "Ship", "Deliver", "Cancel"],
        initial="Created",
        transitions=[
            "Created + Pay => Paid",
            "Created + Cancel => Cancelled",
            "Paid + Ship => Shipped",
            "Paid + Cancel => Cancelled",
            "Shipped + Deliver => Delivered",
        ],
    )


@pytest.fixture
def traffic_light():
    return define_machine(
        name="TrafficLight",
        states=["Red", "Yellow", "Green"],
        inputs=["Timer", "Emergency"],
        initial="Red",
        transitions=[
            "Red + Timer => Green",
            "Green + Timer => Yellow",
            "Yellow + Timer => Red",
            "Red + Emergency => Yellow",
            "Green + Emergency => Red",
            "Yellow + Emergency => Red",
        ],
    )


@pytest.fixture
def hidden():
    """Two states toggled by Action, with hidden self-loop inputs."""
    return define_machine(
        name="Hidden",
        states=["A", "B"],
        inputs=["Action", "_HiddenAction", "_Debug"],
        initial="A",
        transitions=[
            "A + Action => B",
            "B + Action => A",
            "A + _HiddenAction => A",
            "B + _HiddenAction => B",
            "A + _Debug => A",
            "B + _Debug => B",
        ],
    )
