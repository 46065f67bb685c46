"""State capability, sentinel states, transitions and errors."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


@runtime_checkable
class State(Protocol):
    """Anything exposing a name and a description can be used as a state.

    Enum members, frozen dataclasses and plain classes all qualify. Identity
    is by equality, so two states compare equal only when their concrete
    types say so.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...


class StateEnum(Enum):
    """Base for enumerated states.

    The member name is the state name. A string member value doubles as the
    description; keep values unique or members become aliases.
    """

    @property
    def description(self) -> str:
        return self.value if isinstance(self.value, str) else ""


@dataclass(frozen=True, slots=True)
class NamedState:
    name: str
    description: str = ""


class Sentinel(StateEnum):
    """Reserved structural states."""

    INITIAL = "Initial"
    STOP = "Stop"
    INVALID = "Invalid"


INITIAL = Sentinel.INITIAL
STOP = Sentinel.STOP
INVALID = Sentinel.INVALID


def is_sentinel(state: State) -> bool:
    return isinstance(state, Sentinel)


@dataclass(frozen=True, slots=True)
class Transition:
    """Named edge between two states. Immutable; derive copies with ``with_*``."""

    name: str
    from_state: State
    to_state: State
    description: str | None = None

    def with_name(self, name: str) -> Transition:
        return dataclasses.replace(self, name=name)

    def with_from_state(self, from_state: State) -> Transition:
        return dataclasses.replace(self, from_state=from_state)

    def with_to_state(self, to_state: State) -> Transition:
        return dataclasses.replace(self, to_state=to_state)

    def with_description(self, description: str | None) -> Transition:
        return dataclasses.replace(self, description=description)

    def __str__(self) -> str:
        return f"{self.name}: {self.from_state.name} -> {self.to_state.name}"


class StateMachineError(Exception):
    """Base class for state pattern and state machine construction errors."""


class AlreadyInitializedError(StateMachineError):
    """Raised when ``initial()`` is called twice without ``move_initial()``."""


class ConsecutiveStopError(StateMachineError):
    """Raised when two stop transitions are chained back to back."""


class InvalidTransitionError(StateMachineError):
    """Raised for a transition leaving STOP or entering INITIAL."""

    def __init__(self, transition: Transition, message: str) -> None:
        self.transition = transition
        super().__init__(message)


class MissingInitialTransitionError(StateMachineError):
    """Raised when a state machine is created from a pattern with no initial edge."""
