"""fluent-fsm - Fluent state patterns and Moore-model state machines."""
from __future__ import annotations

from fluent_fsm.diagrams import (
    DiagramStyle,
    to_mermaid,
    to_plantuml,
    to_transition_table,
    transition_table,
)
from fluent_fsm.machine import EntryAction, StateMachine
from fluent_fsm.pattern import StatePattern
from fluent_fsm.types import (
    INITIAL,
    INVALID,
    STOP,
    AlreadyInitializedError,
    ConsecutiveStopError,
    InvalidTransitionError,
    MissingInitialTransitionError,
    NamedState,
    Sentinel,
    State,
    StateEnum,
    StateMachineError,
    Transition,
)

__all__ = [
    "StatePattern",
    "StateMachine",
    "EntryAction",
    "State",
    "StateEnum",
    "NamedState",
    "Sentinel",
    "INITIAL",
    "STOP",
    "INVALID",
    "Transition",
    "StateMachineError",
    "AlreadyInitializedError",
    "ConsecutiveStopError",
    "InvalidTransitionError",
    "MissingInitialTransitionError",
    "DiagramStyle",
    "to_mermaid",
    "to_plantuml",
    "transition_table",
    "to_transition_table",
]
