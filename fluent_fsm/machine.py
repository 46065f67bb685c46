"""StateMachine - walks a StatePattern one transition at a time (Moore model)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from fluent_fsm.pattern import StatePattern
from fluent_fsm.types import (
    INITIAL,
    INVALID,
    MissingInitialTransitionError,
    State,
    Transition,
)

logger = logging.getLogger(__name__)

InvalidHandler = Callable[[str, Any], None]


@dataclass(frozen=True, slots=True)
class EntryAction:
    """Code run on entering a state.

    ``takes_input`` False: ``fn()``. True: ``fn(transition, input)``.
    """

    fn: Callable[..., None]
    takes_input: bool = False


class StateMachine:
    """Execution engine over a finished StatePattern.

    Behaviour is attached to states, not transitions: every visit to a state
    runs its entry actions. A transition name that does not leave the current
    state moves the machine to ``INVALID`` instead of raising, keeping
    ``previous_state`` so the caller can recover.
    """

    def __init__(self, pattern: StatePattern, name: str = "State machine") -> None:
        initial = pattern.initial_transition()
        if initial is None:
            raise MissingInitialTransitionError(
                "StatePattern does not contain an initial transition"
            )
        self._pattern = pattern
        self._name = name
        self._previous_state: State = INITIAL
        self._current_transition: Transition = initial
        self._current_state: State = initial.to_state
        self._entry_actions: dict[State, list[EntryAction]] = {}

    @classmethod
    def create(
        cls,
        pattern: StatePattern | Callable[[StatePattern], Any],
        name: str = "State machine",
    ) -> StateMachine:
        """Build a machine from a pattern, or from a function that fills in a fresh one."""
        if not isinstance(pattern, StatePattern):
            define = pattern
            pattern = StatePattern()
            define(pattern)
        return cls(pattern, name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def pattern(self) -> StatePattern:
        return self._pattern

    @property
    def current_state(self) -> State:
        return self._current_state

    @property
    def previous_state(self) -> State:
        return self._previous_state

    @property
    def current_transition(self) -> Transition:
        return self._current_transition

    def outgoing_transitions(self) -> list[Transition]:
        return self._pattern.lookup_outgoing_transitions(self._current_state)

    def lookup_next_transition(self, name: str) -> Transition | None:
        """First outgoing transition of the current state called ``name``."""
        for transition in self.outgoing_transitions():
            if transition.name == name:
                return transition
        return None

    def lookup_state_by_name(self, name: str) -> State | None:
        return self._pattern.lookup_state_by_name(name)

    def advance(self, name: str, input: Any = None) -> StateMachine:
        """Take the transition called ``name`` from the current state.

        Entry actions of the destination run after the cursor moves:
        zero-argument actions first, then ``(transition, input)`` actions.
        ``input`` defaults to the transition name.
        """
        transition = self.lookup_next_transition(name)
        if transition is None:
            logger.debug(
                "%s: no transition %r from %s", self._name, name, self._current_state.name
            )
            # previous_state is kept so the caller can recover.
            self._current_state = INVALID
            return self

        self._previous_state = self._current_state
        self._current_state = transition.to_state
        self._current_transition = transition
        logger.debug(
            "%s: %r %s -> %s",
            self._name, name, transition.from_state.name, transition.to_state.name,
        )

        actions = self._entry_actions.get(transition.to_state, [])
        for action in actions:
            if not action.takes_input:
                action.fn()
        payload = transition.name if input is None else input
        for action in actions:
            if action.takes_input:
                action.fn(transition, payload)
        return self

    def advance_or_else(
        self, name: str, input: Any, on_invalid: InvalidHandler
    ) -> StateMachine:
        """Like ``advance`` but hands unknown names to ``on_invalid`` without moving."""
        if self.lookup_next_transition(name) is None:
            on_invalid(name, input)
            return self
        return self.advance(name, input)

    def reset_to(self, state: State) -> StateMachine:
        """Jump to ``state`` and re-base the pattern's initial transition onto it."""
        self._pattern.move_initial(state)
        self._current_state = state
        self._previous_state = INITIAL
        logger.info("%s: reset to %s", self._name, state.name)
        return self

    def register_on_enter(
        self,
        state: State,
        callback: Callable[..., None],
        *,
        with_input: bool = False,
    ) -> StateMachine:
        """Run ``callback`` every time ``state`` is entered.

        With ``with_input=True`` the callback receives ``(transition, input)``.
        """
        self._entry_actions.setdefault(state, []).append(EntryAction(callback, with_input))
        return self

    def __repr__(self) -> str:
        return (
            f"StateMachine(name={self._name!r}, current={self._current_state.name}, "
            f"previous={self._previous_state.name})"
        )
