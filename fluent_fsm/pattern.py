"""StatePattern - fluent graph builder for states and named transitions."""
from __future__ import annotations

import logging
from collections.abc import KeysView
from typing import Any

from fluent_fsm.types import (
    INITIAL,
    STOP,
    AlreadyInitializedError,
    ConsecutiveStopError,
    InvalidTransitionError,
    State,
    StateMachineError,
    Transition,
)

logger = logging.getLogger(__name__)

INITIAL_TRANSITION_NAME = "initial"
STOP_TRANSITION_NAME = "stop"


class StatePattern:
    """Directed multigraph of states and named transitions, built by chaining.

    The builder keeps a cursor (``current_state``) that most calls read or
    advance, so a pattern reads top to bottom::

        StatePattern().initial(LOCKED).t("push").t("coin").s(UNLOCKED)

    ``t(name)`` adds a self-loop on the cursor. If the very next call is
    ``s(state)`` the loop is re-pointed at ``state``, which is how
    ``t("coin").s(UNLOCKED)`` reads as "coin leads to UNLOCKED".
    """

    def __init__(self) -> None:
        self._states: dict[State, None] = {}
        self._transitions: list[Transition] = []
        self._outgoing: dict[State, list[Transition]] = {}
        self._current_state: State | None = None
        self._initialized = False
        # Last transition added by t(name); s() may rewrite its destination.
        self._pending_simple: Transition | None = None
        self._last_was_stop = False

    # -- initial edge -------------------------------------------------------

    def initial(self, state: State) -> StatePattern:
        """Add the single transition leaving INITIAL and move the cursor to ``state``."""
        if self._initialized:
            raise AlreadyInitializedError(
                "initial() already called; use move_initial() to re-base the pattern"
            )
        self._install_initial(state, len(self._transitions))
        return self

    def move_initial(self, state: State) -> StatePattern:
        """Replace the INITIAL transition (if any) with one pointing at ``state``."""
        self._validate(Transition(INITIAL_TRANSITION_NAME, INITIAL, state), allow_initial_source=True)
        position = len(self._transitions)
        old = self.initial_transition()
        if old is not None:
            position = self._transitions.index(old)
            self._transitions.pop(position)
            logger.debug("Removed initial transition to %s", old.to_state.name)
        self._outgoing.pop(INITIAL, None)
        self._install_initial(state, position)
        return self

    def _install_initial(self, state: State, position: int) -> None:
        transition = Transition(INITIAL_TRANSITION_NAME, INITIAL, state)
        self._validate(transition, allow_initial_source=True)
        self._register(INITIAL)
        self._register(state)
        self._transitions.insert(position, transition)
        self._outgoing[INITIAL] = [transition]
        self._current_state = state
        self._initialized = True
        self._pending_simple = None
        self._last_was_stop = False
        logger.debug("Initial transition -> %s", state.name)

    def initial_transition(self) -> Transition | None:
        edges = self._outgoing.get(INITIAL)
        return edges[0] if edges else None

    # -- transitions --------------------------------------------------------

    def t(
        self,
        name: str | Transition,
        *args: Any,
        description: str | None = None,
    ) -> StatePattern:
        """Add a transition. Accepted forms::

            t(name)                               self-loop on the cursor
            t(name, description)                  self-loop with description
            t(name, to_state[, description])      cursor -> to_state
            t(name, from_state, to_state[, description])
            t(transition)                         prebuilt Transition

        A bare self-loop is "simple": a following ``s(state)`` rewrites its
        destination. Every other form moves the cursor to the destination,
        except that a STOP destination leaves the cursor on the source.
        """
        if isinstance(name, Transition):
            if args or description is not None:
                raise TypeError("t(transition) takes no further arguments")
            return self._add_explicit(name)

        to_state: State | None = None
        from_state: State | None = None
        positional_description: str | None = None
        if len(args) == 1:
            if isinstance(args[0], str):
                positional_description = args[0]
            else:
                to_state = args[0]
        elif len(args) == 2:
            if isinstance(args[1], str):
                to_state, positional_description = args
            else:
                from_state, to_state = args
        elif len(args) == 3:
            from_state, to_state, positional_description = args
        elif len(args) > 3:
            raise TypeError(f"t() takes at most 4 positional arguments after the name, got {len(args)}")

        if positional_description is not None and description is not None:
            raise TypeError("description given both positionally and by keyword")
        description = positional_description if positional_description is not None else description

        if to_state is None:
            cursor = self._require_cursor()
            return self._add_simple(Transition(name, cursor, cursor, description))
        if from_state is None:
            from_state = self._require_cursor()
        return self._add_explicit(Transition(name, from_state, to_state, description))

    def _add_simple(self, transition: Transition) -> StatePattern:
        self._insert(transition)
        self._pending_simple = transition
        return self

    def _add_explicit(self, transition: Transition) -> StatePattern:
        self._insert(transition)
        self._pending_simple = None
        if transition.to_state == STOP:
            self._current_state = transition.from_state
        else:
            self._current_state = transition.to_state
        return self

    def _insert(self, transition: Transition) -> None:
        """Canonical insertion path shared by every t(...) form."""
        self._validate(transition)
        self._register(transition.from_state)
        self._register(transition.to_state)
        self._transitions.append(transition)
        self.lookup_outgoing_transitions(transition.from_state).append(transition)
        self._last_was_stop = False
        logger.debug(
            "Added transition %r: %s -> %s",
            transition.name, transition.from_state.name, transition.to_state.name,
        )

    @staticmethod
    def _validate(transition: Transition, allow_initial_source: bool = False) -> None:
        if transition.from_state == STOP:
            raise InvalidTransitionError(
                transition, f"Transition {transition.name!r} can not leave the STOP state"
            )
        if transition.to_state == INITIAL:
            raise InvalidTransitionError(
                transition, f"Transition {transition.name!r} can not enter the INITIAL state"
            )
        if transition.from_state == INITIAL and not allow_initial_source:
            raise InvalidTransitionError(
                transition,
                f"Transition {transition.name!r} can not leave INITIAL; use initial() or move_initial()",
            )

    # -- cursor -------------------------------------------------------------

    def s(self, state: State) -> StatePattern:
        """Move the cursor to ``state``, re-pointing a pending simple transition at it."""
        pending = self._pending_simple
        if pending is not None:
            rewritten = pending.with_to_state(state)
            self._validate(rewritten)
            # The pending transition is always the most recent insert.
            self._transitions.pop()
            self._outgoing[pending.from_state].pop()
            self._transitions.append(rewritten)
            self._outgoing[pending.from_state].append(rewritten)
            logger.debug(
                "Rewrote transition %r: %s -> %s",
                rewritten.name, rewritten.from_state.name, state.name,
            )
        self._pending_simple = None
        self._last_was_stop = False
        self._register(state)
        self._current_state = state
        return self

    def stop(self) -> StatePattern:
        """Add a ``stop`` transition from the cursor to STOP. The cursor does not move.

        Raises ConsecutiveStopError when the cursor is on STOP or the previous
        builder call was also ``stop()``. Only ``stop()`` counts for that rule:
        a named edge such as ``t("die", FRED, STOP)`` is an ordinary transition,
        so a following ``stop()`` still adds the separate ``stop`` edge.
        """
        cursor = self._require_cursor()
        if cursor == STOP or self._last_was_stop:
            raise ConsecutiveStopError("Can not make consecutive stop transitions")
        self._register(STOP)
        self._outgoing.setdefault(STOP, [])
        transition = Transition(STOP_TRANSITION_NAME, cursor, STOP)
        if transition not in self._transitions:
            self._insert(transition)
        self._pending_simple = None
        self._last_was_stop = True
        return self

    def _require_cursor(self) -> State:
        if self._current_state is None:
            raise StateMachineError("No current state; call initial() or s() first")
        return self._current_state

    def _register(self, state: State) -> None:
        self._states.setdefault(state, None)

    # -- queries ------------------------------------------------------------

    @property
    def current_state(self) -> State | None:
        return self._current_state

    def lookup_outgoing_transitions(self, state: State) -> list[Transition]:
        """Outgoing transitions of ``state``. Creates an empty entry on first access."""
        return self._outgoing.setdefault(state, [])

    def outgoing_view(self, state: State) -> tuple[Transition, ...]:
        """Read-only snapshot of ``state``'s outgoing transitions; adds no entry."""
        return tuple(self._outgoing.get(state, ()))

    def transitions(self) -> list[Transition]:
        return self._transitions

    def states(self) -> KeysView[State]:
        """Live, insertion-ordered set view of every registered state."""
        return self._states.keys()

    def lookup_state_by_name(self, name: str) -> State | None:
        for state in self._states:
            if state.name == name:
                return state
        return None

    def __repr__(self) -> str:
        return (
            f"StatePattern(initialized={self._initialized}, "
            f"states={[s.name for s in self._states]}, "
            f"transitions={[str(t) for t in self._transitions]})"
        )
