"""Integration tests: full patterns built by chaining, then driven end to end."""
from fluent_fsm import (
    INITIAL,
    INVALID,
    STOP,
    StateEnum,
    StateMachine,
    StatePattern,
    to_mermaid,
)


class Turnstile(StateEnum):
    LOCKED = "Locked"
    UNLOCKED = "Unlocked"
    FRED = "Fred Flintstone"


class Sensor(StateEnum):
    OPENED = "Opened"
    CLOSING = "Closing"
    OPENING = "Opening"
    CLOSED = "Closed"


LOCKED = Turnstile.LOCKED
UNLOCKED = Turnstile.UNLOCKED
FRED = Turnstile.FRED


def mixed_pattern() -> StatePattern:
    return (
        StatePattern()
        .initial(LOCKED)
        .t("push", LOCKED)
        .t("coin", UNLOCKED)
        .t("coin", UNLOCKED)
        .s(FRED)
        .t("coin", UNLOCKED)
        .t("boo1")
        .t("boo")
        .s(LOCKED)
        .t("hello", UNLOCKED)
        .s(FRED)
        .t("goodbye")
        .s(LOCKED)
        .t("die", FRED, STOP)
        .t("throw")
        .t("swim")
        .s(UNLOCKED)
        .t("balloon", STOP)
        .s(STOP)
    )


class TestMixedPattern:
    """Simple and explicit transitions interleaved in one chain."""


    def test_transition_list(self) -> None:
        """The chain produces the expected transitions in order."""
        listing = [
            f"{t.name}: {t.from_state.name} -> {t.to_state.name}"
            for t in mixed_pattern().transitions()
        ]
        assert listing == [
            "initial: INITIAL -> LOCKED",
            "push: LOCKED -> LOCKED",
            "coin: LOCKED -> UNLOCKED",
            "coin: UNLOCKED -> UNLOCKED",
            "coin: FRED -> UNLOCKED",
            "boo1: UNLOCKED -> UNLOCKED",
            "boo: UNLOCKED -> LOCKED",
            "hello: LOCKED -> UNLOCKED",
            "goodbye: FRED -> LOCKED",
            "die: FRED -> STOP",
            "throw: FRED -> FRED",
            "swim: FRED -> UNLOCKED",
            "balloon: UNLOCKED -> STOP",
        ]

    def test_single_initial_edge(self) -> None:
        """Only one edge leaves INITIAL."""
        pattern = mixed_pattern()
        assert [t for t in pattern.transitions() if t.from_state == INITIAL] == [
            pattern.initial_transition()
        ]

    def test_cursor_ends_on_stop(self) -> None:
        """The final s(STOP) leaves the cursor on STOP."""
        assert mixed_pattern().current_state is STOP

    def test_walk_to_stop(self) -> None:
        """A machine walks to STOP, goes INVALID and recovers with reset_to()."""
        sm = StateMachine.create(mixed_pattern(), name="Turnstile")
        entered = []
        sm.register_on_enter(STOP, lambda: entered.append("stopped"))

        sm.advance("coin").advance("balloon")

        assert sm.current_state is STOP
        assert sm.previous_state is UNLOCKED
        assert entered == ["stopped"]
        assert sm.outgoing_transitions() == []

        sm.advance("coin")
        assert sm.current_state is INVALID
        assert sm.previous_state is UNLOCKED

        sm.reset_to(FRED)
        sm.advance("die")
        assert sm.current_state is STOP

    def test_mermaid_lines(self) -> None:
        """Mermaid renders INITIAL and STOP ends as [*]."""
        lines = to_mermaid(mixed_pattern()).splitlines()
        assert lines[1] == "   [*] --> LOCKED : initial"
        assert "   FRED --> [*] : die" in lines
        assert lines[-1] == "   UNLOCKED --> [*] : balloon"


def test_sensor_scenario():
    """Door sensor recovers from a bad first input and runs its cycle."""
    sm = StateMachine.create(
        lambda p: (
            p.initial(Sensor.OPENED)
            .t("close")
            .s(Sensor.CLOSING)
            .t("open")
            .s(Sensor.OPENING)
            .t("close")
            .s(Sensor.CLOSING)
            .t("sensor closed")
            .s(Sensor.CLOSED)
            .t("open")
            .s(Sensor.OPENING)
            .t("sensor opened")
            .s(Sensor.OPENED)
        ),
        name="Sensor",
    )
    log = []
    sm.register_on_enter(Sensor.OPENED, lambda: log.append("OPENED"))
    sm.register_on_enter(Sensor.OPENED, lambda: log.append("OPENED again"))
    sm.register_on_enter(Sensor.CLOSING, lambda: log.append("CLOSING"))
    sm.register_on_enter(Sensor.OPENING, lambda: log.append("opening state."))

    sm.advance("add fqn")
    assert sm.current_state is INVALID
    sm.reset_to(Sensor.OPENED)

    for name in ["close", "open", "close", "sensor closed", "open", "sensor opened"]:
        sm.advance(name)

    assert sm.current_state is Sensor.OPENED
    assert log == [
        "CLOSING",
        "opening state.",
        "CLOSING",
        "opening state.",
        "OPENED",
        "OPENED again",
    ]


def test_turnstile_greeting_uses_previous_state():
    """Entry actions branch on the previous state."""
    sm = StateMachine.create(
        StatePattern()
        .initial(LOCKED)
        .t("push")
        .t("coin")
        .s(UNLOCKED)
        .t("coin")
        .t("push")
        .s(LOCKED)
    )
    messages = []

    def greet() -> None:
        if sm.previous_state is LOCKED:
            messages.append("You may enter")
        elif sm.previous_state is UNLOCKED:
            messages.append("Thank you for more money!")

    sm.register_on_enter(UNLOCKED, greet).register_on_enter(
        LOCKED,
        lambda t, value: messages.append(f"Secured: {t.name} from {t.from_state.name}, input={value}"),
        with_input=True,
    )

    sm.advance("push", "p").advance("coin").advance("coin").advance("push")

    assert messages == [
        "Secured: push from LOCKED, input=p",
        "You may enter",
        "Thank you for more money!",
        "Secured: push from UNLOCKED, input=push",
    ]
