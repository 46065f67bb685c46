"""Sample state patterns used by the console demo."""
from __future__ import annotations

import logging

from fluent_fsm import STOP, StateEnum, StateMachine, StatePattern

logger = logging.getLogger(__name__)


class Turnstile(StateEnum):
    LOCKED = "Locked"
    UNLOCKED = "Unlocked"
    FRED = "Fred Flintstone"


class Sensor(StateEnum):
    OPENED = "Opened"
    CLOSING = "Closing"
    OPENING = "Opening"
    CLOSED = "Closed"


def build_turnstile() -> StateMachine:
    """Turnstile with a dead-end FRED state; use ``jump LOCKED`` to get out."""
    pattern = (
        StatePattern()
        .initial(Turnstile.LOCKED)
        .t("push")
        .t("coin")
        .s(Turnstile.UNLOCKED)
        .t("coin")
        .t("push")
        .s(Turnstile.LOCKED)
        .t("hello")
        .s(Turnstile.FRED)
        .t("die", Turnstile.FRED, STOP)
    )
    sm = StateMachine.create(pattern, name="Turnstile")

    def greet() -> None:
        if sm.previous_state is Turnstile.LOCKED:
            logger.info("You may enter")
        elif sm.previous_state is Turnstile.UNLOCKED:
            logger.info("Thank you for more money!")

    sm.register_on_enter(Turnstile.UNLOCKED, greet)
    sm.register_on_enter(
        Turnstile.LOCKED,
        lambda t, value: logger.info(
            "Secured, can not enter. Called %s from %s, input=%s", t.name, t.from_state.name, value
        ),
        with_input=True,
    )
    return sm


def build_sensor() -> StateMachine:
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
        name="Door sensor",
    )
    for state in Sensor:
        sm.register_on_enter(state, lambda s=state: logger.info("Entered %s", s.name))
    return sm


MACHINES = {
    "turnstile": build_turnstile,
    "sensor": build_sensor,
}
