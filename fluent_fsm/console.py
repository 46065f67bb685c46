"""Interactive console session driving a StateMachine from text commands."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from fluent_fsm.diagrams import (
    MERMAID_LIVE_URL,
    PLANTUML_LIVE_URL,
    DiagramStyle,
    to_mermaid,
    to_plantuml,
    to_transition_table,
)
from fluent_fsm.machine import StateMachine
from fluent_fsm.types import is_sentinel

logger = logging.getLogger(__name__)

HELP_TEXT = """\
+-----------------------------------------------------+
|  Help menu                                          |
|                 h - Help menu                       |
|                 q - Quit                            |
|       show states - All states in the machine       |
|      jump <state> - Jump to a known state by name   |
|                     e.g. jump LOCKED                |
|                                                     |
|   diagram <xxxxx> - mermaid, plantuml               |
|                                                     |
| <transition name> or                                |
|     [line number] - type a transition name to       |
|                     advance. Optionally type the    |
|                     line number to transition.      |
|                                                     |
|  transition table - Show a transition table         |
+-----------------------------------------------------+"""

_RULE = "-" * 40


@dataclass(frozen=True)
class ConsoleConfig:
    """Console session settings.

    Attributes:
        prompt: Text shown before reading a command.
        show_diagram_on_start: Print the PlantUML diagram when the session opens.
        style: Diagram style passed to the exporters.
    """

    prompt: str = "Enter command or transition: "
    show_diagram_on_start: bool = True
    style: DiagramStyle = DiagramStyle()


class ConsoleSession:
    """Reads commands line by line and applies them to a machine.

    ``handle(line)`` processes one command and returns False on quit, so
    the loop is testable without a terminal.
    """

    def __init__(
        self,
        machine: StateMachine,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        config: ConsoleConfig | None = None,
    ) -> None:
        self._machine = machine
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._config = config if config is not None else ConsoleConfig()

    def _say(self, text: str = "") -> None:
        print(text, file=self._out)

    def run(self) -> None:
        machine = self._machine
        self._say(f"Here is a state pattern of a {machine.name} depicted here: ")
        if self._config.show_diagram_on_start:
            self._say()
            self._say(to_plantuml(machine, self._config.style))
        self._say(" NOTE: If you are in stuck state type: jump <my_state>. e.g. jump LOCKED")
        self._say("       Also to see all states type: show states")
        self._say("Press [h] for help.")
        self._say("Press [q] to quit.")
        self._say(f"   Your initial state is: {machine.current_state.name}")

        while True:
            self.show_menu()
            line = self._in.readline()
            if not line:
                logger.debug("Console input closed")
                break
            self._say()
            if not self.handle(line.rstrip("\n")):
                break

    def show_menu(self) -> None:
        machine = self._machine
        self._say()
        self._say(f"Your current state is: {machine.current_state.name}")
        self._say("Where to go next? (Type the transition name or line number to move to the next state)")
        for i, transition in enumerate(machine.outgoing_transitions()):
            self._say(f"{i}) {transition.name} ---> ({transition.to_state.name}) ")
        self._say()
        print(self._config.prompt, end="", file=self._out)

    def handle(self, line: str) -> bool:
        """Process one command. Returns False when the session should end."""
        command = line.strip()
        if command.lower() == "q":
            self._say("Bye!")
            return False
        if command == "h":
            self._say(HELP_TEXT)
        elif command.startswith("show states"):
            self._show_states()
        elif command == "transition table":
            self._say(to_transition_table(self._machine, self._config.style))
        elif command.startswith("diagram"):
            self._diagram(command.split())
        elif command.startswith("jump"):
            self._jump(command.split())
        elif command:
            self._transition(command)
        return True

    def _show_states(self) -> None:
        names = ", ".join(state.name for state in self._machine.pattern.states())
        self._say(f"Showing available states for {self._machine.name}")
        self._say(f" States: [{names}]")

    def _diagram(self, parts: list[str]) -> None:
        if len(parts) < 2:
            self._say("Invalid diagram, please try again.")
            return
        kind = parts[1].lower()
        style = self._config.style
        if kind == "mermaid":
            url, text = MERMAID_LIVE_URL, to_mermaid(self._machine, style)
        elif kind == "plantuml":
            url, text = PLANTUML_LIVE_URL, to_plantuml(self._machine, style)
        else:
            self._say("Invalid diagram, please try again.")
            return
        self._say(_RULE)
        self._say(f"Diagram {parts[1]} {url}")
        self._say(_RULE)
        self._say()
        self._say(text)
        self._say(_RULE)

    def _jump(self, parts: list[str]) -> None:
        if len(parts) < 2:
            self._say("Invalid State to begin, please try again.")
        else:
            target = parts[1]
            self._say(f"Jumping to a new state {target}")
            state = self._machine.lookup_state_by_name(target)
            if state is None or is_sentinel(state):
                self._say("Invalid State to begin, please try again.")
            else:
                self._machine.reset_to(state)
        self._say(f"Your initial state is: {self._machine.current_state.name}")

    def _transition(self, name: str) -> None:
        if name.isdigit():
            index = int(name)
            transitions = self._machine.outgoing_transitions()
            if index < len(transitions):
                name = transitions[index].name
            # otherwise the number may itself be a transition name

        # First character of the command is passed along as the transition input.
        value = name[0]
        self._machine.advance_or_else(
            name, value, lambda _name, _input: self._say("Invalid choices, try again.")
        )
        self._say(f"transition: {name} - input = {value}")
