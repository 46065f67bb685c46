"""Text exporters: Mermaid, PlantUML and a transition table.

All exporters are read-only over a StatePattern (and, for PlantUML and the
table, the StateMachine's cursor). Transitions are emitted in insertion
order so output is deterministic.
"""
from __future__ import annotations

from dataclasses import dataclass

from fluent_fsm.machine import StateMachine
from fluent_fsm.pattern import StatePattern
from fluent_fsm.types import INITIAL, STOP, State, Transition, is_sentinel

MERMAID_LIVE_URL = "https://mermaid.live/"
PLANTUML_LIVE_URL = "https://www.plantuml.com/plantuml/uml"


@dataclass(frozen=True)
class DiagramStyle:
    """Markers and colours used by the diagram exporters.

    Attributes:
        terminal_marker: Stands in for INITIAL (as a source) and STOP (as a target).
        current_state_color: PlantUML colour for the machine's current state.
        current_transition_style: PlantUML arrow style for the last transition taken.
        indent: Prefix of each Mermaid transition line.
        missing_cell: Table cell for a state lacking a transition name.
    """

    terminal_marker: str = "[*]"
    current_state_color: str = "#palegreen"
    current_transition_style: str = "[#green]"
    indent: str = "   "
    missing_cell: str = "X"


DEFAULT_STYLE = DiagramStyle()


def _pattern_of(graph: StatePattern | StateMachine) -> StatePattern:
    return graph.pattern if isinstance(graph, StateMachine) else graph


def _endpoints(transition: Transition, style: DiagramStyle) -> tuple[str, str]:
    source = style.terminal_marker if transition.from_state == INITIAL else transition.from_state.name
    target = style.terminal_marker if transition.to_state == STOP else transition.to_state.name
    return source, target


def to_mermaid(graph: StatePattern | StateMachine, style: DiagramStyle = DEFAULT_STYLE) -> str:
    """Render a Mermaid ``stateDiagram-v2`` block."""
    lines = ["stateDiagram-v2"]
    for transition in _pattern_of(graph).transitions():
        source, target = _endpoints(transition, style)
        lines.append(f"{style.indent}{source} --> {target} : {transition.name}")
    return "\n".join(lines) + "\n"


def to_plantuml(machine: StateMachine, style: DiagramStyle = DEFAULT_STYLE) -> str:
    """Render a PlantUML state diagram highlighting where the machine is."""
    pattern = machine.pattern
    current_transition = machine.current_transition
    current_state = machine.current_state

    lines = ["@startuml"]
    for transition in pattern.transitions():
        source, target = _endpoints(transition, style)
        arrow = "-->"
        if transition.from_state != INITIAL and transition == current_transition:
            arrow = f"-{style.current_transition_style}->"
        lines.append(f"{source} {arrow} {target} : {transition.name}")

    for state in pattern.states():
        if is_sentinel(state):
            continue
        decl = f"state {state.name}"
        if state == current_state:
            decl += f" {style.current_state_color}"
        if state.description:
            decl += f" : {state.description}"
        lines.append(decl)
    lines.append("@enduml")
    return "\n".join(lines) + "\n"


def transition_table(
    graph: StatePattern | StateMachine, style: DiagramStyle = DEFAULT_STYLE
) -> tuple[list[str], list[list[str]]]:
    """Return ``(headers, rows)``: one row per state, one column per transition name.

    The initial edge and the sentinel states are structural, so they get
    neither a column nor a row.
    """
    pattern = _pattern_of(graph)
    headers = ["State"]
    for transition in pattern.transitions():
        if transition.from_state == INITIAL:
            continue
        if transition.name not in headers[1:]:
            headers.append(transition.name)

    rows: list[list[str]] = []
    for state in pattern.states():
        if is_sentinel(state):
            continue
        rows.append([state.name] + [
            _cell(pattern, state, name, style) for name in headers[1:]
        ])
    return headers, rows


def _cell(pattern: StatePattern, state: State, name: str, style: DiagramStyle) -> str:
    for transition in pattern.outgoing_view(state):
        if transition.name == name:
            return transition.to_state.name
    return style.missing_cell


def to_transition_table(
    graph: StatePattern | StateMachine, style: DiagramStyle = DEFAULT_STYLE
) -> str:
    """Render ``transition_table`` as fixed-width text."""
    headers, rows = transition_table(graph, style)
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    widths = [w + 2 for w in widths]

    def render(row: list[str]) -> str:
        return "".join(cell.ljust(width) for cell, width in zip(row, widths))

    out = [render(headers), "-" * sum(widths)]
    out.extend(render(row) for row in rows)
    return "\n".join(out) + "\n"
