"""Console demo -- drive a sample state machine from the terminal.

Demonstrates:
- Building patterns with the fluent t()/s() chain
- Entry actions with and without transition input
- Recovering from a dead-end state with ``jump <state>``
- Exporting Mermaid, PlantUML and transition tables

Run: python examples/console/main.py --machine turnstile
"""

import argparse

from fluent_fsm import to_mermaid, to_plantuml, to_transition_table
from fluent_fsm.console import ConsoleConfig, ConsoleSession
from fluent_fsm.log import configure_logging
from patterns import MACHINES


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="fluent-fsm console demo")
    p.add_argument("--machine", choices=sorted(MACHINES), default="turnstile",
                   help="Sample machine to drive (default: turnstile)")
    p.add_argument("--export", choices=["mermaid", "plantuml", "table"], default=None,
                   help="Print the diagram or table and exit")
    p.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    p.add_argument("--no-diagram", action="store_true",
                   help="Skip the PlantUML diagram at session start")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)
    machine = MACHINES[args.machine]()

    if args.export == "mermaid":
        print(to_mermaid(machine))
    elif args.export == "plantuml":
        print(to_plantuml(machine))
    elif args.export == "table":
        print(to_transition_table(machine))
    else:
        config = ConsoleConfig(show_diagram_on_start=not args.no_diagram)
        ConsoleSession(machine, config=config).run()


if __name__ == "__main__":
    main()
