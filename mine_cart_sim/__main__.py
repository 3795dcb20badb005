from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from mine_cart_sim.config import DEFAULT_MAX_TICKS, SimulationConfig
from mine_cart_sim.engine import TickResult
from mine_cart_sim.errors import ConfigurationError
from mine_cart_sim.layout_io import InputFormatError, load_state
from mine_cart_sim.logging_setup import configure_logging
from mine_cart_sim.render import describe_result, format_xy, render_board
from mine_cart_sim.simulation import run_simulation
from mine_cart_sim.track import SimulationState, build_state

EXIT_COLLISION = 0
EXIT_NO_COLLISION = 1
EXIT_USAGE = 2
EXIT_FAULT = 3

DEMO_LAYOUT = [
    "/->-\\",
    "|   |  /----\\",
    "| /-+--+-\\  |",
    "| | |  | v  |",
    "\\-+-/  \\-+--/",
    "  \\------/",
]


def _board_printer(state: SimulationState) -> Callable[[int, TickResult], None]:
    def print_board(tick: int, result: TickResult) -> None:
        sys.stdout.write(f"\n-- tick {tick}: {describe_result(result)}\n")
        sys.stdout.write(render_board(state))

    return print_board


def _cmd_run(args: argparse.Namespace) -> int:
    chosen = sum(1 for v in [bool(args.demo), bool(args.layout)] if v)
    if chosen != 1:
        print("ERROR: choose exactly one of --demo or --layout.", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(args.log_level)

    config = SimulationConfig(
        max_ticks=args.max_ticks,
        eager_collision_check=bool(args.eager_collisions),
    )
    try:
        config.validate()
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.layout:
        try:
            state = load_state(Path(str(args.layout)))
        except InputFormatError as e:
            print(f"ERROR: invalid layout: {e}", file=sys.stderr)
            return EXIT_USAGE
    else:
        state = build_state(DEMO_LAYOUT)

    on_tick: Callable[[int, TickResult], None] | None = None
    if args.show_board:
        sys.stdout.write(render_board(state))
        on_tick = _board_printer(state)

    report = run_simulation(state, config, on_tick=on_tick)

    if report.collision is not None:
        print(f"First collision at {format_xy(report.collision.position)} (tick {report.ticks})")
        return EXIT_COLLISION
    if report.fault is not None:
        print(f"ERROR: simulation halted on tick {report.ticks}: {report.fault.error}", file=sys.stderr)
        return EXIT_FAULT
    if report.capped:
        print(f"No collision within {report.ticks} ticks")
    return EXIT_NO_COLLISION


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="mine_cart_sim",
        description=(
            "Mine Cart Simulator.\n"
            "\n"
            "Runs carts over a track layout one tick at a time and\n"
            "reports the first collision as X,Y (column, row)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a layout until the first collision.")
    run.add_argument("--demo", action="store_true", help="Run the built-in example layout.")
    run.add_argument("--layout", type=str, help="Path to a track layout text file.")
    run.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS,
        help="Safety cap: max ticks to simulate.",
    )
    run.add_argument(
        "--eager-collisions",
        action="store_true",
        help="Check for shared cells at the end of each tick instead of the start of the next.",
    )
    run.add_argument("--show-board", action="store_true", help="Print the board after every tick.")
    run.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostics on stderr.",
    )
    run.set_defaults(func=_cmd_run)

    return parser


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
