from __future__ import annotations

from pathlib import Path

from mine_cart_sim.layout_io import load_state
from mine_cart_sim.render import render_board
from mine_cart_sim.trace import run_ticks_with_trace

SAMPLE = Path(__file__).resolve().parents[1] / "samples" / "example_track.txt"


def main() -> None:
    state = load_state(SAMPLE)
    print(render_board(state))

    log = run_ticks_with_trace(state, 100)

    for entry in log:
        if entry.collision is not None:
            row, col = entry.collision
            print(f"\nTick {entry.tick:3d} | collision at {col},{row}")
        elif entry.fault is not None:
            print(f"\nTick {entry.tick:3d} | fault={entry.fault}")
        else:
            print(f"\nTick {entry.tick:3d} | continue")

        for c in entry.carts:
            print(
                f"  cart {c.cart_id:<3d} "
                f"row={c.row:3d} col={c.col:3d}  "
                f"facing={c.facing:<5s}  next_turn={c.next_turn}"
            )


if __name__ == "__main__":
    main()
