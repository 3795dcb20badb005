from __future__ import annotations

from collections import Counter

from mine_cart_sim.engine import Collision, Fault, TickResult
from mine_cart_sim.errors import UnknownSegmentFault
from mine_cart_sim.models import Position
from mine_cart_sim.track import SimulationState

CRASH_MARKER = "X"


def render_board(state: SimulationState) -> str:
    """
    Draw the track with carts on top.

    Layout:
      - a header of column indices modulo 10
      - each row prefixed by its right-aligned row number
      - carts drawn with their facing marker, shared cells as X
    """
    grid = state.grid
    canvas = [list(row.ljust(grid.width)) for row in grid.rows]

    occupancy = Counter(c.position for c in state.carts)
    for cart in state.carts:
        row, col = cart.position
        if row >= len(canvas) or col >= grid.width:
            continue
        mark = CRASH_MARKER if occupancy[cart.position] > 1 else cart.facing.marker
        canvas[row][col] = mark

    label_width = max(len(str(max(grid.height - 1, 0))), 1)
    out: list[str] = []
    out.append(" " * (label_width + 2) + "".join(str(i % 10) for i in range(grid.width)))
    for idx, cells in enumerate(canvas):
        out.append(f"{str(idx).rjust(label_width)}: {''.join(cells).rstrip()}")
    return "\n".join(out) + "\n"


def format_xy(position: Position) -> str:
    """X,Y text (column first) for user-facing output."""
    return f"{position.col},{position.row}"


def describe_result(result: TickResult) -> str:
    if isinstance(result, Collision):
        return f"collision at {format_xy(result.position)}"
    if isinstance(result, Fault):
        err = result.error
        detail = f"{type(err).__name__} at {format_xy(err.position)}"
        if isinstance(err, UnknownSegmentFault):
            detail += f" (symbol={err.symbol!r})"
        return f"fault: {detail}"
    return "running"
