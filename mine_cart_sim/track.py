from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from mine_cart_sim.models import CART_MARKERS, Cart, Direction, Position, TrackSegment


@dataclass(frozen=True)
class TrackGrid:
    """
    Read-only track layout, addressed by (row, col).

    Rows keep their raw symbols with cart markers already replaced by the
    straight segment underneath. Rows may have different lengths; anything
    outside a row is absent.
    """

    rows: tuple[str, ...]

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    def symbol_at(self, position: Position | tuple[int, int]) -> str | None:
        row, col = position
        if row < 0 or row >= len(self.rows):
            return None
        line = self.rows[row]
        if col < 0 or col >= len(line):
            return None
        return line[col]

    def segment_at(self, position: Position | tuple[int, int]) -> TrackSegment | None:
        symbol = self.symbol_at(position)
        if symbol is None:
            return None
        return TrackSegment.from_symbol(symbol)


@dataclass
class SimulationState:
    grid: TrackGrid
    carts: list[Cart] = field(default_factory=list)


def _track_under(marker: str) -> str:
    if Direction.from_marker(marker).is_vertical:
        return TrackSegment.STRAIGHT_VERTICAL.value
    return TrackSegment.STRAIGHT_HORIZONTAL.value


def parse_layout(
        rows: Iterable[str],
        *,
        markers: Iterable[str] = CART_MARKERS,
) -> tuple[TrackGrid, list[Cart]]:
    """
    Split a raw layout into the track grid and the initial carts.

    Every marker cell becomes a cart (position and facing from the marker)
    and the grid records the straight segment under it. Unrecognized symbols
    are kept as-is; they only matter if a cart ever lands on one.

    Carts are numbered in row-major scan order.
    """
    marker_set = set(markers)
    unknown = marker_set - CART_MARKERS
    if unknown:
        raise ValueError(f"unsupported cart markers: {sorted(unknown)}")

    grid_rows: list[str] = []
    carts: list[Cart] = []
    for row, line in enumerate(rows):
        cells: list[str] = []
        for col, symbol in enumerate(line):
            if symbol in marker_set:
                carts.append(
                    Cart(
                        cart_id=len(carts),
                        position=Position(row, col),
                        facing=Direction.from_marker(symbol),
                    )
                )
                cells.append(_track_under(symbol))
            else:
                cells.append(symbol)
        grid_rows.append("".join(cells))

    return TrackGrid(rows=tuple(grid_rows)), carts


def build_state(rows: Iterable[str]) -> SimulationState:
    grid, carts = parse_layout(rows)
    return SimulationState(grid=grid, carts=carts)
