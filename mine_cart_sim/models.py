from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from mine_cart_sim.errors import OutOfBoundsFault


class Position(NamedTuple):
    # Field order gives row-major tuple ordering.
    row: int
    col: int


class Direction(str, Enum):
    """
    Cart facing. Members are declared in clockwise order; rotation walks
    that ring.
    """

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    def rotate_clockwise(self) -> Direction:
        ring = _CLOCKWISE
        return ring[(ring.index(self) + 1) % len(ring)]

    def rotate_counterclockwise(self) -> Direction:
        ring = _CLOCKWISE
        return ring[(ring.index(self) - 1) % len(ring)]

    @property
    def marker(self) -> str:
        return _MARKER_BY_DIRECTION[self]

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTA_BY_DIRECTION[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.NORTH, Direction.SOUTH)

    @classmethod
    def from_marker(cls, marker: str) -> Direction:
        for d, m in _MARKER_BY_DIRECTION.items():
            if m == marker:
                return d
        raise ValueError(f"not a cart marker: {marker!r}")


_CLOCKWISE: tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

_MARKER_BY_DIRECTION: dict[Direction, str] = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "v",
    Direction.WEST: "<",
}

_DELTA_BY_DIRECTION: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}

CART_MARKERS: frozenset[str] = frozenset(_MARKER_BY_DIRECTION.values())


class TurnChoice(str, Enum):
    """What a cart does at its next intersection; cycles LEFT -> STRAIGHT -> RIGHT."""

    LEFT = "LEFT"
    STRAIGHT = "STRAIGHT"
    RIGHT = "RIGHT"

    def following(self) -> TurnChoice:
        order = list(TurnChoice)
        return order[(order.index(self) + 1) % len(order)]


class TrackSegment(str, Enum):
    STRAIGHT_HORIZONTAL = "-"
    STRAIGHT_VERTICAL = "|"
    CURVE_FORWARD = "/"
    CURVE_BACK = "\\"
    INTERSECTION = "+"

    @classmethod
    def from_symbol(cls, symbol: str) -> TrackSegment | None:
        try:
            return cls(symbol)
        except ValueError:
            return None


@dataclass
class Cart:
    cart_id: int
    position: Position
    facing: Direction
    next_turn: TurnChoice = TurnChoice.LEFT

    def turn_left(self) -> None:
        self.facing = self.facing.rotate_counterclockwise()

    def turn_right(self) -> None:
        self.facing = self.facing.rotate_clockwise()

    def advance(self) -> Position:
        """
        Move one cell in the facing direction and return the new position.

        A move that would make row or col negative raises OutOfBoundsFault and
        leaves the cart where it was.
        """
        d_row, d_col = self.facing.delta
        target = Position(self.position.row + d_row, self.position.col + d_col)
        if target.row < 0 or target.col < 0:
            raise OutOfBoundsFault(
                f"cart {self.cart_id} at {tuple(self.position)} facing {self.facing.value} "
                f"would leave the grid at {tuple(target)}",
                cart=self,
                position=target,
            )
        self.position = target
        return target

    def react_to(self, segment: TrackSegment) -> TurnChoice | None:
        """
        Apply the effect of the segment the cart just landed on.

        Returns the choice applied when the segment is an intersection,
        otherwise None.
        """
        if segment == TrackSegment.CURVE_FORWARD:
            if self.facing.is_vertical:
                self.turn_right()
            else:
                self.turn_left()
        elif segment == TrackSegment.CURVE_BACK:
            if self.facing.is_vertical:
                self.turn_left()
            else:
                self.turn_right()
        elif segment == TrackSegment.INTERSECTION:
            return self._resolve_intersection()
        return None

    def _resolve_intersection(self) -> TurnChoice:
        choice = self.next_turn
        if choice == TurnChoice.LEFT:
            self.turn_left()
        elif choice == TurnChoice.RIGHT:
            self.turn_right()
        self.next_turn = choice.following()
        return choice
