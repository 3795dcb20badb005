from __future__ import annotations

import pytest

from mine_cart_sim.errors import OutOfBoundsFault
from mine_cart_sim.models import Cart, Direction, Position, TrackSegment, TurnChoice


def make_cart(facing: Direction, row: int = 5, col: int = 5) -> Cart:
    return Cart(cart_id=0, position=Position(row, col), facing=facing)


def test_rotation_walks_the_compass_ring():
    assert Direction.NORTH.rotate_clockwise() == Direction.EAST
    assert Direction.EAST.rotate_clockwise() == Direction.SOUTH
    assert Direction.SOUTH.rotate_clockwise() == Direction.WEST
    assert Direction.WEST.rotate_clockwise() == Direction.NORTH

    assert Direction.NORTH.rotate_counterclockwise() == Direction.WEST
    assert Direction.WEST.rotate_counterclockwise() == Direction.SOUTH
    assert Direction.SOUTH.rotate_counterclockwise() == Direction.EAST
    assert Direction.EAST.rotate_counterclockwise() == Direction.NORTH


def test_markers_round_trip_to_directions():
    for marker, facing in {"^": Direction.NORTH, ">": Direction.EAST, "v": Direction.SOUTH, "<": Direction.WEST}.items():
        assert Direction.from_marker(marker) == facing
        assert facing.marker == marker

    with pytest.raises(ValueError):
        Direction.from_marker("x")


def test_turn_choice_cycles_left_straight_right():
    assert TurnChoice.LEFT.following() == TurnChoice.STRAIGHT
    assert TurnChoice.STRAIGHT.following() == TurnChoice.RIGHT
    assert TurnChoice.RIGHT.following() == TurnChoice.LEFT


def test_curve_table_all_eight_combinations():
    table = {
        (TrackSegment.CURVE_FORWARD, Direction.EAST): Direction.NORTH,
        (TrackSegment.CURVE_FORWARD, Direction.NORTH): Direction.EAST,
        (TrackSegment.CURVE_FORWARD, Direction.WEST): Direction.SOUTH,
        (TrackSegment.CURVE_FORWARD, Direction.SOUTH): Direction.WEST,
        (TrackSegment.CURVE_BACK, Direction.EAST): Direction.SOUTH,
        (TrackSegment.CURVE_BACK, Direction.SOUTH): Direction.EAST,
        (TrackSegment.CURVE_BACK, Direction.NORTH): Direction.WEST,
        (TrackSegment.CURVE_BACK, Direction.WEST): Direction.NORTH,
    }
    for (segment, facing), expected in table.items():
        cart = make_cart(facing)
        applied = cart.react_to(segment)
        assert applied is None
        assert cart.facing == expected, (segment, facing)
        # curves never touch the intersection cycle
        assert cart.next_turn == TurnChoice.LEFT


def test_straight_segments_leave_state_alone():
    for segment in (TrackSegment.STRAIGHT_HORIZONTAL, TrackSegment.STRAIGHT_VERTICAL):
        cart = make_cart(Direction.EAST)
        assert cart.react_to(segment) is None
        assert cart.facing == Direction.EAST
        assert cart.next_turn == TurnChoice.LEFT


def test_intersections_apply_left_straight_right_then_repeat():
    cart = make_cart(Direction.NORTH)

    applied = []
    facings = []
    for _ in range(6):
        applied.append(cart.react_to(TrackSegment.INTERSECTION))
        facings.append(cart.facing)

    assert applied == [
        TurnChoice.LEFT,
        TurnChoice.STRAIGHT,
        TurnChoice.RIGHT,
        TurnChoice.LEFT,
        TurnChoice.STRAIGHT,
        TurnChoice.RIGHT,
    ]
    # N -left-> W -straight-> W -right-> N -left-> W ...
    assert facings == [
        Direction.WEST,
        Direction.WEST,
        Direction.NORTH,
        Direction.WEST,
        Direction.WEST,
        Direction.NORTH,
    ]


def test_curves_between_intersections_do_not_disturb_turn_cycle():
    cart = make_cart(Direction.EAST)

    applied = []
    for curve in (
        TrackSegment.CURVE_FORWARD,
        TrackSegment.CURVE_BACK,
        TrackSegment.CURVE_BACK,
        TrackSegment.CURVE_FORWARD,
        TrackSegment.CURVE_FORWARD,
    ):
        applied.append(cart.react_to(TrackSegment.INTERSECTION))
        cart.react_to(curve)

    assert applied == [
        TurnChoice.LEFT,
        TurnChoice.STRAIGHT,
        TurnChoice.RIGHT,
        TurnChoice.LEFT,
        TurnChoice.STRAIGHT,
    ]
    assert cart.next_turn == TurnChoice.RIGHT


def test_advance_moves_one_cell_per_direction():
    expected = {
        Direction.NORTH: Position(4, 5),
        Direction.SOUTH: Position(6, 5),
        Direction.EAST: Position(5, 6),
        Direction.WEST: Position(5, 4),
    }
    for facing, target in expected.items():
        cart = make_cart(facing)
        assert cart.advance() == target
        assert cart.position == target
        assert cart.facing == facing


def test_advance_off_the_top_or_left_edge_raises_and_does_not_move():
    cart = make_cart(Direction.NORTH, row=0, col=3)
    with pytest.raises(OutOfBoundsFault) as excinfo:
        cart.advance()
    assert excinfo.value.position == (-1, 3)
    assert excinfo.value.cart is cart
    assert cart.position == Position(0, 3)

    cart = make_cart(Direction.WEST, row=2, col=0)
    with pytest.raises(OutOfBoundsFault):
        cart.advance()
    assert cart.position == Position(2, 0)
