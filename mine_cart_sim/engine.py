from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, NoReturn

from mine_cart_sim.errors import SimulationFault, UnknownSegmentFault
from mine_cart_sim.event_sink import EventSink
from mine_cart_sim.events import EventType
from mine_cart_sim.models import Cart, Position, TrackSegment
from mine_cart_sim.track import SimulationState

logger = logging.getLogger(__name__)

_TURNING_SEGMENTS = frozenset(
    {TrackSegment.CURVE_FORWARD, TrackSegment.CURVE_BACK, TrackSegment.INTERSECTION}
)


def snapshot_carts(carts: Iterable[Cart]) -> tuple[Cart, ...]:
    """Copies of the carts as they are now; later ticks do not change them."""
    return tuple(replace(c) for c in carts)


@dataclass(frozen=True)
class Continue:
    """
    Every cart moved; no collision found yet.

    carts is a copy taken when the tick returned. state is the live
    simulation and keeps moving with later ticks.
    """

    state: SimulationState
    carts: tuple[Cart, ...] = field(default=())

    @property
    def done(self) -> bool:
        return False


@dataclass(frozen=True)
class Collision:
    """Two or more carts share `position`. The run is over."""

    state: SimulationState
    position: Position
    carts: tuple[Cart, ...] = field(default=())

    @property
    def done(self) -> bool:
        return True


@dataclass(frozen=True)
class Fault:
    """A cart hit broken track data; the tick stopped where the fault happened."""

    state: SimulationState
    error: SimulationFault
    carts: tuple[Cart, ...] = field(default=())

    @property
    def done(self) -> bool:
        return True

    def raise_error(self) -> NoReturn:
        raise self.error


TickResult = Continue | Collision | Fault


def movement_order(carts: list[Cart]) -> list[Cart]:
    """Row-major order: top row first, left to right within a row."""
    return sorted(carts, key=lambda c: c.position)


def find_collision(ordered: list[Cart]) -> Position | None:
    """
    Scan carts already in movement order for two sharing a cell.

    Equal positions are adjacent after sorting, so one pass is enough. The
    first shared cell in row-major order wins.
    """
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.position == cur.position:
            return cur.position
    return None


def move_cart(cart: Cart, state: SimulationState, event_sink: EventSink | None = None) -> None:
    """
    Move one cart a single step and apply the segment it lands on.

    Raises OutOfBoundsFault or UnknownSegmentFault. The grid is only read.
    """
    origin = cart.position
    landed = cart.advance()

    segment = state.grid.segment_at(landed)
    if segment is None:
        symbol = state.grid.symbol_at(landed)
        raise UnknownSegmentFault(
            f"cart {cart.cart_id} landed on {tuple(landed)} with no usable track "
            f"(symbol={symbol!r})",
            cart=cart,
            position=landed,
            symbol=symbol,
        )

    if event_sink is not None:
        event_sink.emit(
            EventType.CART_MOVED,
            cart=cart.cart_id,
            origin=tuple(origin),
            position=tuple(landed),
            segment=segment.value,
        )

    facing_before = cart.facing
    choice = cart.react_to(segment)

    if event_sink is not None and segment in _TURNING_SEGMENTS:
        data: dict[str, str] = {
            "segment": segment.value,
            "facing_before": facing_before.value,
            "facing": cart.facing.value,
        }
        if choice is not None:
            data["choice"] = choice.value
            data["next_turn"] = cart.next_turn.value
        event_sink.emit(EventType.CART_TURNED, cart=cart.cart_id, **data)


def step_tick(
        state: SimulationState,
        event_sink: EventSink | None = None,
        *,
        eager_collision_check: bool = False,
) -> TickResult:
    """
    Advance the simulation by one tick.

    Rules:
    - Carts are ordered row-major by the positions they hold now; state.carts
      is left in that order.
    - If two carts already share a cell, that is the collision: report it and
      move nobody.
    - Otherwise each cart, in order, moves one cell and reacts to the segment
      it lands on before the next cart starts. Carts passing through each
      other mid-tick do not collide; only shared cells at a tick boundary do.
    - A fault stops the tick at the faulting cart. Later carts do not move.

    eager_collision_check runs the shared-cell scan again after the last
    move, reporting the same cell one tick sooner.
    """
    if event_sink is not None:
        event_sink.start_tick()
        event_sink.emit(EventType.TICK_START)

    # 1) fix the order for this tick
    state.carts[:] = movement_order(state.carts)

    # 2) carts left on the same cell by the previous tick
    crash = find_collision(state.carts)
    if crash is not None:
        return _collision(state, crash, event_sink)

    if event_sink is not None:
        event_sink.emit(EventType.ORDER_FIXED, order=[c.cart_id for c in state.carts])

    # 3) move one at a time
    for cart in list(state.carts):
        try:
            move_cart(cart, state, event_sink)
        except SimulationFault as e:
            logger.debug("fault during tick: %s", e)
            if event_sink is not None:
                event_sink.emit(
                    EventType.FAULT_RAISED,
                    cart=cart.cart_id,
                    kind=type(e).__name__,
                    position=tuple(e.position),
                )
            return Fault(state=state, error=e, carts=snapshot_carts(state.carts))

    # 4) optional same-tick check
    if eager_collision_check:
        crash = find_collision(movement_order(state.carts))
        if crash is not None:
            return _collision(state, crash, event_sink)

    return Continue(state=state, carts=snapshot_carts(state.carts))


def _collision(state: SimulationState, position: Position, event_sink: EventSink | None) -> Collision:
    involved = [c.cart_id for c in state.carts if c.position == position]
    logger.debug("collision at row=%d col=%d (carts %s)", position.row, position.col, involved)
    if event_sink is not None:
        event_sink.emit(EventType.COLLISION_DETECTED, position=tuple(position), carts=involved)
    return Collision(state=state, position=position, carts=snapshot_carts(state.carts))
