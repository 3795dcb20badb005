from __future__ import annotations

from dataclasses import dataclass

from mine_cart_sim.engine import Collision, Fault, TickResult, step_tick
from mine_cart_sim.models import Cart
from mine_cart_sim.track import SimulationState


@dataclass(frozen=True)
class CartTrace:
    cart_id: int
    row: int
    col: int
    facing: str
    next_turn: str


@dataclass(frozen=True)
class TickTrace:
    tick: int
    # AFTER the tick, in the order the carts were processed
    carts: tuple[CartTrace, ...]
    outcome: str
    collision: tuple[int, int] | None = None
    fault: str | None = None


def _cart_trace(cart: Cart) -> CartTrace:
    return CartTrace(
        cart_id=cart.cart_id,
        row=cart.position.row,
        col=cart.position.col,
        facing=cart.facing.value,
        next_turn=cart.next_turn.value,
    )


def snapshot_tick(tick: int, result: TickResult) -> TickTrace:
    """
    Freeze the cart list carried by a tick result.

    This function does not modify simulation behavior.
    """
    carts = tuple(_cart_trace(c) for c in result.carts)
    if isinstance(result, Collision):
        return TickTrace(
            tick=tick,
            carts=carts,
            outcome="collision",
            collision=(result.position.row, result.position.col),
        )
    if isinstance(result, Fault):
        return TickTrace(tick=tick, carts=carts, outcome="fault", fault=type(result.error).__name__)
    return TickTrace(tick=tick, carts=carts, outcome="continue")


def run_ticks_with_trace(
        state: SimulationState,
        num_ticks: int,
        *,
        eager_collision_check: bool = False,
) -> list[TickTrace]:
    """
    Run up to num_ticks ticks, returning one snapshot per tick.

    Stops after the first tick whose result is done (collision or fault).
    """
    log: list[TickTrace] = []
    for t in range(1, num_ticks + 1):
        result = step_tick(state, eager_collision_check=eager_collision_check)
        log.append(snapshot_tick(t, result))
        if result.done:
            break
    return log
