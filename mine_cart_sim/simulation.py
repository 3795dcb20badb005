from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from mine_cart_sim.config import SimulationConfig
from mine_cart_sim.engine import Collision, Continue, Fault, TickResult, snapshot_carts, step_tick
from mine_cart_sim.event_sink import EventSink
from mine_cart_sim.track import SimulationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationReport:
    """
    How a run ended.

    ticks counts step_tick() calls, including the one that returned the
    final result. capped is True when max_ticks ran out first; result is then
    the last Continue.
    """

    ticks: int
    result: TickResult
    capped: bool

    @property
    def collision(self) -> Collision | None:
        return self.result if isinstance(self.result, Collision) else None

    @property
    def fault(self) -> Fault | None:
        return self.result if isinstance(self.result, Fault) else None


def run_simulation(
        state: SimulationState,
        config: SimulationConfig | None = None,
        event_sink: EventSink | None = None,
        on_tick: Callable[[int, TickResult], None] | None = None,
) -> SimulationReport:
    """
    Tick until a collision, a fault, or config.max_ticks.

    on_tick(tick, result) is called after every step_tick(), including the
    one that ends the run.
    """
    config = config if config is not None else SimulationConfig()
    config.validate()

    logger.info("starting run: %d carts, max_ticks=%d", len(state.carts), config.max_ticks)

    result: TickResult = Continue(state=state, carts=snapshot_carts(state.carts))
    for tick in range(1, config.max_ticks + 1):
        result = step_tick(
            state,
            event_sink=event_sink,
            eager_collision_check=config.eager_collision_check,
        )
        if on_tick is not None:
            on_tick(tick, result)
        if isinstance(result, Collision):
            logger.info(
                "collision at row=%d col=%d on tick %d",
                result.position.row,
                result.position.col,
                tick,
            )
            return SimulationReport(ticks=tick, result=result, capped=False)
        if isinstance(result, Fault):
            logger.warning("run halted by fault on tick %d: %s", tick, result.error)
            return SimulationReport(ticks=tick, result=result, capped=False)

    logger.info("no collision within %d ticks", config.max_ticks)
    return SimulationReport(ticks=config.max_ticks, result=result, capped=True)
