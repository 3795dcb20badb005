from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """
    What the scheduler can report while running a tick.

    Per tick: TICK_START, then either COLLISION_DETECTED (carts already share
    a cell) or ORDER_FIXED followed by one CART_MOVED per cart, each possibly
    followed by CART_TURNED. FAULT_RAISED ends a tick early.
    """

    TICK_START = "TICK_START"
    ORDER_FIXED = "ORDER_FIXED"
    CART_MOVED = "CART_MOVED"
    CART_TURNED = "CART_TURNED"
    COLLISION_DETECTED = "COLLISION_DETECTED"
    FAULT_RAISED = "FAULT_RAISED"


@dataclass(frozen=True, slots=True)
class Event:
    # tick/seq are assigned by the sink
    tick: int
    seq: int
    type: EventType
    cart: int | None = None
    data: dict[str, Any] = field(default_factory=dict)
