from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from mine_cart_sim.events import Event, EventType
from mine_cart_sim.models import TurnChoice


class EventSink(ABC):
    """Where step_tick() reports cart moves, turns, collisions and faults.

    Attaching one never changes how carts move.
    """

    @abstractmethod
    def start_tick(self) -> int: ...

    @abstractmethod
    def emit(self, event_type: EventType, cart: int | None = None, **data: Any) -> None: ...


@dataclass
class InMemoryEventSink(EventSink):
    """Keeps every cart event of a run, numbered by tick and by position within the tick."""

    events: list[Event] = field(default_factory=list)
    _tick: int = field(default=0, init=False)
    _seq: int = field(default=0, init=False)

    @property
    def current_tick(self) -> int:
        return self._tick

    def start_tick(self) -> int:
        self._tick += 1
        self._seq = 0
        return self._tick

    def emit(self, event_type: EventType, cart: int | None = None, **data: object) -> None:
        if self._tick <= 0:
            raise RuntimeError(f"no tick open: call start_tick() before emitting {event_type.value}")
        self._seq += 1
        self.events.append(Event(tick=self._tick, seq=self._seq, type=event_type, cart=cart, data=dict(data)))

    def of_type(self, event_type: EventType) -> list[Event]:
        return [e for e in self.events if e.type == event_type]

    def in_tick(self, tick: int) -> list[Event]:
        return [e for e in self.events if e.tick == tick]

    def turns_for(self, cart_id: int) -> list[TurnChoice]:
        """Intersection choices applied by one cart, in the order they happened."""
        return [
            TurnChoice(e.data["choice"])
            for e in self.events
            if e.type == EventType.CART_TURNED and e.cart == cart_id and "choice" in e.data
        ]
