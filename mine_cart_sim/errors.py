"""Exceptions raised by the cart simulator."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mine_cart_sim.models import Cart, Position


class CartSimError(Exception):
    """Base exception for simulator errors."""


class ConfigurationError(CartSimError):
    """Raised when simulation configuration is invalid."""


class SimulationFault(CartSimError):
    """
    A data error found while moving a cart.

    Faults are not the designed end of a run (that is a collision); they mean
    the track or the cart placement is broken.
    """

    def __init__(self, message: str, *, cart: Cart, position: Position) -> None:
        super().__init__(message)
        self.cart = cart
        self.position = position


class OutOfBoundsFault(SimulationFault):
    """Raised when a move would drive a coordinate negative."""


class UnknownSegmentFault(SimulationFault):
    """Raised when a cart lands on a cell with no recognized track segment."""

    def __init__(
            self,
            message: str,
            *,
            cart: Cart,
            position: Position,
            symbol: str | None,
    ) -> None:
        super().__init__(message, cart=cart, position=position)
        self.symbol = symbol
