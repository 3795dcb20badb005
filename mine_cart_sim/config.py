"""Simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass

from mine_cart_sim.errors import ConfigurationError

DEFAULT_MAX_TICKS = 1000
DEFAULT_EAGER_COLLISION_CHECK = False


@dataclass(frozen=True)
class SimulationConfig:
    """Controls for a full simulation run.

    Args:
        max_ticks: Upper bound on ticks the driver will run before giving up.
            The engine itself has no cap.
        eager_collision_check: Look for shared cells at the end of each tick
            instead of at the start of the next one.
    """

    max_ticks: int = DEFAULT_MAX_TICKS
    eager_collision_check: bool = DEFAULT_EAGER_COLLISION_CHECK

    def validate(self) -> None:
        """Validate run settings.

        Raises:
            mine_cart_sim.errors.ConfigurationError: If ``max_ticks`` is not a
                positive integer.
        """
        if isinstance(self.max_ticks, bool) or not isinstance(self.max_ticks, int):
            msg = "max_ticks must be an int"
            raise ConfigurationError(msg)
        if self.max_ticks < 1:
            msg = "max_ticks must be at least 1"
            raise ConfigurationError(msg)
