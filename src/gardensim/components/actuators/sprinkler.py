"""Sprinkler actuator implementation."""

from __future__ import annotations

import logging

from gardensim.core.base import Actuator
from gardensim.core.state import Plant

logger = logging.getLogger(__name__)

DEFAULT_WATER_AMOUNT = 10


class Sprinkler(Actuator):
    """Sprinkler that waters a single plant when activated.

    Attributes:
        name: Unique actuator identifier.
        plant: The plant this sprinkler irrigates.
        water_amount: Moisture added per activation.
    """

    def __init__(
        self,
        name: str,
        plant: Plant,
        *,
        water_amount: int = DEFAULT_WATER_AMOUNT,
        enabled: bool = True,
    ) -> None:
        """Initialize sprinkler.

        Args:
            name: Unique identifier.
            plant: Target plant.
            water_amount: Moisture added per activation.
            enabled: Whether actuator is active.

        Raises:
            ValueError: If water_amount is not positive.
        """
        if water_amount <= 0:
            msg = f"water_amount must be positive, got {water_amount}"
            raise ValueError(msg)
        super().__init__(name, enabled=enabled)
        self._plant = plant
        self._water_amount = water_amount

    @property
    def plant(self) -> Plant:
        """The plant being irrigated."""
        return self._plant

    @property
    def water_amount(self) -> int:
        """Moisture added per activation."""
        return self._water_amount

    @property
    def is_active(self) -> bool:
        """A sprinkler for a dead plant is inactive."""
        return self.enabled and not self._plant.is_dead

    def activate(self) -> bool:
        """Water the target plant.

        Returns:
            True if water was applied.
        """
        if not self.is_active:
            return False

        before = self._plant.soil_moisture
        self._plant.water(self._water_amount)
        logger.info(
            "Sprinkler %s watered %s (moisture: %d%% -> %d%%)",
            self.name,
            self._plant.name,
            before,
            self._plant.soil_moisture,
        )
        return True
