"""Soil moisture sensor implementation."""

from __future__ import annotations

from gardensim.core.base import Sensor
from gardensim.core.state import Plant

DEFAULT_LOW_MOISTURE_THRESHOLD = 30


class MoistureSensor(Sensor):
    """Sensor that reports a single plant's soil moisture.

    Used by the watering system to decide when a plant needs irrigation.

    Attributes:
        plant: The plant being observed.
        low_threshold: Moisture below which the soil counts as dry.
    """

    def __init__(
        self,
        plant: Plant,
        *,
        low_threshold: int = DEFAULT_LOW_MOISTURE_THRESHOLD,
        enabled: bool = True,
    ) -> None:
        """Initialize moisture sensor.

        Args:
            plant: Plant to observe.
            low_threshold: Dry-soil threshold.
            enabled: Whether sensor is active.
        """
        super().__init__(f"MoistureSensor-{plant.name}", enabled=enabled)
        self._plant = plant
        self._low_threshold = low_threshold

    @property
    def plant(self) -> Plant:
        """The plant being observed."""
        return self._plant

    @property
    def low_threshold(self) -> int:
        """Dry-soil threshold."""
        return self._low_threshold

    @property
    def is_active(self) -> bool:
        """A sensor on a dead plant is inactive."""
        return self.enabled and not self._plant.is_dead

    def read(self) -> int:
        """Read soil moisture percentage."""
        return self._plant.soil_moisture

    def is_low(self) -> bool:
        """Whether the plant is alive and below the moisture threshold."""
        return self.is_active and self.read() < self._low_threshold
