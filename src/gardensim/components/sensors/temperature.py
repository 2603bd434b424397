"""Ambient temperature sensor implementation."""

from __future__ import annotations

from gardensim.core.base import Sensor

DEFAULT_TEMPERATURE_F = 72
MIN_SAFE_TEMPERATURE_F = 60


class TemperatureSensor(Sensor):
    """Sensor holding the garden's latest ambient temperature reading.

    Unlike the plant sensors it wraps no entity: the heating system pushes
    readings into it and anything else may read them back.

    Attributes:
        name: Unique sensor identifier.
        min_safe: Temperature in °F below which heating is needed.
    """

    def __init__(
        self,
        name: str = "TemperatureSensor",
        *,
        initial: int = DEFAULT_TEMPERATURE_F,
        min_safe: int = MIN_SAFE_TEMPERATURE_F,
        enabled: bool = True,
    ) -> None:
        """Initialize temperature sensor.

        Args:
            name: Unique identifier.
            initial: Initial reading in °F.
            min_safe: Lowest safe temperature in °F.
            enabled: Whether sensor is active.
        """
        super().__init__(name, enabled=enabled)
        self._value = initial
        self._min_safe = min_safe

    @property
    def min_safe(self) -> int:
        """Lowest safe temperature in °F."""
        return self._min_safe

    def update(self, temperature: int) -> None:
        """Record a new reading in °F."""
        self._value = temperature

    def read(self) -> int:
        """Latest reading in °F."""
        return self._value

    def is_low(self) -> bool:
        """Whether the latest reading is below the safe minimum."""
        return self._value < self._min_safe
