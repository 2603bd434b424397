"""Heating system.

Keeps the garden above a minimum temperature by lifting cold readings by
at most `max_lift` degrees per call.
"""

from __future__ import annotations

import logging
import threading

from gardensim.components.sensors import TemperatureSensor
from gardensim.core.config import HeatingConfig

logger = logging.getLogger(__name__)


class HeatingSystem:
    """Bounded heater driven by a shared temperature sensor."""

    def __init__(
        self,
        config: HeatingConfig | None = None,
        sensor: TemperatureSensor | None = None,
    ) -> None:
        """Initialize heating system.

        Args:
            config: Heating configuration.
            sensor: Temperature sensor to record readings in.
        """
        self._config = config or HeatingConfig()
        self._sensor = sensor or TemperatureSensor(min_safe=self._config.target_min)
        self._lock = threading.Lock()
        self._activations = 0

    @property
    def sensor(self) -> TemperatureSensor:
        """Shared temperature sensor."""
        return self._sensor

    @property
    def target_min(self) -> int:
        """Lowest acceptable temperature in °F."""
        return self._config.target_min

    @property
    def max_lift(self) -> int:
        """Largest increase applied per call in °F."""
        return self._config.max_lift

    @property
    def activations(self) -> int:
        """Number of times heating has raised a reading."""
        return self._activations

    def mitigate(self, current: int) -> int:
        """Return the temperature after heating.

        Args:
            current: Incoming temperature in °F.

        Returns:
            The raised temperature when below target, else `current`.
        """
        with self._lock:
            self._sensor.update(current)
            if current >= self._config.target_min:
                return current

            lift = min(self._config.max_lift, self._config.target_min - current)
            heated = current + lift
            self._sensor.update(heated)
            self._activations += 1

        logger.info(
            "Heating activated: %dF -> %dF (target %dF)",
            current,
            heated,
            self._config.target_min,
        )
        return heated
