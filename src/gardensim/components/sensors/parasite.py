"""Parasite detection sensor implementation."""

from __future__ import annotations

from gardensim.core.base import Sensor
from gardensim.core.state import Plant


class ParasiteSensor(Sensor):
    """Sensor that detects parasite infestations on a single plant.

    Used by pest control to find plants needing treatment.
    """

    def __init__(self, plant: Plant, *, enabled: bool = True) -> None:
        """Initialize parasite sensor.

        Args:
            plant: Plant to observe.
            enabled: Whether sensor is active.
        """
        super().__init__(f"ParasiteSensor-{plant.name}", enabled=enabled)
        self._plant = plant

    @property
    def plant(self) -> Plant:
        """The plant being observed."""
        return self._plant

    @property
    def is_active(self) -> bool:
        """A sensor on a dead plant is inactive."""
        return self.enabled and not self._plant.is_dead

    def read(self) -> int:
        """Number of distinct parasites on the plant."""
        return len(self._plant.parasites)

    def has_parasites(self) -> bool:
        """Whether the plant is alive and infested."""
        return self.is_active and self.read() > 0

    def detected(self) -> frozenset[str]:
        """Names of the parasites currently detected."""
        return self._plant.parasites
