"""Base classes for garden simulation components.

This module defines the abstractions the automated systems work through:
- Component: Base class for all named, switchable components
- Sensor: Read-only observation of live state
- Actuator: Write-only action on a target

Systems never mutate a plant directly; they read a Sensor and fire an
Actuator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class Component(ABC):
    """Base class for all simulation components.

    Attributes:
        name: Unique identifier for this component.
        enabled: Whether this component is active in the simulation.
    """

    def __init__(self, name: str, *, enabled: bool = True) -> None:
        """Initialize component.

        Args:
            name: Unique identifier for this component.
            enabled: Whether this component is active. Defaults to True.
        """
        self._name = name
        self._enabled = enabled

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, enabled={self._enabled})"

    @property
    def name(self) -> str:
        """Unique identifier for this component."""
        return self._name

    @property
    def enabled(self) -> bool:
        """Whether this component is active in the simulation."""
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        """Set component enabled state."""
        self._enabled = value

    @property
    def is_active(self) -> bool:
        """Whether the component is enabled and its target is usable."""
        return self._enabled


class Sensor(Component):
    """Base class for sensors that observe simulation state.

    Sensors are read-only: they wrap a live object and report a value
    without changing it.
    """

    @abstractmethod
    def read(self) -> int:
        """Take a measurement.

        Returns:
            The current reading.
        """


class Actuator(Component):
    """Base class for actuators that act on a target.

    Actuators are write-only: activating one changes its target but
    reports nothing except whether the action happened.
    """

    @abstractmethod
    def activate(self) -> bool:
        """Perform the actuator's action.

        Returns:
            True if the action was applied.
        """
