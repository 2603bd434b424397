"""Garden simulation components.

This module provides concrete sensors and actuators that the automated
systems use to observe and act on plants.
"""

from gardensim.components.actuators import Sprinkler
from gardensim.components.sensors import (
    MoistureSensor,
    ParasiteSensor,
    TemperatureSensor,
)

__all__ = [
    # Sensors
    "MoistureSensor",
    "ParasiteSensor",
    "TemperatureSensor",
    # Actuators
    "Sprinkler",
]
