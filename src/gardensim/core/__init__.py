"""Core module for garden simulation framework.

This module provides the foundational pieces of the simulation:
- Base classes for components (sensors, actuators)
- Plant and species state
- Configuration loading and validation
- Event system for day ticks, stimuli and plant lifecycle
"""

from gardensim.core.base import (
    Actuator,
    Component,
    Sensor,
)
from gardensim.core.events import Event, EventBus, EventType
from gardensim.core.state import (
    SPECIES_CATALOG,
    GardenSnapshot,
    ParasitePolicy,
    Plant,
    PlantSnapshot,
    Species,
)

__all__ = [
    # Base classes
    "Component",
    "Sensor",
    "Actuator",
    # State
    "Species",
    "Plant",
    "PlantSnapshot",
    "GardenSnapshot",
    "ParasitePolicy",
    "SPECIES_CATALOG",
    # Events
    "Event",
    "EventBus",
    "EventType",
]
