"""Automated garden systems.

This module provides the systems that keep the garden alive without
manual intervention:
- WateringSystem: Irrigates dry plants
- HeatingSystem: Lifts cold temperatures toward a minimum
- PestControl: Treats infested plants
"""

from gardensim.systems.heating import HeatingSystem
from gardensim.systems.pest_control import PestControl, PestSweepResult
from gardensim.systems.tracking import PlantTracker
from gardensim.systems.watering import IrrigationZone, WateringSystem

__all__ = [
    "HeatingSystem",
    "IrrigationZone",
    "PestControl",
    "PestSweepResult",
    "PlantTracker",
    "WateringSystem",
]
