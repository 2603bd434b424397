"""Sensor components for garden simulation.

Sensors give the automated systems a read-only view of live state.
"""

from gardensim.components.sensors.moisture import MoistureSensor
from gardensim.components.sensors.parasite import ParasiteSensor
from gardensim.components.sensors.temperature import TemperatureSensor

__all__ = [
    "MoistureSensor",
    "ParasiteSensor",
    "TemperatureSensor",
]
