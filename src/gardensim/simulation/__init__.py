"""Simulation engine, garden, clock and scheduler."""

from gardensim.simulation.clock import Clock
from gardensim.simulation.engine import (
    GardenSimulation,
    SimulationStats,
    SimulationStatus,
)
from gardensim.simulation.garden import (
    HARVEST_NOT_FOUND,
    HARVEST_NOT_READY,
    Garden,
)
from gardensim.simulation.scheduler import IntervalJob, IntervalScheduler

__all__ = [
    # Engine
    "GardenSimulation",
    "SimulationStats",
    "SimulationStatus",
    # Garden
    "Garden",
    "HARVEST_NOT_FOUND",
    "HARVEST_NOT_READY",
    # Timing
    "Clock",
    "IntervalJob",
    "IntervalScheduler",
]
