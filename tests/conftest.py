"""Shared pytest fixtures for gardensim tests."""

from __future__ import annotations

import numpy as np
import pytest

from gardensim.core.config import GardenConfig
from gardensim.core.events import EventBus, reset_event_bus
from gardensim.core.state import SPECIES_CATALOG, Plant, Species
from gardensim.simulation.garden import Garden

# =============================================================================
# Autouse fixtures for test isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_state() -> None:
    """Reset the global event bus before each test for isolation."""
    reset_event_bus()


# =============================================================================
# Random number generator fixtures
# =============================================================================


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random generator for reproducible tests."""
    return np.random.default_rng(42)


# =============================================================================
# Species and plant fixtures
# =============================================================================


@pytest.fixture
def tomato() -> Species:
    """Built-in tomato species."""
    return SPECIES_CATALOG["Tomato"]


@pytest.fixture
def quick_species() -> Species:
    """Cheap four-day species tolerant of the default temperature."""
    return Species(
        name="Radish",
        daily_water_need=5,
        temp_min=50,
        temp_max=90,
        parasite_vulnerabilities=frozenset({"aphid"}),
        days_to_harvest=4,
        seed_price=6,
    )


@pytest.fixture
def plant(tomato: Species) -> Plant:
    """Healthy tomato plant."""
    return Plant("tomato-1", tomato, health=70)


# =============================================================================
# Garden fixtures
# =============================================================================


@pytest.fixture
def bus() -> EventBus:
    """Private event bus."""
    return EventBus()


@pytest.fixture
def garden(bus: EventBus, rng: np.random.Generator) -> Garden:
    """Garden with default configuration on a private bus."""
    return Garden(bus, GardenConfig(), rng=rng)
