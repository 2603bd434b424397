"""Tests for actuator components."""

from __future__ import annotations

import pytest

from gardensim.components.actuators import Sprinkler
from gardensim.core.state import Plant


class TestSprinkler:
    """Tests for Sprinkler."""

    def test_activate_waters_plant(self, plant: Plant) -> None:
        """Activation adds the configured amount."""
        sprinkler = Sprinkler("s1", plant, water_amount=15)
        assert sprinkler.activate()
        assert plant.soil_moisture == 65

    def test_caps_at_100(self, plant: Plant) -> None:
        """Moisture never exceeds 100."""
        plant.soil_moisture = 95
        assert Sprinkler("s1", plant).activate()
        assert plant.soil_moisture == 100

    def test_dead_plant(self, plant: Plant) -> None:
        """Dead plants are not watered."""
        plant.health = 0
        sprinkler = Sprinkler("s1", plant)
        assert not sprinkler.is_active
        assert not sprinkler.activate()
        assert plant.soil_moisture == 50

    def test_disabled(self, plant: Plant) -> None:
        """Disabled sprinklers do nothing."""
        sprinkler = Sprinkler("s1", plant)
        sprinkler.enabled = False
        assert not sprinkler.activate()
        assert plant.soil_moisture == 50

    def test_invalid_amount(self, plant: Plant) -> None:
        """Non-positive amounts are rejected."""
        with pytest.raises(ValueError, match="water_amount"):
            Sprinkler("s1", plant, water_amount=0)

    def test_repr(self, plant: Plant) -> None:
        """repr names the class and component."""
        assert repr(Sprinkler("s1", plant)) == "Sprinkler(name='s1', enabled=True)"
