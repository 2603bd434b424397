"""Tests for sensor components."""

from __future__ import annotations

from gardensim.components.sensors import (
    MoistureSensor,
    ParasiteSensor,
    TemperatureSensor,
)
from gardensim.core.state import Plant


class TestMoistureSensor:
    """Tests for MoistureSensor."""

    def test_name_and_read(self, plant: Plant) -> None:
        """Sensor is named after its plant and reads moisture."""
        sensor = MoistureSensor(plant)
        assert sensor.name == "MoistureSensor-tomato-1"
        assert sensor.read() == 50
        assert sensor.plant is plant

    def test_is_low(self, plant: Plant) -> None:
        """Moisture strictly below the threshold is low."""
        sensor = MoistureSensor(plant, low_threshold=30)
        plant.soil_moisture = 30
        assert not sensor.is_low()
        plant.soil_moisture = 29
        assert sensor.is_low()

    def test_dead_plant_inactive(self, plant: Plant) -> None:
        """A sensor on a dead plant is inactive and never low."""
        sensor = MoistureSensor(plant)
        plant.soil_moisture = 0
        plant.health = 0
        assert not sensor.is_active
        assert not sensor.is_low()

    def test_disabled(self, plant: Plant) -> None:
        """Disabled sensors never report low."""
        sensor = MoistureSensor(plant, enabled=False)
        plant.soil_moisture = 5
        assert not sensor.is_low()

    def test_read_does_not_mutate(self, plant: Plant) -> None:
        """Reading leaves the plant untouched."""
        sensor = MoistureSensor(plant)
        sensor.read()
        assert plant.soil_moisture == 50


class TestParasiteSensor:
    """Tests for ParasiteSensor."""

    def test_detects_parasites(self, plant: Plant) -> None:
        """Sensor counts distinct parasites."""
        sensor = ParasiteSensor(plant)
        assert sensor.read() == 0
        assert not sensor.has_parasites()

        plant.infest("aphid")
        plant.infest("whitefly")

        assert sensor.read() == 2
        assert sensor.has_parasites()
        assert sensor.detected() == frozenset({"aphid", "whitefly"})

    def test_dead_plant(self, plant: Plant) -> None:
        """Parasites on a dead plant are not reported."""
        sensor = ParasiteSensor(plant)
        plant.infest("aphid")
        plant.health = 0
        assert not sensor.has_parasites()


class TestTemperatureSensor:
    """Tests for TemperatureSensor."""

    def test_defaults(self) -> None:
        """Default reading is 72F with a 60F minimum."""
        sensor = TemperatureSensor()
        assert sensor.read() == 72
        assert sensor.min_safe == 60
        assert not sensor.is_low()
        assert sensor.is_active

    def test_update(self) -> None:
        """Updates replace the reading."""
        sensor = TemperatureSensor("greenhouse", min_safe=55)
        sensor.update(50)
        assert sensor.read() == 50
        assert sensor.is_low()
