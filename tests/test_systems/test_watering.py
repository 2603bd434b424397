"""Tests for the watering system."""

from __future__ import annotations

from gardensim.core.config import WateringConfig
from gardensim.core.events import EventBus, EventType
from gardensim.core.state import Species
from gardensim.simulation.garden import Garden
from gardensim.systems.watering import WateringSystem


class TestWateringSystem:
    """Tests for WateringSystem."""

    def test_tracks_added_plants(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A zone is created for each planted plant."""
        watering = WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)

        zone = watering.zones["radish-1"]
        assert zone.sensor.plant is garden.get_plant("radish-1")
        assert zone.sprinkler.name == "Sprinkler-radish-1"

    def test_untracks_harvested_plants(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Harvested plants leave the index."""
        watering = WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)
        for _ in range(4):
            bus.publish(EventType.DAY_TICK, source="test")

        garden.harvest_plant("radish-1")

        assert watering.tracked == []

    def test_dry_plant_watered_once_after_tick(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A plant at moisture 10 gets exactly one sprinkler event per tick."""
        WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.soil_moisture = 10

        bus.publish(EventType.DAY_TICK, source="test")

        events = bus.get_history(EventType.SPRINKLER_ACTIVATED)
        assert len(events) == 1
        assert events[0].data["plant"] == "radish-1"
        assert events[0].data["before"] == 5
        assert events[0].data["after"] == 15
        assert plant.soil_moisture == 15

    def test_moist_plant_not_watered(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Plants at or above the threshold are left alone."""
        watering = WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)

        assert watering.sweep() == 0
        assert bus.get_history(EventType.SPRINKLER_ACTIVATED) == []

    def test_configurable_threshold(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A threshold of 40 waters plants at 35."""
        watering = WateringSystem(garden, bus, WateringConfig(low_moisture_threshold=40))
        garden.add_plant("0,0", "radish-1", quick_species)
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.soil_moisture = 35

        assert watering.low_moisture_threshold == 40
        assert watering.sweep() == 1
        assert plant.soil_moisture == 45

    def test_sweeps_on_rain(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A rain event triggers a sweep."""
        WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.soil_moisture = 0

        bus.publish(EventType.RAIN, source="test", amount=0)

        assert plant.soil_moisture == 10

    def test_dead_plants_pruned(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Dead plants are never watered and are dropped from the index."""
        watering = WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.soil_moisture = 0
        plant.health = 0

        assert watering.sweep() == 0
        assert plant.soil_moisture == 0
        assert watering.tracked == []

    def test_backfills_missed_plants(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """Plants added before the system existed are picked up by a sweep."""
        garden.add_plant("0,0", "radish-1", quick_species)
        plant = garden.get_plant("radish-1")
        assert plant is not None
        plant.soil_moisture = 5

        watering = WateringSystem(garden, bus)

        assert watering.sweep() == 1
        assert watering.tracked == ["radish-1"]

    def test_replanted_name_gets_new_zone(
        self, bus: EventBus, garden: Garden, quick_species: Species
    ) -> None:
        """A new plant reusing a name is tracked by name, not by old object."""
        watering = WateringSystem(garden, bus)
        garden.add_plant("0,0", "radish-1", quick_species)
        old = garden.get_plant("radish-1")
        assert old is not None
        old.health = 0
        garden.remove_dead_plants()

        garden.add_plant("0,0", "radish-1", quick_species)

        new = garden.get_plant("radish-1")
        assert new is not old
        assert watering.zones["radish-1"].sensor.plant is new
