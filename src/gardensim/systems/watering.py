"""Automatic irrigation.

Each live plant gets an irrigation zone: a moisture sensor paired with a
sprinkler. After every day tick and every rain event the system sweeps the
zones and fires the sprinkler of each plant whose soil is below the
configured threshold.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gardensim.components.actuators import Sprinkler
from gardensim.components.sensors import MoistureSensor
from gardensim.core.config import WateringConfig
from gardensim.core.events import Event, EventBus, EventType
from gardensim.systems.tracking import PlantTracker

if TYPE_CHECKING:
    from gardensim.core.state import Plant
    from gardensim.simulation.garden import Garden

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IrrigationZone:
    """Moisture sensor and sprinkler serving one plant."""

    sensor: MoistureSensor
    sprinkler: Sprinkler


class WateringSystem(PlantTracker[IrrigationZone]):
    """Waters dry plants after each day and each rain."""

    def __init__(
        self,
        garden: Garden,
        bus: EventBus,
        config: WateringConfig | None = None,
    ) -> None:
        """Initialize watering system.

        Args:
            garden: Garden to irrigate.
            bus: Event bus to listen and report on.
            config: Watering configuration.
        """
        self._config = config or WateringConfig()
        super().__init__(garden, bus)

        bus.subscribe(EventType.DAY_TICK_COMPLETE, self._on_sweep_trigger)
        bus.subscribe(EventType.RAIN, self._on_sweep_trigger)

    @property
    def low_moisture_threshold(self) -> int:
        """Moisture below which a plant is watered."""
        return self._config.low_moisture_threshold

    @property
    def zones(self) -> dict[str, IrrigationZone]:
        """Copy of the plant name -> zone index."""
        with self._garden.lock:
            return dict(self._entries)

    def _create_entry(self, plant: Plant) -> IrrigationZone:
        return IrrigationZone(
            sensor=MoistureSensor(
                plant, low_threshold=self._config.low_moisture_threshold
            ),
            sprinkler=Sprinkler(
                f"Sprinkler-{plant.name}",
                plant,
                water_amount=self._config.water_amount,
            ),
        )

    def _entry_plant(self, entry: IrrigationZone) -> Plant:
        return entry.sensor.plant

    def _on_sweep_trigger(self, event: Event) -> None:
        logger.debug("Watering sweep triggered by %s", event.event_type.value)
        self.sweep()

    def sweep(self) -> int:
        """Water every live plant below the moisture threshold.

        Returns:
            Number of plants watered.
        """
        activations: list[tuple[str, str, int, int]] = []
        with self._garden.lock:
            self._sync()
            for name, zone in list(self._entries.items()):
                if not zone.sensor.is_active:
                    del self._entries[name]
                    continue
                if not zone.sensor.is_low():
                    continue
                before = zone.sensor.read()
                if zone.sprinkler.activate():
                    activations.append(
                        (name, zone.sprinkler.name, before, zone.sensor.read())
                    )

        for name, sprinkler, before, after in activations:
            self._bus.publish(
                EventType.SPRINKLER_ACTIVATED,
                source="watering",
                message=f"{sprinkler} watered {name}",
                plant=name,
                sprinkler=sprinkler,
                before=before,
                after=after,
            )

        if activations:
            logger.info("Watering sweep: %d plant(s) watered", len(activations))
        return len(activations)
