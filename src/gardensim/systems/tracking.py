"""Plant-name index shared by the automated systems.

Systems keep per-plant components (sensors, sprinklers) keyed by plant
name. Entries are created on PLANT_ADDED, dropped on PLANT_REMOVED and
pruned when the plant is seen dead. If an added event was missed, the
next sweep backfills the entry from the garden.

All index mutation happens under the garden lock.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

from gardensim.core.events import Event, EventBus, EventType

if TYPE_CHECKING:
    from gardensim.core.state import Plant
    from gardensim.simulation.garden import Garden

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PlantTracker(ABC, Generic[T]):
    """Base class for systems that hold one entry per live plant."""

    def __init__(self, garden: Garden, bus: EventBus) -> None:
        """Initialize tracker and subscribe to plant lifecycle events.

        Args:
            garden: Garden whose plants are tracked.
            bus: Event bus carrying plant lifecycle events.
        """
        self._garden = garden
        self._bus = bus
        self._entries: dict[str, T] = {}

        bus.subscribe(EventType.PLANT_ADDED, self._on_plant_added)
        bus.subscribe(EventType.PLANT_REMOVED, self._on_plant_removed)

    @abstractmethod
    def _create_entry(self, plant: Plant) -> T:
        """Build the per-plant entry."""

    @abstractmethod
    def _entry_plant(self, entry: T) -> Plant:
        """Plant an entry refers to."""

    @property
    def tracked(self) -> list[str]:
        """Names of the tracked plants."""
        with self._garden.lock:
            return list(self._entries)

    def _on_plant_added(self, event: Event) -> None:
        name = event.data.get("plant")
        if not name:
            return
        with self._garden.lock:
            plant = self._garden.get_plant(name)
            if plant is not None and not plant.is_dead:
                self._entries[name] = self._create_entry(plant)
                logger.debug("%s: tracking %s", type(self).__name__, name)

    def _on_plant_removed(self, event: Event) -> None:
        name = event.data.get("plant")
        with self._garden.lock:
            if self._entries.pop(name, None) is not None:
                logger.debug("%s: stopped tracking %s", type(self).__name__, name)

    def _sync(self) -> None:
        """Backfill live plants and drop entries that no longer apply.

        Caller holds the garden lock.
        """
        live = {p.name: p for p in self._garden.live_plants()}
        for name in list(self._entries):
            if name not in live or self._entry_plant(self._entries[name]) is not live[name]:
                del self._entries[name]
        for name, plant in live.items():
            if name not in self._entries:
                self._entries[name] = self._create_entry(plant)
                logger.debug("%s: backfilled %s", type(self).__name__, name)
