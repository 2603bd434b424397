"""Garden simulation engine.

The engine wires the simulation together and is the entry point for
callers:
1. Garden subscribes to day ticks and advances every plant
2. WateringSystem waters dry plants after each day and each rain
3. A random temperature is drawn for the next day after each tick
4. HeatingSystem lifts cold temperatures before they reach the garden
5. A background scheduler runs pest control and random parasite attacks

Every public operation is exception-safe: an unexpected fault is logged
and converted to the documented default return value, so one failing
call never takes down the clock or scheduler threads.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

import numpy as np

from gardensim.core.config import SimulationConfig
from gardensim.core.events import Event, EventBus, EventType
from gardensim.core.state import (
    DEFAULT_SEED_PRICE,
    GardenSnapshot,
    Species,
    find_species,
)
from gardensim.simulation.clock import Clock
from gardensim.simulation.garden import Garden
from gardensim.simulation.scheduler import IntervalScheduler
from gardensim.systems import HeatingSystem, PestControl, PestSweepResult, WateringSystem

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SimulationStatus(str, Enum):
    """Simulation status states."""

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"


@dataclass
class SimulationStats:
    """Counters collected from the event stream and engine calls.

    Attributes:
        days_elapsed: Day ticks processed.
        plants_added: Plants planted.
        plants_harvested: Plants harvested.
        plants_cleared: Dead plants cleared.
        coins_earned: Coins earned from harvests.
        sprinkler_activations: Sprinkler activations.
        heating_activations: Temperature readings raised by heating.
        rain_events: Rain events.
        parasite_events: Parasite introductions (manual and random).
        pest_sweeps: Pest-control sweeps run.
        cures: Successful treatments.
        cure_failures: Failed treatments.
        errors: Operations that faulted.
        wall_time: Seconds spent in `run()`.
    """

    days_elapsed: int = 0
    plants_added: int = 0
    plants_harvested: int = 0
    plants_cleared: int = 0
    coins_earned: int = 0
    sprinkler_activations: int = 0
    heating_activations: int = 0
    rain_events: int = 0
    parasite_events: int = 0
    pest_sweeps: int = 0
    cures: int = 0
    cure_failures: int = 0
    errors: int = 0
    wall_time: float = 0.0

    @property
    def cure_rate(self) -> float:
        """Percentage of treatments that cured."""
        attempts = self.cures + self.cure_failures
        if attempts == 0:
            return 0.0
        return 100.0 * self.cures / attempts

    def to_dict(self) -> dict[str, Any]:
        """Convert statistics to dictionary for serialization."""
        data = dict(self.__dict__)
        data["cure_rate"] = self.cure_rate
        return data


# Event type -> SimulationStats counter incremented when it is seen
_EVENT_COUNTERS: dict[EventType, str] = {
    EventType.DAY_TICK: "days_elapsed",
    EventType.PLANT_ADDED: "plants_added",
    EventType.SPRINKLER_ACTIVATED: "sprinkler_activations",
    EventType.HEATING_ACTIVATED: "heating_activations",
    EventType.RAIN: "rain_events",
    EventType.PARASITE: "parasite_events",
}


class GardenSimulation:
    """Facade over the garden, clock and automated systems."""

    def __init__(
        self,
        config: SimulationConfig | None = None,
        *,
        bus: EventBus | None = None,
        rng: Generator | None = None,
    ) -> None:
        """Initialize simulation and plant any configured plantings.

        Args:
            config: Simulation configuration.
            bus: Event bus (defaults to a private bus for this simulation).
            rng: NumPy random generator (defaults to one seeded from config).
        """
        self._config = config or SimulationConfig()
        self._bus = bus if bus is not None else EventBus()
        self._rng = rng if rng is not None else np.random.default_rng(self._config.seed)
        self._species = self._config.species_catalog()

        self._status = SimulationStatus.IDLE
        self._stats = SimulationStats()
        self._stats_lock = threading.Lock()
        self._lifecycle_lock = threading.Lock()

        # Garden subscribes to DAY_TICK first; the temperature draw follows it
        self._garden = Garden(self._bus, self._config.garden, rng=self._rng)
        self._heating = HeatingSystem(self._config.heating)
        self._watering = WateringSystem(self._garden, self._bus, self._config.watering)
        self._pest_control = PestControl(
            self._garden, self._bus, self._config.pest_control, rng=self._rng
        )
        self._clock = Clock(self._bus, period_seconds=self._config.clock.period_seconds)
        self._scheduler = IntervalScheduler(name="garden-background")

        self._bus.subscribe(EventType.DAY_TICK, self._on_day_tick)
        self._bus.subscribe_all(self._record_event)

        self._plant_configured()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> SimulationConfig:
        """Simulation configuration."""
        return self._config

    @property
    def bus(self) -> EventBus:
        """Event bus shared by all parts of the simulation."""
        return self._bus

    @property
    def garden(self) -> Garden:
        """The garden."""
        return self._garden

    @property
    def clock(self) -> Clock:
        """Day-tick clock."""
        return self._clock

    @property
    def watering(self) -> WateringSystem:
        """Watering system."""
        return self._watering

    @property
    def heating(self) -> HeatingSystem:
        """Heating system."""
        return self._heating

    @property
    def pest_control(self) -> PestControl:
        """Pest control system."""
        return self._pest_control

    @property
    def status(self) -> SimulationStatus:
        """Current simulation status."""
        return self._status

    @property
    def stats(self) -> SimulationStats:
        """Simulation statistics."""
        return self._stats

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _safe(
        self,
        operation: str,
        default: T,
        func: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run an operation, converting any fault into `default`."""
        try:
            return func(*args, **kwargs)
        except Exception:
            with self._stats_lock:
                self._stats.errors += 1
            logger.exception("%s failed", operation)
            return default

    def _record_event(self, event: Event) -> None:
        with self._stats_lock:
            counter = _EVENT_COUNTERS.get(event.event_type)
            if counter is not None:
                setattr(self._stats, counter, getattr(self._stats, counter) + 1)
            elif event.event_type is EventType.PLANT_REMOVED:
                if event.data.get("reason") == "harvested":
                    self._stats.plants_harvested += 1
                    self._stats.coins_earned += int(event.data.get("reward", 0))
                else:
                    self._stats.plants_cleared += 1

    def _on_day_tick(self, event: Event) -> None:
        """Draw the temperature for the next day."""
        del event
        low = self._config.garden.random_temperature_min
        high = self._config.garden.random_temperature_max
        with self._garden.lock:
            fahrenheit = int(self._rng.integers(low, high + 1))
        logger.info("Random temperature for next day: %dF", fahrenheit)
        self.temperature(fahrenheit)

    def _plant_configured(self) -> None:
        for planting in self._config.plantings:
            if not self.add_plant(planting.plot, planting.name, planting.species):
                logger.warning(
                    "Configured planting %s (%s) at %s was not planted",
                    planting.name,
                    planting.species,
                    planting.plot,
                )

    def _resolve_species(self, species: str, overrides: dict[str, Any]) -> Species | None:
        base = find_species(self._species, species)
        if base is not None:
            return base.with_overrides(**overrides)
        if overrides.get("temp_min") is None or overrides.get("temp_max") is None:
            logger.warning(
                "Unknown species %r and no temperature range supplied", species
            )
            return None
        return Species(name=species.strip()).with_overrides(**overrides)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> bool:
        """Start the clock and the background scheduler.

        Calling it again while running does nothing.

        Returns:
            True if the simulation is running.
        """

        def _start() -> bool:
            with self._lifecycle_lock:
                if self._status is SimulationStatus.RUNNING:
                    logger.info("Simulation already running")
                    return True

                self._clock.start()
                jobs = {
                    "pest_sweep": (
                        self._config.pest_control.sweep_interval,
                        self.trigger_pest_control,
                    ),
                    "random_attack": (
                        self._config.garden.random_attack_interval,
                        self.random_parasite_attack,
                    ),
                }
                for name, (interval, job) in jobs.items():
                    self._scheduler.remove_job(name)
                    self._scheduler.schedule_interval(name, interval, job)
                self._scheduler.start()
                self._status = SimulationStatus.RUNNING

            logger.info("Simulation '%s' initialized", self._config.name)
            return True

        result = self._safe("initialize", False, _start)
        if not result:
            self._status = SimulationStatus.ERROR
        return result

    def shutdown(self) -> None:
        """Stop the clock and background scheduler. Safe to call twice."""

        def _stop() -> None:
            with self._lifecycle_lock:
                self._clock.stop()
                self._scheduler.stop()
                if self._status is not SimulationStatus.STOPPED:
                    self._status = SimulationStatus.STOPPED
                    logger.info("Simulation '%s' shut down", self._config.name)

        self._safe("shutdown", None, _stop)

    def advance_day(self) -> int:
        """Announce the next day synchronously.

        Returns:
            The day announced, or -1 on failure.
        """
        return self._safe("advance_day", -1, self._clock.tick)

    def run(
        self,
        days: int,
        on_day: Callable[[int], None] | None = None,
    ) -> SimulationStats:
        """Run a headless simulation for a number of days.

        Each day is ticked, followed by a pest-control sweep and a random
        parasite attack check.

        Args:
            days: Number of days to simulate.
            on_day: Optional callback receiving each completed day number.

        A simulation started with initialize() is already driven by its
        clock, so run() leaves it untouched and returns the current stats.

        Returns:
            Simulation statistics.
        """
        with self._lifecycle_lock:
            if self._status is SimulationStatus.RUNNING:
                logger.warning("Simulation already running, run(%d) ignored", days)
                return self._stats
            self._status = SimulationStatus.RUNNING
        start_wall = time.perf_counter()
        try:
            for _ in range(days):
                day = self.advance_day()
                self.trigger_pest_control()
                self.random_parasite_attack()
                if on_day is not None:
                    on_day(day)
        finally:
            self._stats.wall_time = time.perf_counter() - start_wall
            with self._lifecycle_lock:
                self._status = SimulationStatus.STOPPED
        return self._stats

    # ------------------------------------------------------------------
    # Planting and harvest
    # ------------------------------------------------------------------

    def add_plant(self, plot: str, name: str, species: str, **overrides: Any) -> bool:
        """Plant a seed.

        Args:
            plot: Plot key, e.g. "0,0".
            name: Unique plant name.
            species: Species name from the catalog. An unknown species is
                accepted when `temp_min` and `temp_max` are supplied.
            **overrides: Species fields to override (daily_water_need,
                temp_min, temp_max, parasite_vulnerabilities,
                days_to_harvest, seed_price).

        Returns:
            True if planted.
        """

        def _add() -> bool:
            resolved = self._resolve_species(species, overrides)
            if resolved is None:
                return False
            return self._garden.add_plant(plot, name, resolved)

        return self._safe("add_plant", False, _add)

    def harvest_plant(self, name: str) -> int:
        """Harvest one plant.

        Returns:
            Reward, or -1 (absent/dead) or -2 (not ready).
        """
        return self._safe("harvest_plant", -1, self._garden.harvest_plant, name)

    def harvest_all_ready(self) -> int:
        """Harvest every ready plant. Returns total coins earned."""
        return self._safe("harvest_all_ready", 0, self._garden.harvest_all_ready)

    def clear_dead_plants(self) -> list[str]:
        """Remove dead plants and free their plots."""
        return self._safe("clear_dead_plants", [], self._garden.remove_dead_plants)

    # ------------------------------------------------------------------
    # Environmental stimuli
    # ------------------------------------------------------------------

    def rain(self, amount: int) -> int:
        """Rain on the garden.

        Returns:
            Number of plants whose moisture rose (0 on failure).
        """

        def _rain() -> int:
            watered = self._garden.on_rain(amount)
            if amount >= 0:
                self._bus.publish(
                    EventType.RAIN,
                    source="engine",
                    message=f"Rain: {amount}",
                    amount=amount,
                )
            return watered

        return self._safe("rain", 0, _rain)

    def temperature(self, fahrenheit: int) -> bool:
        """Set the ambient temperature, after heating mitigation.

        Returns:
            True if the temperature was applied.
        """

        def _set() -> bool:
            applied = self._heating.mitigate(fahrenheit)
            self._garden.on_temperature(applied)
            self._bus.publish(
                EventType.TEMPERATURE,
                source="engine",
                message=f"Temperature: {applied}F",
                fahrenheit=applied,
                requested=fahrenheit,
            )
            if applied != fahrenheit:
                self._bus.publish(
                    EventType.HEATING_ACTIVATED,
                    source="heating",
                    message=f"Heating raised {fahrenheit}F to {applied}F",
                    before=fahrenheit,
                    after=applied,
                )
            return True

        return self._safe("temperature", False, _set)

    def parasite(self, name: str) -> int:
        """Introduce a parasite to the whole garden.

        Returns:
            Number of plants newly infected.
        """

        def _introduce() -> int:
            affected = self._garden.on_parasite(name)
            if name and name.strip():
                self._bus.publish(
                    EventType.PARASITE,
                    source="engine",
                    message=f"Parasite: {name}",
                    parasite=name,
                    affected=affected,
                )
            return affected

        return self._safe("parasite", 0, _introduce)

    def infect_plant(self, name: str, parasite: str) -> bool:
        """Introduce a parasite to one plant."""
        return self._safe(
            "infect_plant", False, self._garden.infect_plant, name, parasite
        )

    def random_parasite_attack(self) -> str | None:
        """Roll for a random parasite attack. Returns the attacker, if any."""
        return self._safe(
            "random_parasite_attack", None, self._garden.check_random_parasite_attack
        )

    def trigger_pest_control(self) -> PestSweepResult:
        """Run a pest-control sweep immediately."""

        def _sweep() -> PestSweepResult:
            result = self._pest_control.sweep()
            with self._stats_lock:
                self._stats.pest_sweeps += 1
                self._stats.cures += result.cures
                self._stats.cure_failures += result.failures
            return result

        return self._safe("trigger_pest_control", PestSweepResult(), _sweep)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_coins(self) -> int:
        """Current coin balance (0 on failure)."""
        return self._safe("get_coins", 0, lambda: self._garden.coins)

    def get_species(self, name: str) -> Species | None:
        """Look up a species in the catalog (case-insensitive)."""
        return self._safe("get_species", None, find_species, self._species, name)

    def get_seed_price(self, species: str) -> int:
        """Seed price for a species (10 for unknown species)."""

        def _price() -> int:
            found = find_species(self._species, species)
            return found.seed_price if found is not None else DEFAULT_SEED_PRICE

        return self._safe("get_seed_price", DEFAULT_SEED_PRICE, _price)

    def get_plants(self) -> list[Species]:
        """Species definitions available for planting."""
        return self._safe("get_plants", [], lambda: list(self._species.values()))

    def snapshot(self) -> GardenSnapshot:
        """Read-only view of live plants and coins."""
        return self._safe(
            "snapshot",
            GardenSnapshot(day=0, coins=0, temperature=0),
            self._garden.snapshot,
        )

    def get_plant_states(self) -> list[dict[str, Any]]:
        """Per live plant state dictionaries."""
        return [p.to_dict() for p in self.snapshot().plants]

    def get_state(self) -> dict[str, Any]:
        """Garden summary report."""
        return self._safe("get_state", {}, self._garden.report_state)
