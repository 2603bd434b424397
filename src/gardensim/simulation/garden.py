"""Garden: plants, plots and coins.

The garden owns every plant, the plot -> plant assignment and the coin
ledger. It advances all live plants on each DAY_TICK and exposes the
mutation API used by the engine facade and the automated systems.

Every read and write of garden or plant state happens under one
re-entrant lock (`Garden.lock`). The clock thread, the background
scheduler thread and caller threads therefore serialize on it, and the
automated systems take the same lock for their sweeps.

Failures are reported through return values (False, 0, or the harvest
sentinels) plus a log line; nothing here raises across the public API.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

import numpy as np

from gardensim.core.config import GardenConfig
from gardensim.core.events import Event, EventBus, EventType
from gardensim.core.state import (
    RANDOM_ATTACK_PARASITES,
    TEMPERATURE_STRESS_THRESHOLD,
    GardenSnapshot,
    Plant,
    Species,
)

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

# harvest_plant() sentinels
HARVEST_NOT_FOUND = -1
HARVEST_NOT_READY = -2

# Moisture below which a plant counts as "low" in the daily summary
LOW_MOISTURE_REPORT_THRESHOLD = 30


class Garden:
    """Process-wide garden state.

    Attributes:
        coins: Current coin balance.
        temperature: Ambient temperature in °F used by the next day tick.
        day: Most recent day processed.
    """

    def __init__(
        self,
        bus: EventBus,
        config: GardenConfig | None = None,
        *,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize garden and subscribe it to day ticks.

        Args:
            bus: Event bus for ticks and lifecycle announcements.
            config: Garden configuration.
            rng: NumPy random generator for initial health and attacks.
            seed: Seed for creating a new generator if rng is None.
        """
        self._bus = bus
        self._config = config or GardenConfig()
        if rng is not None:
            self._rng = rng
        else:
            self._rng = np.random.default_rng(seed)

        self._lock = threading.RLock()
        self._plants: dict[str, Plant] = {}
        self._plots: dict[str, str] = {}
        self._coins = self._config.initial_coins
        self._temperature = self._config.default_temperature
        self._day = 0

        bus.subscribe(EventType.DAY_TICK, self._on_day_tick)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding all garden and plant state."""
        return self._lock

    @property
    def config(self) -> GardenConfig:
        """Garden configuration."""
        return self._config

    @property
    def coins(self) -> int:
        """Current coin balance."""
        with self._lock:
            return self._coins

    @property
    def temperature(self) -> int:
        """Ambient temperature in °F applied on the next day tick."""
        with self._lock:
            return self._temperature

    @property
    def day(self) -> int:
        """Most recent day processed (0 before the first tick)."""
        with self._lock:
            return self._day

    @property
    def plants(self) -> list[Plant]:
        """All plants, live and dead, in planting order."""
        with self._lock:
            return list(self._plants.values())

    def live_plants(self) -> list[Plant]:
        """Plants that are still alive, in planting order."""
        with self._lock:
            return [p for p in self._plants.values() if not p.is_dead]

    @property
    def plot_assignments(self) -> dict[str, str]:
        """Copy of the plot key -> plant name map."""
        with self._lock:
            return dict(self._plots)

    def get_plant(self, name: str) -> Plant | None:
        """Look up a plant by name."""
        with self._lock:
            return self._plants.get(name)

    def plant_at(self, plot_key: str) -> str | None:
        """Name of the plant in a plot, or None if the plot is vacant."""
        with self._lock:
            return self._plots.get(plot_key)

    # ------------------------------------------------------------------
    # Planting and harvest
    # ------------------------------------------------------------------

    def add_plant(
        self,
        plot_key: str,
        plant_name: str,
        species: Species,
        seed_price: int | None = None,
    ) -> bool:
        """Plant a seed in a vacant plot.

        Args:
            plot_key: Plot to plant in (e.g. "0,0").
            plant_name: Unique name for the plant.
            species: Species template.
            seed_price: Coins to debit; defaults to the species seed price.

        Returns:
            True if planted; False if input is invalid, the plot is taken,
            the name is in use or coins are insufficient.
        """
        if not plot_key or not plot_key.strip():
            logger.warning("add_plant: invalid plot key %r", plot_key)
            return False
        if not plant_name or not plant_name.strip():
            logger.warning("add_plant: invalid plant name %r", plant_name)
            return False
        price = species.seed_price if seed_price is None else seed_price
        if price < 0:
            logger.warning("add_plant: invalid seed price %d", price)
            return False

        with self._lock:
            if plot_key in self._plots:
                logger.info("add_plant: plot %s is already occupied", plot_key)
                return False
            if plant_name in self._plants:
                logger.info("add_plant: a plant named %s already exists", plant_name)
                return False
            if self._coins < price:
                logger.info(
                    "add_plant: insufficient coins (have %d, need %d)",
                    self._coins,
                    price,
                )
                return False

            health = int(
                self._rng.integers(
                    self._config.initial_health_min,
                    self._config.initial_health_max + 1,
                )
            )
            plant = Plant(plant_name, species, health=health)
            self._coins -= price
            self._plants[plant_name] = plant
            self._plots[plot_key] = plant_name

        logger.info(
            "Added plant %s (%s) at plot %s for %d coins",
            plant_name,
            species.name,
            plot_key,
            price,
        )
        self._bus.publish(
            EventType.PLANT_ADDED,
            source="garden",
            message=f"Planted {plant_name} ({species.name}) at {plot_key}",
            plant=plant_name,
            species=species.name,
            plot=plot_key,
        )
        return True

    def _detach(self, plant: Plant) -> str | None:
        """Remove a plant and its plot assignment. Caller holds the lock."""
        self._plants.pop(plant.name, None)
        plot = next((k for k, v in self._plots.items() if v == plant.name), None)
        if plot is not None:
            del self._plots[plot]
        return plot

    def _announce_removal(self, name: str, plot: str | None, reason: str, **data: Any) -> None:
        self._bus.publish(
            EventType.PLANT_REMOVED,
            source="garden",
            message=f"Removed {name} ({reason})",
            plant=name,
            plot=plot,
            reason=reason,
            **data,
        )

    def harvest_plant(self, plant_name: str) -> int:
        """Harvest a single plant.

        Args:
            plant_name: Name of the plant to harvest.

        Returns:
            The coin reward, HARVEST_NOT_FOUND if the plant is absent or dead,
            or HARVEST_NOT_READY if it has not reached growth stage 4.
        """
        with self._lock:
            plant = self._plants.get(plant_name)
            if plant is None or plant.is_dead:
                return HARVEST_NOT_FOUND
            if not plant.ready_to_harvest:
                return HARVEST_NOT_READY

            reward = plant.harvest_reward()
            self._coins += reward
            plot = self._detach(plant)

        logger.info("Harvested %s - earned %d coins", plant_name, reward)
        self._announce_removal(plant_name, plot, "harvested", reward=reward)
        return reward

    def harvest_all_ready(self) -> int:
        """Harvest every live plant that is ready.

        Returns:
            Total coins earned (0 when nothing was ready).
        """
        harvested: list[tuple[str, str | None, int]] = []
        with self._lock:
            ready = [
                p for p in self._plants.values() if not p.is_dead and p.ready_to_harvest
            ]
            for plant in ready:
                reward = plant.harvest_reward()
                self._coins += reward
                harvested.append((plant.name, self._detach(plant), reward))

        if not harvested:
            return 0

        total = sum(reward for _, _, reward in harvested)
        for name, plot, reward in harvested:
            self._announce_removal(name, plot, "harvested", reward=reward)
        logger.info(
            "Harvested %d plant(s) - total earnings: %d coins", len(harvested), total
        )
        return total

    def remove_dead_plants(self) -> list[str]:
        """Clear dead plants so their plots can be replanted.

        Returns:
            Names of the plants removed.
        """
        removed: list[tuple[str, str | None]] = []
        with self._lock:
            for plant in [p for p in self._plants.values() if p.is_dead]:
                removed.append((plant.name, self._detach(plant)))

        for name, plot in removed:
            self._announce_removal(name, plot, "dead")
        if removed:
            logger.info("Cleared %d dead plant(s)", len(removed))
        return [name for name, _ in removed]

    # ------------------------------------------------------------------
    # Daily update
    # ------------------------------------------------------------------

    def _on_day_tick(self, event: Event) -> None:
        self.day_tick(event.data.get("day"))

    def day_tick(self, day: int | None = None) -> None:
        """Advance every live plant by one day.

        Per plant: growth, moisture decay, parasite damage, temperature
        effect, then health recovery. A fault on one plant is logged and
        does not stop the others. DAY_TICK_COMPLETE is published afterwards.

        Args:
            day: Day number being processed (defaults to previous + 1).
        """
        with self._lock:
            self._day = self._day + 1 if day is None else day
            live = [p for p in self._plants.values() if not p.is_dead]
            temperature = self._temperature
            low_moisture = infested = stressed = newly_dead = 0

            for plant in live:
                try:
                    plant.advance_day()
                    plant.apply_moisture_decay()
                    if plant.soil_moisture < LOW_MOISTURE_REPORT_THRESHOLD:
                        low_moisture += 1
                    if plant.parasites:
                        infested += 1
                    plant.apply_parasite_damage()
                    plant.apply_temperature(temperature)
                    if plant.temperature_stress > TEMPERATURE_STRESS_THRESHOLD:
                        stressed += 1
                    plant.recover_health()
                    if plant.is_dead:
                        newly_dead += 1
                except Exception:
                    logger.exception("Day tick failed for plant %s", plant.name)

            current_day = self._day

        logger.info(
            "Day %d applied to %d plants | low moisture: %d | infested: %d | "
            "temp stressed: %d | newly dead: %d",
            current_day,
            len(live),
            low_moisture,
            infested,
            stressed,
            newly_dead,
        )
        self._bus.publish(
            EventType.DAY_TICK_COMPLETE,
            source="garden",
            message=f"Day {current_day} complete",
            day=current_day,
            plants=len(live),
            newly_dead=newly_dead,
        )

    # ------------------------------------------------------------------
    # Environmental stimuli
    # ------------------------------------------------------------------

    def on_rain(self, amount: int) -> int:
        """Add rain moisture to every live plant.

        Args:
            amount: Moisture units to add (negative is rejected).

        Returns:
            Number of plants whose moisture increased.
        """
        if amount < 0:
            logger.warning("on_rain: invalid rain amount %d", amount)
            return 0

        watered = 0
        with self._lock:
            live = [p for p in self._plants.values() if not p.is_dead]
            for plant in live:
                before = plant.soil_moisture
                plant.water(amount)
                if plant.soil_moisture > before:
                    watered += 1

        logger.info(
            "Rain applied: amount=%d to %d plants (watered: %d)",
            amount,
            len(live),
            watered,
        )
        return watered

    def on_temperature(self, fahrenheit: int) -> None:
        """Store the ambient temperature used by the next day tick.

        Out-of-range values are logged as a warning but still applied.
        """
        low = self._config.temperature_warn_min
        high = self._config.temperature_warn_max
        if not low <= fahrenheit <= high:
            logger.warning(
                "on_temperature: %dF is outside the expected range (%d-%dF)",
                fahrenheit,
                low,
                high,
            )
        with self._lock:
            self._temperature = fahrenheit
        logger.info("Temperature set to %dF", fahrenheit)

    def on_parasite(self, parasite: str) -> int:
        """Introduce a parasite to every live plant.

        Args:
            parasite: Parasite name.

        Returns:
            Number of plants that became infected by it.
        """
        if not parasite or not parasite.strip():
            logger.warning("on_parasite: invalid parasite name %r", parasite)
            return 0

        policy = self._config.parasite_policy
        affected = 0
        with self._lock:
            for plant in self._plants.values():
                if plant.is_dead:
                    continue
                had_it = parasite.strip() in plant.parasites
                if plant.infest(parasite, policy) and not had_it:
                    affected += 1

        logger.info("Parasite introduced: %s (affected %d plants)", parasite, affected)
        return affected

    def infect_plant(self, plant_name: str, parasite: str) -> bool:
        """Introduce a parasite to one plant.

        Returns:
            True if the plant exists, is alive and now carries the parasite.
        """
        if not plant_name or not plant_name.strip():
            logger.warning("infect_plant: invalid plant name %r", plant_name)
            return False
        if not parasite or not parasite.strip():
            logger.warning("infect_plant: invalid parasite name %r", parasite)
            return False

        with self._lock:
            plant = self._plants.get(plant_name)
            if plant is None:
                logger.warning("infect_plant: plant not found: %s", plant_name)
                return False
            if plant.is_dead:
                logger.warning("infect_plant: cannot infect dead plant %s", plant_name)
                return False
            infected = plant.infest(parasite, self._config.parasite_policy)

        if infected:
            logger.info("Parasite %s introduced to plant %s", parasite, plant_name)
        else:
            logger.info(
                "Plant %s is not vulnerable to %s; infection skipped",
                plant_name,
                parasite,
            )
        return infected

    def check_random_parasite_attack(self) -> str | None:
        """Roll for a natural infestation of the whole garden.

        Returns:
            The parasite that attacked, or None if no attack happened.
        """
        with self._lock:
            if not any(not p.is_dead for p in self._plants.values()):
                return None
            if self._rng.random() >= self._config.random_attack_chance:
                return None
            parasite = str(self._rng.choice(RANDOM_ATTACK_PARASITES))
            affected = self.on_parasite(parasite)

        logger.warning("Random parasite attack: %s attacked the garden", parasite)
        self._bus.publish(
            EventType.PARASITE,
            source="garden",
            message=f"Random {parasite} attack",
            parasite=parasite,
            affected=affected,
            random=True,
        )
        return parasite

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def snapshot(self) -> GardenSnapshot:
        """Read-only view of the live plants and coin balance."""
        with self._lock:
            return GardenSnapshot(
                day=self._day,
                coins=self._coins,
                temperature=self._temperature,
                plants=tuple(
                    p.snapshot() for p in self._plants.values() if not p.is_dead
                ),
            )

    def report_state(self) -> dict[str, Any]:
        """Summarize the garden and log the summary.

        Returns:
            Dictionary with alive/dead counts, averages and temperature.
        """
        with self._lock:
            live = [p for p in self._plants.values() if not p.is_dead]
            report: dict[str, Any] = {
                "day": self._day,
                "alive": len(live),
                "dead": len(self._plants) - len(live),
                "avg_health": (
                    float(np.mean([p.health for p in live])) if live else 0.0
                ),
                "avg_moisture": (
                    float(np.mean([p.soil_moisture for p in live])) if live else 0.0
                ),
                "infested": sum(1 for p in live if p.parasites),
                "temperature": self._temperature,
                "coins": self._coins,
            }

        logger.info(
            "REPORT: alive=%d dead=%d | avgHealth=%.1f%% | avgMoisture=%.1f%% | "
            "infested=%d | temp=%dF | coins=%d",
            report["alive"],
            report["dead"],
            report["avg_health"],
            report["avg_moisture"],
            report["infested"],
            report["temperature"],
            report["coins"],
        )
        return report
