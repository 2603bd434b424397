"""Pest control.

Each sweep treats every parasite on every live, infested plant with a
treatment of random efficacy. Efficacy 100 always cures; lower efficacy
cures with the configured probability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gardensim.components.sensors import ParasiteSensor
from gardensim.core.config import PestControlConfig
from gardensim.core.events import EventBus
from gardensim.systems.tracking import PlantTracker

if TYPE_CHECKING:
    from numpy.random import Generator

    from gardensim.core.state import Plant
    from gardensim.simulation.garden import Garden

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PestSweepResult:
    """Outcome of one pest-control sweep.

    Attributes:
        infestations: Infested plants found.
        cures: Treatments that removed a parasite.
        failures: Treatments that did not.
    """

    infestations: int = 0
    cures: int = 0
    failures: int = 0

    @property
    def attempts(self) -> int:
        """Total treatments applied."""
        return self.cures + self.failures

    @property
    def success_rate(self) -> float:
        """Percentage of treatments that cured (0 when none applied)."""
        if self.attempts == 0:
            return 0.0
        return 100.0 * self.cures / self.attempts


class PestControl(PlantTracker[ParasiteSensor]):
    """Periodic treatment of infested plants."""

    def __init__(
        self,
        garden: Garden,
        bus: EventBus,
        config: PestControlConfig | None = None,
        *,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize pest control.

        Args:
            garden: Garden to treat.
            bus: Event bus carrying plant lifecycle events.
            config: Pest control configuration.
            rng: NumPy random generator for efficacy and cure rolls.
            seed: Seed for creating a new generator if rng is None.
        """
        self._config = config or PestControlConfig()
        if rng is not None:
            self._rng = rng
        else:
            self._rng = np.random.default_rng(seed)
        super().__init__(garden, bus)

    @property
    def config(self) -> PestControlConfig:
        """Pest control configuration."""
        return self._config

    def _create_entry(self, plant: Plant) -> ParasiteSensor:
        return ParasiteSensor(plant)

    def _entry_plant(self, entry: ParasiteSensor) -> Plant:
        return entry.plant

    def sweep(self) -> PestSweepResult:
        """Treat every parasite on every live infested plant.

        Returns:
            Counts of infested plants, cures and failures.
        """
        infestations = cures = failures = 0
        with self._garden.lock:
            self._sync()
            for name, sensor in list(self._entries.items()):
                if not sensor.is_active:
                    del self._entries[name]
                    continue
                if not sensor.has_parasites():
                    continue

                infestations += 1
                for parasite in sorted(sensor.detected()):
                    efficacy = int(
                        self._rng.integers(
                            self._config.efficacy_min, self._config.efficacy_max + 1
                        )
                    )
                    logger.info(
                        "Treating %s for %s (efficacy %d%%)", name, parasite, efficacy
                    )
                    if sensor.plant.cure(
                        parasite,
                        efficacy,
                        self._rng,
                        cure_chance=self._config.cure_chance,
                    ):
                        cures += 1
                        logger.info("Cured %s of %s", name, parasite)
                    else:
                        failures += 1
                        logger.info("Treatment of %s for %s failed", name, parasite)

        result = PestSweepResult(infestations=infestations, cures=cures, failures=failures)
        if infestations == 0:
            logger.info("Pest sweep: no infestations detected")
        else:
            logger.info(
                "Pest sweep: %d infested plant(s), %d cure(s), %d failure(s), "
                "success rate %.1f%%",
                result.infestations,
                result.cures,
                result.failures,
                result.success_rate,
            )
        return result

    daily_sweep = sweep
