"""Day-tick clock for garden simulation.

The clock turns real time into simulated days: one day per
`period_seconds` (one real hour by default). Each day is announced on the
event bus as a DAY_TICK event carrying the day number.
"""

from __future__ import annotations

import logging
import threading

from gardensim.core.events import EventBus, EventType
from gardensim.simulation.scheduler import IntervalScheduler

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_SECONDS: float = 3600.0
MIN_PERIOD_SECONDS: float = 1.0


class Clock:
    """Periodic day-tick producer.

    Day numbering starts at 1. `start()` announces day 1 immediately and
    every following day once per period on a dedicated scheduler thread.
    `tick()` announces the next day synchronously, which lets headless runs
    and tests drive the simulation without waiting.
    """

    def __init__(
        self,
        bus: EventBus,
        *,
        period_seconds: float = DEFAULT_PERIOD_SECONDS,
    ) -> None:
        """Initialize clock.

        Args:
            bus: Event bus to announce day ticks on.
            period_seconds: Real seconds per simulated day (minimum 1).
        """
        self._bus = bus
        self._period_seconds = DEFAULT_PERIOD_SECONDS
        self.period_seconds = period_seconds
        self._day = 1
        self._announced = False
        self._lock = threading.Lock()
        self._scheduler = IntervalScheduler(name="garden-clock")

    @property
    def day(self) -> int:
        """Current (most recently announced) day number."""
        with self._lock:
            return self._day

    @property
    def period_seconds(self) -> float:
        """Real seconds per simulated day."""
        return self._period_seconds

    @period_seconds.setter
    def period_seconds(self, seconds: float) -> None:
        """Set the time scale; values below 1 second are clamped to 1."""
        if seconds < MIN_PERIOD_SECONDS:
            logger.warning(
                "Clock: invalid period %.3fs, using minimum %.0fs",
                seconds,
                MIN_PERIOD_SECONDS,
            )
            seconds = MIN_PERIOD_SECONDS
        self._period_seconds = float(seconds)

    @property
    def is_running(self) -> bool:
        """Whether periodic ticking is active."""
        return self._scheduler.is_running

    def tick(self) -> int:
        """Announce the next day.

        The first call announces day 1; later calls increment first.

        Returns:
            The day number announced.
        """
        with self._lock:
            if self._announced:
                self._day += 1
            self._announced = True
            day = self._day

        logger.info("DayTick %d", day)
        self._bus.publish(
            EventType.DAY_TICK,
            source="clock",
            message=f"Day {day}",
            day=day,
        )
        return day

    def start(self) -> None:
        """Announce the current day and start periodic ticking."""
        if self.is_running:
            logger.warning("Clock already running")
            return

        self.tick()
        self._scheduler.remove_job("day_tick")
        self._scheduler.schedule_interval("day_tick", self._period_seconds, self.tick)
        self._scheduler.start()
        logger.info("Clock started: 1 day per %.0f sec", self._period_seconds)

    def stop(self) -> None:
        """Cancel all future ticks."""
        self._scheduler.stop()
