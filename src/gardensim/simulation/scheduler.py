"""Interval scheduler for periodic simulation tasks.

Each scheduler owns a single loop thread that runs named interval jobs
(day ticks, pest sweeps, random parasite checks). A job that raises is
logged and counted; it never stops the loop or the other jobs. There is
no retry: a failed run is superseded by the next scheduled one.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Upper bound on a single idle wait so a stopped loop exits promptly
_MAX_IDLE_WAIT: float = 1.0


@dataclass
class IntervalJob:
    """A job run every `interval` seconds.

    Attributes:
        name: Unique job name within the scheduler.
        interval: Seconds between runs.
        func: Callable executed on each run.
        next_run: Monotonic time of the next run.
        runs: Number of completed executions.
        failures: Number of executions that raised.
    """

    name: str
    interval: float
    func: Callable[[], object]
    next_run: float
    runs: int = 0
    failures: int = 0


class IntervalScheduler:
    """Runs interval jobs on one background thread."""

    def __init__(self, name: str = "scheduler") -> None:
        """Initialize scheduler.

        Args:
            name: Thread name, also used in log lines.
        """
        self._name = name
        self._jobs: dict[str, IntervalJob] = {}
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def name(self) -> str:
        """Scheduler name."""
        return self._name

    @property
    def is_running(self) -> bool:
        """Whether the loop thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def schedule_interval(
        self,
        name: str,
        interval: float,
        func: Callable[[], object],
    ) -> IntervalJob:
        """Register a job whose first run is one interval from now.

        Args:
            name: Unique job name.
            interval: Seconds between runs.
            func: Callable to execute.

        Returns:
            The registered job.

        Raises:
            ValueError: If interval is not positive or the name is taken.
        """
        if interval <= 0:
            msg = f"Interval must be positive, got {interval}"
            raise ValueError(msg)
        with self._lock:
            if name in self._jobs:
                msg = f"Job '{name}' already scheduled on {self._name}"
                raise ValueError(msg)
            job = IntervalJob(
                name=name,
                interval=interval,
                func=func,
                next_run=time.monotonic() + interval,
            )
            self._jobs[name] = job
        logger.debug("%s: scheduled '%s' every %.1fs", self._name, name, interval)
        return job

    def get_job(self, name: str) -> IntervalJob | None:
        """Look up a job by name."""
        with self._lock:
            return self._jobs.get(name)

    def remove_job(self, name: str) -> bool:
        """Remove a job. Returns True if it existed."""
        with self._lock:
            return self._jobs.pop(name, None) is not None

    def start(self) -> None:
        """Start the loop thread."""
        if self.is_running:
            logger.warning("%s already running", self._name)
            return

        # Each loop owns its stop event; a loop that outlived stop() stays stopped
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run_loop,
            args=(self._stop_event,),
            daemon=True,
            name=self._name,
        )
        self._thread.start()
        logger.info("%s started with %d job(s)", self._name, len(self._jobs))

    def stop(self, wait: bool = True, timeout: float = 5.0) -> None:
        """Stop the loop thread and cancel all future runs.

        Args:
            wait: Wait for the loop thread to finish.
            timeout: Maximum wait time in seconds.
        """
        if self._thread is None:
            return

        self._stop_event.set()
        if (
            wait
            and self._thread is not threading.current_thread()
            and self._thread.is_alive()
        ):
            self._thread.join(timeout=timeout)
        self._thread = None
        logger.info("%s stopped", self._name)

    def run_pending(self, now: float | None = None) -> int:
        """Execute every job that is due.

        Args:
            now: Monotonic time to evaluate against (defaults to now).

        Returns:
            Number of jobs executed.
        """
        return self._run_due(now, self._stop_event)

    def _run_due(self, now: float | None, stop_event: threading.Event) -> int:
        current = time.monotonic() if now is None else now
        with self._lock:
            due = [job for job in self._jobs.values() if job.next_run <= current]

        for job in due:
            if stop_event.is_set():
                break
            self._execute(job)
            job.next_run = current + job.interval
        return len(due)

    def _seconds_until_next(self) -> float:
        with self._lock:
            if not self._jobs:
                return _MAX_IDLE_WAIT
            next_run = min(job.next_run for job in self._jobs.values())
        return min(_MAX_IDLE_WAIT, max(0.0, next_run - time.monotonic()))

    def _execute(self, job: IntervalJob) -> None:
        try:
            job.func()
        except Exception:
            job.failures += 1
            logger.exception("%s: job '%s' failed", self._name, job.name)
        finally:
            job.runs += 1

    def _run_loop(self, stop_event: threading.Event) -> None:
        """Main scheduler loop."""
        logger.debug("%s loop started", self._name)

        while not stop_event.is_set():
            try:
                self._run_due(None, stop_event)
            except Exception:
                logger.exception("Error in %s loop", self._name)
            stop_event.wait(self._seconds_until_next())

        logger.debug("%s loop ended", self._name)
