"""Event system for garden simulation.

This module provides a synchronous pub/sub event bus that decouples the
clock and garden from the automated systems and any render layer.

Events can be used for:
- Driving the daily plant update from clock ticks
- Triggering irrigation after rain or a completed day
- Tracking plant lifecycle in sensor/actuator indexes
- Feeding a live event log in a dashboard
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict, deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

WILDCARD = "*"


class EventType(str, Enum):
    """Closed set of topics published in the garden simulation."""

    # Clock
    DAY_TICK = "day.tick"
    DAY_TICK_COMPLETE = "day.tick_complete"

    # Environment stimuli
    RAIN = "rain"
    TEMPERATURE = "temperature"
    PARASITE = "parasite"

    # Automated systems
    HEATING_ACTIVATED = "heating.activated"
    SPRINKLER_ACTIVATED = "sprinkler.activated"

    # Plant lifecycle
    PLANT_ADDED = "plant.added"
    PLANT_REMOVED = "plant.removed"


def _topic_key(event_type: EventType | str) -> str:
    """Normalize a topic to its string key.

    Raises:
        ValueError: If the topic is not a known EventType value.
    """
    if isinstance(event_type, EventType):
        return event_type.value
    if event_type == WILDCARD:
        return WILDCARD
    return EventType(event_type).value


@dataclass
class Event:
    """An event in the simulation.

    Attributes:
        event_type: Topic of the event.
        timestamp: When the event occurred.
        source: Name of the component/system that generated the event.
        data: Event-specific data payload.
        message: Human-readable description of the event.
    """

    event_type: EventType
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    source: str = "system"
    data: dict[str, Any] = field(default_factory=dict)
    message: str = ""

    def __post_init__(self) -> None:
        """Coerce string topics into the closed EventType set."""
        if not isinstance(self.event_type, EventType):
            self.event_type = EventType(self.event_type)

    def __str__(self) -> str:
        """String representation of the event."""
        return (
            f"[{self.timestamp.isoformat()}] {self.event_type.value} "
            f"from {self.source}: {self.message}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event.
        """
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "data": self.data,
            "message": self.message,
        }


# Type alias for event handlers
EventHandler = Callable[[Event], None]


class EventBus:
    """Central event bus for pub/sub messaging.

    Publishing is synchronous: every handler registered for the topic runs
    on the publishing thread, in registration order, before publish returns.
    A handler that raises is logged and skipped; the remaining handlers still
    run.

    Thread-safety: the handler lists and history are guarded by a lock. The
    handler list is copied before dispatch, so handlers run without the lock
    held and may themselves publish or (un)subscribe.
    """

    def __init__(self, *, max_history: int = 1000) -> None:
        """Initialize event bus.

        Args:
            max_history: Maximum number of events to keep in history.
        """
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._history: deque[Event] = deque(maxlen=max_history)
        self._lock = threading.RLock()

    def subscribe(
        self,
        event_type: EventType | str,
        handler: EventHandler,
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: Type of events to subscribe to.
            handler: Callback function to invoke when event occurs.
        """
        key = _topic_key(event_type)
        with self._lock:
            if handler not in self._handlers[key]:
                self._handlers[key].append(handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe to all events.

        Args:
            handler: Callback function to invoke for any event.
        """
        self.subscribe(WILDCARD, handler)

    def unsubscribe(
        self,
        event_type: EventType | str,
        handler: EventHandler,
    ) -> bool:
        """Unsubscribe from events.

        Args:
            event_type: Type of events to unsubscribe from.
            handler: The handler to remove.

        Returns:
            True if handler was found and removed.
        """
        key = _topic_key(event_type)
        with self._lock:
            if handler in self._handlers[key]:
                self._handlers[key].remove(handler)
                return True
        return False

    def handler_count(self, event_type: EventType | str) -> int:
        """Number of handlers registered for a topic."""
        key = _topic_key(event_type)
        with self._lock:
            return len(self._handlers.get(key, ()))

    def emit(self, event: Event) -> None:
        """Emit an event to all subscribers.

        Handler exceptions are logged but do not prevent other handlers from
        being called.

        Args:
            event: The event to emit.
        """
        event_key = event.event_type.value
        with self._lock:
            self._history.append(event)
            handlers = list(self._handlers.get(event_key, ()))
            handlers.extend(self._handlers.get(WILDCARD, ()))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                handler_name = getattr(handler, "__name__", str(handler))
                logger.exception(
                    "Event handler '%s' failed processing %s event from %s",
                    handler_name,
                    event_key,
                    event.source,
                )

    def publish(
        self,
        event_type: EventType | str,
        source: str,
        message: str = "",
        **data: Any,
    ) -> Event:
        """Publish an event with simpler syntax.

        Args:
            event_type: Type of event.
            source: Event source name.
            message: Human-readable message.
            **data: Event data as keyword arguments.

        Returns:
            The published event.
        """
        event = Event(
            event_type=EventType(_topic_key(event_type)),
            source=source,
            message=message,
            data=data,
        )
        self.emit(event)
        return event

    def _iter_history_filtered(
        self,
        history: list[Event],
        event_type: EventType | str | None = None,
        source: str | None = None,
    ) -> Iterator[Event]:
        """Iterate over a history copy with filtering applied.

        Args:
            history: Snapshot of the history to filter.
            event_type: Filter by event type.
            source: Filter by source.

        Yields:
            Events matching the filters.
        """
        type_key = _topic_key(event_type) if event_type is not None else None

        for event in history:
            if type_key is not None and event.event_type.value != type_key:
                continue
            if source is not None and event.source != source:
                continue
            yield event

    def get_history(
        self,
        event_type: EventType | str | None = None,
        source: str | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """Get event history with optional filtering.

        Args:
            event_type: Filter by event type.
            source: Filter by source.
            limit: Maximum number of events to return.

        Returns:
            List of events matching filters (most recent last).
        """
        with self._lock:
            history = list(self._history)

        filtered = list(self._iter_history_filtered(history, event_type, source))

        if limit is not None:
            return filtered[-limit:]

        return filtered


# Global event bus instance
_global_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the global event bus.

    Creates the bus on first call.

    Returns:
        The global EventBus instance.
    """
    global _global_bus
    if _global_bus is None:
        _global_bus = EventBus()
    return _global_bus


def reset_event_bus() -> None:
    """Reset the global event bus.

    Primarily useful for testing.
    """
    global _global_bus
    _global_bus = None
