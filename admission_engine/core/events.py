"""Event emitters (observability sinks) for the admission engine."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from admission_engine.core.events_model import EventType, LifecycleEvent, format_event_line


SLOT_EVENTS = {
    EventType.ADMITTED,
    EventType.SERVED,
    EventType.DISCONNECTED,
}


class EventEmitter(ABC):
    """Abstract event emitter."""

    @abstractmethod
    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        """Emit one or more events."""
        pass


class InMemoryEventEmitter(EventEmitter):
    """Collects events in memory (used by tests)."""

    def __init__(self):
        self.events: List[LifecycleEvent] = []
        self._lock = threading.Lock()

    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        """Validate and store events."""
        for event in events:
            # Validation
            if not isinstance(event.event_type, EventType):
                raise ValueError(f"Invalid event type: {event.event_type}")
            if not event.client_id:
                raise ValueError("Event must have client_id")
            if event.event_type in SLOT_EVENTS and event.slot_id is None:
                raise ValueError(f"{event.event_type.value} event must have slot_id")

            with self._lock:
                self.events.append(event)

    def of_type(self, event_type: EventType) -> List[LifecycleEvent]:
        with self._lock:
            return [e for e in self.events if e.event_type == event_type]

    def for_client(self, client_id: str) -> List[LifecycleEvent]:
        with self._lock:
            return [e for e in self.events if e.client_id == client_id]


class LoggingEventEmitter(EventEmitter):
    """Writes events to a stdlib logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("admission_engine.events")
        self._level = level

    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        for event in events:
            self._logger.log(self._level, format_event_line(event))


class LineWriterEventEmitter(EventEmitter):
    """
    Renders events as lines and hands them to any line writer.

    The writer is a plain callable taking one string, so the same emitter
    serves files, consoles or lists.
    """

    def __init__(self, write_line: Callable[[str], None]):
        self._write_line = write_line
        self._lock = threading.Lock()

    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        with self._lock:
            for event in events:
                self._write_line(format_event_line(event))


class MultiEventEmitter(EventEmitter):
    """Fan-out to multiple emitters."""

    def __init__(self, emitters: Iterable[EventEmitter]):
        self._emitters = list(emitters)

    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        """Emit to all emitters."""
        events = list(events)
        for emitter in self._emitters:
            emitter.emit(events)


class NullEventEmitter(EventEmitter):
    """No-op emitter (used when events are not needed)."""

    def emit(self, events: Iterable[LifecycleEvent]) -> None:
        """Do nothing."""
        pass
