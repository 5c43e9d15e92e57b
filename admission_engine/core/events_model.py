"""Event models for the admission engine."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class EventType(Enum):
    ARRIVED = "ARRIVED"
    WAITING = "WAITING"
    ADMITTED = "ADMITTED"
    SERVED = "SERVED"
    DISCONNECTED = "DISCONNECTED"


@dataclass
class LifecycleEvent:
    """Client lifecycle event."""

    event_type: EventType
    client_id: str
    kind: str = ""
    slot_id: Optional[int] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def connection_number(self) -> Optional[int]:
        return None if self.slot_id is None else self.slot_id + 1

    @staticmethod
    def client_arrived(client_id: str, kind: str = ""):
        """Client arrived event."""
        return LifecycleEvent(
            event_type=EventType.ARRIVED,
            client_id=client_id,
            kind=kind,
        )

    @staticmethod
    def client_waiting(client_id: str, kind: str = "", available_permits: int = 0):
        """Client found the gate exhausted (best-effort snapshot)."""
        return LifecycleEvent(
            event_type=EventType.WAITING,
            client_id=client_id,
            kind=kind,
            metadata={
                "available_permits": available_permits,
            },
        )

    @staticmethod
    def client_admitted(client_id: str, slot_id: int, kind: str = ""):
        """Client admitted to a slot."""
        return LifecycleEvent(
            event_type=EventType.ADMITTED,
            client_id=client_id,
            kind=kind,
            slot_id=slot_id,
        )

    @staticmethod
    def client_served(client_id: str, slot_id: int, kind: str = ""):
        return LifecycleEvent(
            event_type=EventType.SERVED,
            client_id=client_id,
            kind=kind,
            slot_id=slot_id,
        )

    @staticmethod
    def client_disconnected(client_id: str, slot_id: int, kind: str = ""):
        return LifecycleEvent(
            event_type=EventType.DISCONNECTED,
            client_id=client_id,
            kind=kind,
            slot_id=slot_id,
        )


def format_event_line(event: LifecycleEvent) -> str:
    """Render an event as a human-readable log line."""
    if event.event_type == EventType.ARRIVED:
        return f"({event.client_id})({event.kind}) arrived"
    if event.event_type == EventType.WAITING:
        return f"{event.client_id}({event.kind}) arrived and waiting"

    labels = {
        EventType.ADMITTED: "Occupied",
        EventType.SERVED: "Being Served",
        EventType.DISCONNECTED: "Logged out",
    }
    return f"Connection {event.connection_number}: {event.client_id} {labels[event.event_type]}"
