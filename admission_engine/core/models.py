"""Core domain models (client lifecycle)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class ClientState(Enum):
    """Client lifecycle states."""

    ARRIVED = "ARRIVED"
    WAITING = "WAITING"
    ADMITTED = "ADMITTED"
    SERVED = "SERVED"
    DISCONNECTED = "DISCONNECTED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ClientRecord:
    """A simulated device competing for a connection."""

    # Identity
    client_id: str
    kind: str = ""

    # Assignment
    slot_id: Optional[int] = None

    # State
    state: ClientState = ClientState.ARRIVED
    cancelled: bool = False

    # Lifecycle timestamps
    arrived_at: datetime = field(default_factory=_utcnow)
    waiting_since: Optional[datetime] = None
    admitted_at: Optional[datetime] = None
    served_at: Optional[datetime] = None
    disconnected_at: Optional[datetime] = None

    @property
    def connection_number(self) -> Optional[int]:
        """1-based connection number shown to users."""
        if self.slot_id is None:
            return None
        return self.slot_id + 1
