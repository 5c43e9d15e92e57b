# admission_engine/executor/slots.py

"""Slot allocator for tracking which connections are occupied."""

import logging
import threading
from typing import List, Optional

from admission_engine.core.errors import (
    NoFreeSlotError,
    SlotAlreadyFreeError,
    SlotOwnershipError,
    UnknownSlotError,
)

logger = logging.getLogger(__name__)


class Slot:
    """Represents a single connection slot."""

    def __init__(self, slot_id: int):
        self.slot_id = slot_id
        self.client_id: Optional[str] = None

    def is_free(self) -> bool:
        """Check if slot is available."""
        return self.client_id is None

    def bind(self, client_id: str) -> None:
        """Bind client to this slot."""
        if not self.is_free():
            raise SlotOwnershipError(
                f"Slot {self.slot_id} already occupied by {self.client_id}"
            )
        self.client_id = client_id

    def release(self) -> None:
        """Release slot."""
        if self.is_free():
            raise SlotAlreadyFreeError(f"Slot {self.slot_id} is already free")
        self.client_id = None

    def __repr__(self) -> str:
        status = "free" if self.is_free() else f"occupied({self.client_id})"
        return f"<Slot(id={self.slot_id}, {status})>"


class SlotAllocator:
    """
    Assigns slot ids to admitted clients.

    Only callers holding a gate permit may call assign(); the gate bounds
    holders to the number of slots, so a free slot always exists for them.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._slots = [Slot(i) for i in range(capacity)]
        self._lock = threading.Lock()

    def assign(self, client_id: str) -> int:
        """Bind the lowest-numbered free slot to client and return its id."""
        with self._lock:
            for slot in self._slots:
                if slot.is_free():
                    slot.bind(client_id)
                    return slot.slot_id

        logger.error(f"[slots] No free slot for permit holder {client_id}: {self!r}")
        raise NoFreeSlotError(f"No free slot for {client_id}")

    def release(self, slot_id: int, client_id: Optional[str] = None) -> None:
        """
        Free a slot.

        Args:
            slot_id: Slot to free
            client_id: When given, the slot must be bound to this client

        Raises:
            UnknownSlotError: slot_id out of range
            SlotAlreadyFreeError: slot is not occupied
            SlotOwnershipError: slot is bound to another client
        """
        with self._lock:
            if not 0 <= slot_id < len(self._slots):
                raise UnknownSlotError(f"Unknown slot {slot_id}")

            slot = self._slots[slot_id]
            if client_id is not None and not slot.is_free() and slot.client_id != client_id:
                logger.error(
                    f"[slots] {client_id} tried to release slot {slot_id} held by {slot.client_id}"
                )
                raise SlotOwnershipError(
                    f"Slot {slot_id} is held by {slot.client_id}, not {client_id}"
                )

            try:
                slot.release()
            except SlotAlreadyFreeError:
                logger.error(f"[slots] Double release of slot {slot_id} (client={client_id})")
                raise

    def active_slots(self) -> List[Slot]:
        """Get all occupied slots."""
        with self._lock:
            return [s for s in self._slots if not s.is_free()]

    def find_slot_by_client(self, client_id: str) -> Optional[Slot]:
        """Find slot bound to given client."""
        with self._lock:
            for slot in self._slots:
                if slot.client_id == client_id:
                    return slot
        return None

    def occupancy(self) -> List[bool]:
        """Occupied flag per slot id."""
        with self._lock:
            return [not s.is_free() for s in self._slots]

    def total_slots(self) -> int:
        """Get total number of slots."""
        return len(self._slots)

    def free_slots(self) -> int:
        """Get number of free slots."""
        with self._lock:
            return sum(1 for s in self._slots if s.is_free())

    def __repr__(self) -> str:
        occupied = sum(1 for s in self._slots if not s.is_free())
        return (
            f"<SlotAllocator(total={len(self._slots)}, "
            f"free={len(self._slots) - occupied}, "
            f"active={occupied})>"
        )
