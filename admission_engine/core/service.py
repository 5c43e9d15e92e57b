"""Admission service - composes the gate and the slot allocator."""

import logging
from typing import Callable, Optional

from admission_engine.core.events import EventEmitter, NullEventEmitter
from admission_engine.core.events_model import LifecycleEvent
from admission_engine.core.schemas import AdmissionSnapshot
from admission_engine.core.validation import validate_capacity
from admission_engine.executor.gate import AdmissionGate
from admission_engine.executor.slots import SlotAllocator

logger = logging.getLogger(__name__)


class AdmissionSystem:
    """Admission facade: one gate, one slot allocator, one event sink."""

    def __init__(self, capacity: int, event_emitters: Optional[EventEmitter] = None):
        validate_capacity(capacity)

        self.gate = AdmissionGate(capacity)
        self.slots = SlotAllocator(capacity)
        self._emitters = event_emitters or NullEventEmitter()

    @property
    def capacity(self) -> int:
        return self.gate.capacity

    # -------------------------
    # ARRIVE
    # -------------------------

    def arrive(self, client_id: str, kind: str = "") -> None:
        """Announce a client arrival."""
        self._emit(LifecycleEvent.client_arrived(client_id, kind))

    # -------------------------
    # ADMIT
    # -------------------------

    def admit(
        self,
        client_id: str,
        *,
        kind: str = "",
        timeout: Optional[float] = None,
        on_waiting: Optional[Callable[[], None]] = None,
    ) -> int:
        """
        Acquire a permit and assign a slot.

        Blocks while every connection is occupied. The WAITING event is
        emitted from a racy snapshot and only feeds logging.

        Returns:
            The assigned slot id (0-based)

        Raises:
            AdmissionCancelled: timeout expired before a permit was granted
            ContractViolation: a permit holder found no free slot
        """
        available = self.gate.available_permits()
        if available == 0:
            if on_waiting:
                on_waiting()
            self._emit(LifecycleEvent.client_waiting(client_id, kind, available))

        self.gate.acquire(timeout=timeout)

        try:
            slot_id = self.slots.assign(client_id)
        except Exception:
            self.gate.release()
            raise

        self._emit(LifecycleEvent.client_admitted(client_id, slot_id, kind))
        return slot_id

    # -------------------------
    # SERVE
    # -------------------------

    def serve(self, client_id: str, slot_id: int, kind: str = "") -> None:
        self._emit(LifecycleEvent.client_served(client_id, slot_id, kind))

    # -------------------------
    # DEPART
    # -------------------------

    def depart(self, client_id: str, slot_id: int, *, kind: str = "") -> None:
        """
        Free the slot, then return the permit.

        A contract violation from the allocator propagates and the permit
        is kept, so a bogus depart never inflates the gate.
        """
        self.slots.release(slot_id, client_id)
        self.gate.release()
        self._emit(LifecycleEvent.client_disconnected(client_id, slot_id, kind))

    # -------------------------
    # INSPECT
    # -------------------------

    def snapshot(self) -> AdmissionSnapshot:
        return AdmissionSnapshot(
            capacity=self.capacity,
            available_permits=self.gate.available_permits(),
            waiting=self.gate.waiting_count(),
            holders=self.gate.holder_count(),
            occupied_slots=[s.slot_id for s in self.slots.active_slots()],
        )

    # -------------------------
    # HELPERS
    # -------------------------

    def _emit(self, event: LifecycleEvent) -> None:
        # Sink failures must never leave a permit or slot stranded
        try:
            self._emitters.emit([event])
        except Exception:
            logger.exception(
                f"[admission] Event sink failed on {event.event_type.value} for {event.client_id}"
            )
