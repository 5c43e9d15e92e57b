# admission_engine/core/state_machine.py

from datetime import datetime, timezone
from typing import Optional

from admission_engine.core.errors import ClientInvalidStateError
from admission_engine.core.models import ClientRecord, ClientState


ALLOWED_TRANSITIONS = {
    ClientState.ARRIVED: {
        ClientState.WAITING,
        ClientState.ADMITTED,
    },
    ClientState.WAITING: {
        ClientState.ADMITTED,
    },
    ClientState.ADMITTED: {
        ClientState.SERVED,
    },
    ClientState.SERVED: {
        ClientState.DISCONNECTED,
    },
}


class InvalidStateTransition(ClientInvalidStateError):
    pass


class ClientStateMachine:
    @staticmethod
    def transition(
        record: ClientRecord,
        new_state: ClientState,
        *,
        slot_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> ClientRecord:
        now = now or datetime.now(timezone.utc)

        current = record.state

        if current == new_state:
            return record

        allowed = ALLOWED_TRANSITIONS.get(current, set())
        if new_state not in allowed:
            raise InvalidStateTransition(
                f"{record.client_id}: cannot transition from {current.value} to {new_state.value}"
            )

        # Timestamp and slot semantics
        if new_state == ClientState.WAITING:
            record.waiting_since = now

        elif new_state == ClientState.ADMITTED:
            if slot_id is None:
                raise InvalidStateTransition(
                    f"{record.client_id}: ADMITTED requires a slot id"
                )
            record.slot_id = slot_id
            record.admitted_at = now

        elif new_state == ClientState.SERVED:
            record.served_at = now

        elif new_state == ClientState.DISCONNECTED:
            record.disconnected_at = now

        record.state = new_state
        return record
