#tests\test_state_machine.py

"""Test client lifecycle state machine."""

import pytest

from admission_engine.core.errors import ClientInvalidStateError
from admission_engine.core.models import ClientRecord, ClientState
from admission_engine.core.state_machine import ClientStateMachine, InvalidStateTransition


class TestClientStateMachine:
    """Test client state transitions."""

    @pytest.fixture
    def record(self):
        """Create sample client."""
        return ClientRecord(client_id="C1", kind="mobile")

    def test_initial_state(self, record):
        """Test client starts in ARRIVED state."""
        assert record.state == ClientState.ARRIVED
        assert record.slot_id is None
        assert record.connection_number is None
        assert record.arrived_at is not None

    def test_direct_admission(self, record):
        """Test ARRIVED -> ADMITTED -> SERVED -> DISCONNECTED."""
        ClientStateMachine.transition(record, ClientState.ADMITTED, slot_id=0)
        assert record.slot_id == 0
        assert record.connection_number == 1
        assert record.admitted_at is not None

        ClientStateMachine.transition(record, ClientState.SERVED)
        assert record.served_at is not None

        ClientStateMachine.transition(record, ClientState.DISCONNECTED)
        assert record.disconnected_at is not None

    def test_admission_after_waiting(self, record):
        """Test ARRIVED -> WAITING -> ADMITTED."""
        ClientStateMachine.transition(record, ClientState.WAITING)
        assert record.waiting_since is not None

        ClientStateMachine.transition(record, ClientState.ADMITTED, slot_id=2)
        assert record.state == ClientState.ADMITTED
        assert record.connection_number == 3

    def test_admitted_requires_slot(self, record):
        with pytest.raises(InvalidStateTransition):
            ClientStateMachine.transition(record, ClientState.ADMITTED)

    @pytest.mark.parametrize("target", [ClientState.SERVED, ClientState.DISCONNECTED])
    def test_cannot_skip_admission(self, record, target):
        with pytest.raises(InvalidStateTransition):
            ClientStateMachine.transition(record, target)

    def test_cannot_disconnect_before_served(self, record):
        ClientStateMachine.transition(record, ClientState.ADMITTED, slot_id=0)

        with pytest.raises(InvalidStateTransition):
            ClientStateMachine.transition(record, ClientState.DISCONNECTED)

    def test_disconnected_is_terminal(self, record):
        ClientStateMachine.transition(record, ClientState.ADMITTED, slot_id=0)
        ClientStateMachine.transition(record, ClientState.SERVED)
        ClientStateMachine.transition(record, ClientState.DISCONNECTED)

        for target in (ClientState.ARRIVED, ClientState.WAITING, ClientState.ADMITTED, ClientState.SERVED):
            with pytest.raises(ClientInvalidStateError):
                ClientStateMachine.transition(record, target, slot_id=0)

    def test_same_state_is_noop(self, record):
        ClientStateMachine.transition(record, ClientState.WAITING)
        first_seen = record.waiting_since

        ClientStateMachine.transition(record, ClientState.WAITING)

        assert record.waiting_since == first_seen
