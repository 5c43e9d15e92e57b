# admission_engine/executor/lifecycle.py
"""Client lifecycle - the task body run once per simulated device."""

import logging
import random
import time
from typing import Callable, Optional

from admission_engine.core.errors import AdmissionCancelled, ClientInvalidStateError
from admission_engine.core.models import ClientRecord, ClientState
from admission_engine.core.service import AdmissionSystem
from admission_engine.core.state_machine import ClientStateMachine
from admission_engine.executor.config import LifecycleTimings

logger = logging.getLogger(__name__)


def _pause(upper: float, rng: random.Random, sleep: Callable[[float], None]) -> None:
    if upper > 0:
        sleep(rng.uniform(0, upper))


def run_client(
    record: ClientRecord,
    system: AdmissionSystem,
    timings: LifecycleTimings = LifecycleTimings(),
    *,
    rng: Optional[random.Random] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ClientRecord:
    """
    Drive one client through ARRIVED -> ADMITTED -> SERVED -> DISCONNECTED.

    Args:
        record: The client's own record; nothing else writes to it
        system: Shared admission system
        timings: Random delay bounds
        rng: Random source for delays
        sleep: Sleep function (injectable for tests)

    Returns:
        The record in its final state. A cancelled admission wait leaves
        it short of ADMITTED with cancelled=True.

    Raises:
        ClientInvalidStateError: record is not fresh (state ARRIVED)
    """
    if record.state != ClientState.ARRIVED or record.cancelled:
        raise ClientInvalidStateError(
            f"{record.client_id} must start in ARRIVED, not {record.state.value}"
        )

    rng = rng or random.Random()

    system.arrive(record.client_id, record.kind)
    _pause(timings.arrival_delay_max, rng, sleep)

    # Admission
    try:
        slot_id = system.admit(
            record.client_id,
            kind=record.kind,
            timeout=timings.admission_timeout,
            on_waiting=lambda: ClientStateMachine.transition(record, ClientState.WAITING),
        )
    except AdmissionCancelled as e:
        record.cancelled = True
        logger.warning(f"[client {record.client_id}] Gave up waiting for a connection: {e}")
        return record

    ClientStateMachine.transition(record, ClientState.ADMITTED, slot_id=slot_id)
    _pause(timings.connect_delay_max, rng, sleep)

    # Service
    system.serve(record.client_id, slot_id, record.kind)
    ClientStateMachine.transition(record, ClientState.SERVED)
    _pause(timings.serve_delay_max, rng, sleep)

    # Disconnect
    system.depart(record.client_id, slot_id, kind=record.kind)
    ClientStateMachine.transition(record, ClientState.DISCONNECTED)

    logger.debug(f"[client {record.client_id}] Done with connection {record.connection_number}")
    return record
