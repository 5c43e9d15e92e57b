# admission_engine/executor/gate.py
"""Admission gate - FIFO counting limiter for connection permits."""

import logging
import threading
from collections import deque
from typing import Deque, Optional, Tuple

from admission_engine.core.errors import AdmissionCancelled, PermitOverReleaseError

logger = logging.getLogger(__name__)


class AdmissionGate:
    """
    Counting gate bounding how many clients hold a permit at once.

    Permits are handed directly to the oldest waiter on release, so a
    freed permit wakes exactly one caller and a newcomer can never
    overtake a queued waiter.

    Invariant: available permits + holders == capacity.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._capacity = capacity
        self._permits = capacity
        self._holders = 0
        self._waiters: Deque[threading.Event] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def acquire(self, timeout: Optional[float] = None) -> None:
        """
        Block until a permit is granted.

        Args:
            timeout: Seconds to wait before giving up. None waits forever.

        Raises:
            AdmissionCancelled: The wait expired before a permit was
                handed over. The caller holds nothing.
        """
        with self._lock:
            # Waiters present implies no free permits
            if self._permits > 0 and not self._waiters:
                self._permits -= 1
                self._holders += 1
                return

            waiter = threading.Event()
            self._waiters.append(waiter)

        if waiter.wait(timeout):
            return

        with self._lock:
            # Handed over between the timeout and taking the lock
            if waiter.is_set():
                return
            self._waiters.remove(waiter)

        raise AdmissionCancelled(f"no permit granted within {timeout}s")

    def release(self) -> None:
        """Return a permit, handing it to the oldest waiter if any."""
        with self._lock:
            # Hand-off: the holder count is unchanged
            if self._waiters:
                self._waiters.popleft().set()
                return

            if self._holders == 0:
                logger.error(
                    f"[gate] Release without matching acquire "
                    f"(permits={self._permits}, capacity={self._capacity})"
                )
                raise PermitOverReleaseError(
                    f"release() would exceed capacity {self._capacity}"
                )

            self._permits += 1
            self._holders -= 1

    def available_permits(self) -> int:
        """Informational snapshot; stale as soon as it is read."""
        return self._permits

    def holder_count(self) -> int:
        return self._holders

    def counts(self) -> Tuple[int, int]:
        """Atomic (available permits, holders) pair."""
        with self._lock:
            return self._permits, self._holders

    def waiting_count(self) -> int:
        """Informational snapshot of blocked callers."""
        return len(self._waiters)

    def __repr__(self) -> str:
        return (
            f"<AdmissionGate(capacity={self._capacity}, "
            f"available={self._permits}, "
            f"holders={self._holders}, "
            f"waiting={len(self._waiters)})>"
        )
