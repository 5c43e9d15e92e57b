#tests\conftest.py

"""Pytest configuration and fixtures."""

import threading
import time

import pytest

from admission_engine.core.events import InMemoryEventEmitter
from admission_engine.core.service import AdmissionSystem
from admission_engine.executor.config import LifecycleTimings


class TrackingAdmissionSystem(AdmissionSystem):
    """
    Records how many clients sit between admit() returning and depart()
    being called, and which slots they hold. Every admit and depart also
    checks available permits + holders == capacity on the gate.
    """

    def __init__(self, capacity, event_emitters=None):
        super().__init__(capacity, event_emitters)
        self._track_lock = threading.Lock()
        self.holding = {}
        self.max_concurrent = 0
        self.violations = []
        self.samples = 0

    def admit(self, client_id, **kwargs):
        slot_id = super().admit(client_id, **kwargs)
        with self._track_lock:
            if slot_id in self.holding.values():
                self.violations.append(f"slot {slot_id} handed to {client_id} twice")
            self.holding[client_id] = slot_id
            self.max_concurrent = max(self.max_concurrent, len(self.holding))
            if len(self.holding) > self.capacity:
                self.violations.append(f"{len(self.holding)} holders > {self.capacity}")
            self._check_conservation()
        return slot_id

    def depart(self, client_id, slot_id, **kwargs):
        with self._track_lock:
            self.holding.pop(client_id, None)
            self._check_conservation()
        super().depart(client_id, slot_id, **kwargs)

    def _check_conservation(self):
        available, holders = self.gate.counts()
        self.samples += 1
        if available + holders != self.capacity:
            self.violations.append(f"{available} available + {holders} holders != {self.capacity}")
        if len(self.holding) > holders:
            self.violations.append(f"{len(self.holding)} admitted > {holders} permit holders")


def _wait_until(predicate, timeout=5.0, interval=0.005):
    """Poll until predicate() is truthy; fail the test on timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return
        time.sleep(interval)
    pytest.fail("condition not reached in time")


@pytest.fixture
def emitter():
    """In-memory event sink."""
    return InMemoryEventEmitter()


@pytest.fixture
def system(emitter):
    """Admission system with 2 connections."""
    return AdmissionSystem(capacity=2, event_emitters=emitter)


@pytest.fixture
def instant_timings():
    """Lifecycle without delays."""
    return LifecycleTimings(
        arrival_delay_max=0,
        connect_delay_max=0,
        serve_delay_max=0,
    )


@pytest.fixture
def short_timings():
    """Small random delays so clients overlap."""
    return LifecycleTimings(
        arrival_delay_max=0.01,
        connect_delay_max=0.01,
        serve_delay_max=0.02,
    )


@pytest.fixture
def wait_until():
    """Polling helper for threaded tests."""
    return _wait_until


@pytest.fixture
def tracking_system(emitter):
    """Factory for admission systems that record concurrent holders."""
    def _build(capacity):
        return TrackingAdmissionSystem(capacity, event_emitters=emitter)
    return _build


class FailingEventEmitter(InMemoryEventEmitter):
    """Sink that raises OSError on chosen event types (e.g. a full disk)."""

    def __init__(self, fail_on):
        super().__init__()
        self.fail_on = set(fail_on)

    def emit(self, events):
        events = list(events)
        if any(e.event_type in self.fail_on for e in events):
            raise OSError("No space left on device")
        super().emit(events)


@pytest.fixture
def failing_emitter():
    """Factory for sinks that fail on the given event types."""
    return FailingEventEmitter
