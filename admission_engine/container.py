#admission_engine\container.py

"""Dependency injection container - wires sinks and the admission system."""

from typing import Callable, Iterable, Optional

from admission_engine.core.events import (
    EventEmitter,
    LineWriterEventEmitter,
    LoggingEventEmitter,
    MultiEventEmitter,
)
from admission_engine.core.service import AdmissionSystem


# ============================================
# EVENTS
# ============================================

def build_emitters(
    write_line: Optional[Callable[[str], None]] = None,
    extra: Iterable[EventEmitter] = (),
) -> MultiEventEmitter:
    """Console logging, plus a line sink (e.g. output file) when given."""
    emitters = [LoggingEventEmitter()]
    if write_line is not None:
        emitters.append(LineWriterEventEmitter(write_line))
    emitters.extend(extra)
    return MultiEventEmitter(emitters)


# ============================================
# SERVICES
# ============================================

def build_admission_system(capacity: int, emitters: EventEmitter) -> AdmissionSystem:
    return AdmissionSystem(
        capacity=capacity,
        event_emitters=emitters,
    )
