#admission_engine\executor\config.py
from dataclasses import dataclass


@dataclass(frozen=True)
class LifecycleTimings:
    """Upper bounds (seconds) of the random delays in a client's lifecycle."""

    arrival_delay_max: float = 1.0
    connect_delay_max: float = 1.0
    serve_delay_max: float = 2.0

    admission_timeout: float | None = None
