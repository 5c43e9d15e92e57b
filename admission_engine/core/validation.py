#admission_engine\core\validation.py
from typing import Sequence

from admission_engine.core.errors import AdmissionValidationError


def validate_capacity(capacity: int) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise AdmissionValidationError("capacity must be an integer")

    if capacity < 1:
        raise AdmissionValidationError("capacity must be at least 1")


def validate_simulation(
    *,
    max_connections: int,
    total_devices: int,
    device_types: Sequence[str],
) -> None:
    # -------------------------
    # Pool
    # -------------------------
    validate_capacity(max_connections)

    # -------------------------
    # Clients
    # -------------------------
    if isinstance(total_devices, bool) or not isinstance(total_devices, int):
        raise AdmissionValidationError("total_devices must be an integer")

    if total_devices < 0:
        raise AdmissionValidationError("total_devices must not be negative")

    if not device_types:
        raise AdmissionValidationError("device_types must not be empty")

    if any(not t for t in device_types):
        raise AdmissionValidationError("device_types must not contain blank names")
