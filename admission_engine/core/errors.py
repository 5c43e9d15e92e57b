# admission_engine/core/errors.py

# -----------------------------
# Base Errors
# -----------------------------

class AdmissionError(Exception):
    """Base class for all admission engine errors."""
    pass


# -----------------------------
# Validation / Lifecycle Errors
# -----------------------------

class AdmissionValidationError(AdmissionError):
    """Invalid configuration or malformed input."""
    pass


class ClientInvalidStateError(AdmissionError):
    """Illegal client state transition attempted."""
    pass


# -----------------------------
# Contract Violations
# -----------------------------

class ContractViolation(AdmissionError):
    """Gate and allocator invariants broken by a caller."""
    pass


class PermitOverReleaseError(ContractViolation):
    """Permit released without a matching acquire."""
    pass


class NoFreeSlotError(ContractViolation):
    """Permit holder found every slot occupied."""
    pass


class SlotAlreadyFreeError(ContractViolation):
    pass


class SlotOwnershipError(ContractViolation):
    pass


class UnknownSlotError(ContractViolation):
    pass


# -----------------------------
# Cancellation
# -----------------------------

class AdmissionCancelled(AdmissionError):
    """Admission wait gave up before a permit was granted."""
    pass
