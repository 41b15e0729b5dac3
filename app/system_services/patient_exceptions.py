# app/system_services/patient_exceptions.py
"""
Patient-related exceptions.

Store errors are raised by PatientStore implementations; service errors are the
user-facing outcomes raised by PatientService and mapped to HTTP by the router.
"""
from typing import List, Optional


# ============================================================
# ✅ STORE ERRORS
# ============================================================
class StoreError(Exception):
    """Base class for rejections reported by a patient store."""
    pass


class ConstraintViolation(StoreError):
    """A write was rejected by an integrity constraint."""

    def __init__(self, constraint: str, is_email_conflict: bool = False):
        super().__init__(f"Constraint violated: {constraint}")
        self.constraint = constraint
        self.is_email_conflict = is_email_conflict


class RecordNotFound(StoreError):
    """A replace targeted a row that no longer exists."""

    def __init__(self, patient_id: int):
        super().__init__(f"Patient {patient_id} no longer exists")
        self.patient_id = patient_id


# ============================================================
# ✅ SERVICE ERRORS
# ============================================================
class PatientServiceError(Exception):
    """Expected, caller-recoverable outcome of a patient operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(PatientServiceError):
    """Candidate data failed a field rule, or the store rejected the write."""

    def __init__(self, message: str = "Invalid patient data provided", errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(PatientServiceError):
    def __init__(self, message: str = "Patient not found", patient_id: Optional[int] = None):
        super().__init__(message)
        self.patient_id = patient_id


class AlreadyExistsError(PatientServiceError):
    def __init__(self, message: str = "Patient already exists", email: Optional[str] = None):
        super().__init__(message)
        self.email = email
