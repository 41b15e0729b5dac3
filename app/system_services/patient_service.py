# app/system_services/patient_service.py
"""
Service layer for patient operations.

Architecture:
    API Layer (system_routes) → PatientService → PatientStore → Database

PatientService holds nothing but its store; a fresh one is built per request.
Email uniqueness is pre-checked here, but the store's unique index has the last
word: when a concurrent writer wins the race, the store's ConstraintViolation
is translated into AlreadyExistsError instead of leaking out.
"""
import logging
from typing import Any, List

from pydantic import ValidationError

from app.system_models.patient_model.patient_schemas import (
    PatientCreate,
    PatientRecord,
    field_errors,
)
from app.system_services.patient_exceptions import (
    AlreadyExistsError,
    ConstraintViolation,
    InvalidInputError,
    NotFoundError,
    RecordNotFound,
)
from app.system_services.patient_store import MUTABLE_FIELDS, PatientStore

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, store: PatientStore):
        self.store = store

    # ============================================================
    # ✅ LIST
    # ============================================================
    async def list_patients(self) -> List[PatientRecord]:
        patients = await self.store.list_all()
        logger.info(f"Listing {len(patients)} patient(s)")
        return patients

    # ============================================================
    # ✅ GET BY ID
    # ============================================================
    async def get_patient(self, patient_id: int) -> PatientRecord:
        """
        Raises:
            NotFoundError: no patient with this id.
        """
        logger.info(f"Request received for patient id: {patient_id}")

        patient = await self.store.find_by_id(patient_id)
        if patient is None:
            logger.info(f"Patient not found: {patient_id}")
            raise NotFoundError(patient_id=patient_id)
        return patient

    # ============================================================
    # ✅ CREATE
    # ============================================================
    async def create_patient(self, candidate: Any) -> PatientRecord:
        """
        Create a new patient.

        Args:
            candidate: PatientCreate, a mapping, or any object exposing the
                candidate fields. Ids and timestamps on it are ignored.

        Returns:
            PatientRecord: the stored patient with its id and timestamps.

        Raises:
            InvalidInputError: a field rule failed, or the store rejected the data.
            AlreadyExistsError: the email is taken.
        """
        data = self._validate(candidate)
        logger.info(f"Request received to create patient with email: {data.email}")

        if await self.store.exists_by_email(data.email):
            logger.warning(f"Patient already exists with email: {data.email}")
            raise AlreadyExistsError(email=data.email)

        try:
            created = await self.store.insert(data)
        except ConstraintViolation as e:
            logger.error(f"Data integrity violation while creating patient: {e}")
            raise self._translate_violation(e, data.email) from e

        logger.info(f"Successfully created patient with id: {created.id}")
        return created

    # ============================================================
    # ✅ UPDATE
    # ============================================================
    async def update_patient(self, patient_id: int, candidate: Any) -> PatientRecord:
        """
        Replace every mutable field of a patient.

        id and created_at are kept; the store refreshes updated_at.

        Raises:
            InvalidInputError: a field rule failed, or the store rejected the data.
            NotFoundError: no patient with this id.
            AlreadyExistsError: the new email belongs to another patient.
        """
        data = self._validate(candidate)
        logger.info(f"Request received to update patient id: {patient_id}")

        existing = await self.get_patient(patient_id)

        if existing.email != data.email and await self.store.exists_by_email_excluding_id(
            data.email, patient_id
        ):
            logger.error(f"Email conflict during update for patient id: {patient_id}")
            raise AlreadyExistsError(
                f"Email {data.email} already exists for another patient", email=data.email
            )

        updated = existing.model_copy(update={field: getattr(data, field) for field in MUTABLE_FIELDS})

        try:
            saved = await self.store.replace(updated)
        except ConstraintViolation as e:
            logger.error(f"Data integrity violation while updating patient: {e}")
            raise self._translate_violation(e, data.email) from e
        except RecordNotFound as e:
            logger.warning(f"Patient {patient_id} disappeared during update")
            raise NotFoundError(patient_id=patient_id) from e

        logger.info(f"Successfully updated patient with id: {patient_id}")
        return saved

    # ============================================================
    # ✅ DELETE
    # ============================================================
    async def delete_patient(self, patient_id: int) -> None:
        """
        Raises:
            NotFoundError: no patient with this id.
        """
        logger.info(f"Deleting patient with id: {patient_id}")

        if not await self.store.exists_by_id(patient_id):
            logger.error(f"Patient with id {patient_id} not found for deletion")
            raise NotFoundError(patient_id=patient_id)

        if not await self.store.delete_by_id(patient_id):
            # removed by someone else between the check and the delete
            logger.error(f"Patient with id {patient_id} vanished before deletion")
            raise NotFoundError(patient_id=patient_id)

        logger.info(f"Successfully deleted patient with id: {patient_id}")

    # ============================================================
    # ✅ HELPERS
    # ============================================================
    @staticmethod
    def _validate(candidate: Any) -> PatientCreate:
        try:
            return PatientCreate.model_validate(candidate, from_attributes=True)
        except ValidationError as e:
            errors = field_errors(e)
            logger.info(f"Rejected patient data, invalid fields: {[err['field'] for err in errors]}")
            raise InvalidInputError(errors=errors) from e

    @staticmethod
    def _translate_violation(error: ConstraintViolation, email: str) -> Exception:
        if error.is_email_conflict:
            return AlreadyExistsError(email=email)
        return InvalidInputError()
