# app/system_services/patient_store.py
"""
Patient record store.

PatientStore is the storage contract consumed by PatientService. The SQLAlchemy
implementation runs every write in its own transaction and rolls back before
raising, so a failed insert/replace/delete never leaves a partial row behind.
The unique index on email is the final authority on email uniqueness.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.helpers.time import as_utc, utcnow
from app.system_models.patient_model.patient_model import EMAIL_CONSTRAINT, Patient
from app.system_models.patient_model.patient_schemas import PatientCreate, PatientRecord
from app.system_services.patient_exceptions import ConstraintViolation, RecordNotFound

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = (
    "first_name",
    "last_name",
    "address",
    "city",
    "state",
    "zip_code",
    "phone_number",
    "email",
)


class PatientStore(ABC):
    """
    Storage contract for patient records.

    Implementations assign ids, set created_at/updated_at, and enforce email
    uniqueness themselves. Each method is atomic on its own.
    """

    @abstractmethod
    async def list_all(self) -> List[PatientRecord]:
        ...

    @abstractmethod
    async def find_by_id(self, patient_id: int) -> Optional[PatientRecord]:
        ...

    @abstractmethod
    async def exists_by_id(self, patient_id: int) -> bool:
        ...

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        ...

    @abstractmethod
    async def exists_by_email_excluding_id(self, email: str, patient_id: int) -> bool:
        ...

    @abstractmethod
    async def insert(self, candidate: PatientCreate) -> PatientRecord:
        """
        Persist a new record.

        Raises:
            ConstraintViolation: the write broke an integrity constraint
                (e.g. a concurrent insert took the email first).
        """

    @abstractmethod
    async def replace(self, record: PatientRecord) -> PatientRecord:
        """
        Overwrite the mutable fields of record.id and refresh updated_at.

        Raises:
            ConstraintViolation: the new values broke an integrity constraint.
            RecordNotFound: the row was removed in the meantime.
        """

    @abstractmethod
    async def delete_by_id(self, patient_id: int) -> bool:
        """Hard delete. True if a row was removed."""


class SqlAlchemyPatientStore(PatientStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    # ============================================================
    # ✅ READS
    # ============================================================
    async def list_all(self) -> List[PatientRecord]:
        result = await self.db.execute(select(Patient).order_by(Patient.id))
        return [self._to_record(row) for row in result.scalars().all()]

    async def find_by_id(self, patient_id: int) -> Optional[PatientRecord]:
        row = await self.db.get(Patient, patient_id)
        return self._to_record(row) if row is not None else None

    async def exists_by_id(self, patient_id: int) -> bool:
        return bool(await self.db.scalar(select(exists().where(Patient.id == patient_id))))

    async def exists_by_email(self, email: str) -> bool:
        return bool(await self.db.scalar(select(exists().where(Patient.email == email))))

    async def exists_by_email_excluding_id(self, email: str, patient_id: int) -> bool:
        query = select(exists().where(Patient.email == email, Patient.id != patient_id))
        return bool(await self.db.scalar(query))

    # ============================================================
    # ✅ WRITES
    # ============================================================
    async def insert(self, candidate: PatientCreate) -> PatientRecord:
        now = utcnow()
        row = Patient(**candidate.model_dump(include=set(MUTABLE_FIELDS)), created_at=now, updated_at=now)
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise self._constraint_violation(e) from e
        except Exception:
            await self.db.rollback()
            raise
        return self._to_record(row)

    async def replace(self, record: PatientRecord) -> PatientRecord:
        row = await self.db.get(Patient, record.id)
        if row is None:
            raise RecordNotFound(record.id)

        for field in MUTABLE_FIELDS:
            setattr(row, field, getattr(record, field))
        row.updated_at = utcnow()

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise self._constraint_violation(e) from e
        except StaleDataError as e:
            # UPDATE matched no row: deleted between the read and the write
            await self.db.rollback()
            raise RecordNotFound(record.id) from e
        except Exception:
            await self.db.rollback()
            raise
        return self._to_record(row)

    async def delete_by_id(self, patient_id: int) -> bool:
        try:
            result = await self.db.execute(delete(Patient).where(Patient.id == patient_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return result.rowcount > 0

    # ============================================================
    # ✅ HELPERS
    # ============================================================
    @staticmethod
    def _to_record(row: Patient) -> PatientRecord:
        record = PatientRecord.model_validate(row)
        record.created_at = as_utc(record.created_at)
        record.updated_at = as_utc(record.updated_at)
        return record

    @staticmethod
    def _constraint_violation(error: IntegrityError) -> ConstraintViolation:
        message = str(error.orig)
        # Postgres names the constraint, SQLite names the column
        is_email_conflict = EMAIL_CONSTRAINT in message or "patients.email" in message
        logger.error(f"Integrity error from store: {message}")
        return ConstraintViolation(
            EMAIL_CONSTRAINT if is_email_conflict else message,
            is_email_conflict=is_email_conflict,
        )
