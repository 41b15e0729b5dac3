# app/system_services/system_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.patient_model.patient_schemas import ErrorResponse, PatientCreate, PatientRecord, PatientUpdate
from app.system_services.patient_service import PatientService
from app.system_services.patient_store import SqlAlchemyPatientStore

logger = logging.getLogger(__name__)

router = APIRouter()

# 64-bit integer ceiling of the id column
MAX_PATIENT_ID = 2**63 - 1


def get_patient_service(db: AsyncSession = Depends(get_db)) -> PatientService:
    """One service per request, over the request's session."""
    return PatientService(SqlAlchemyPatientStore(db))


# ============================================================
# ✅ LIST PATIENTS
# ============================================================
@router.get(
    "",
    response_model=List[PatientRecord],
    summary="Get all patients",
    description="Retrieve list of all patients",
    responses={200: {"description": "Successfully retrieved patients"}},
)
async def get_all_patients(service: PatientService = Depends(get_patient_service)):
    logger.info("Get all patients")
    return await service.list_patients()


# ============================================================
# ✅ GET PATIENT
# ============================================================
@router.get(
    "/{id}",
    response_model=PatientRecord,
    summary="Get patient by Id",
    description="Retrieve a specific patient by their Id",
    responses={404: {"model": ErrorResponse, "description": "Patient not found"}},
)
async def get_patient_by_id(
    id: int = Path(..., ge=1, le=MAX_PATIENT_ID, description="Id of the patient to be retrieved", examples=[1]),
    service: PatientService = Depends(get_patient_service),
):
    logger.info(f"Get a patient by Id: {id}")
    return await service.get_patient(id)


# ============================================================
# ✅ CREATE PATIENT
# ============================================================
@router.post(
    "",
    response_model=PatientRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new patient",
    description="Create a new patient record",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        409: {"model": ErrorResponse, "description": "Patient with email already exists"},
    },
)
async def create_patient(patient: PatientCreate, service: PatientService = Depends(get_patient_service)):
    logger.info(f"Creating new patient with email: {patient.email}")
    return await service.create_patient(patient)


# ============================================================
# ✅ UPDATE PATIENT
# ============================================================
@router.put(
    "/{id}",
    response_model=PatientRecord,
    summary="Update an existing patient",
    description="Update a patient by Id",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Patient not found"},
        409: {"model": ErrorResponse, "description": "Email conflict"},
    },
)
async def update_patient(
    patient: PatientUpdate,
    id: int = Path(..., ge=1, le=MAX_PATIENT_ID, description="Id of the patient to be updated", examples=[1]),
    service: PatientService = Depends(get_patient_service),
):
    logger.info(f"Updating patient - {id}")
    return await service.update_patient(id, patient)


# ============================================================
# ✅ DELETE PATIENT
# ============================================================
@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a patient",
    description="Delete a patient record by Id",
    responses={404: {"model": ErrorResponse, "description": "Patient not found"}},
)
async def delete_patient(
    id: int = Path(..., ge=1, le=MAX_PATIENT_ID, description="Id of the patient to be deleted", examples=[1]),
    service: PatientService = Depends(get_patient_service),
):
    logger.info(f"Deleting patient - {id}")
    await service.delete_patient(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
