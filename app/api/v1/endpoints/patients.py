"""Patient endpoints, scoped to a clinic."""

from uuid import UUID

from fastapi import APIRouter, Response, status

from app.dependencies import CurrentSession, DatabaseSession
from app.schemas.patients import PatientCreate, PatientResponse, PatientUpdate
from app.services.patient_service import PatientService

router = APIRouter()


@router.post("/", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    clinic_id: UUID,
    data: PatientCreate,
    session: CurrentSession,
    db: DatabaseSession,
) -> PatientResponse:
    """Register a patient at the clinic. **sex** must be `male` or `female`."""
    return await PatientService(db).create_patient(clinic_id, data)


@router.get("/", response_model=list[PatientResponse])
async def list_patients(
    clinic_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
) -> list[PatientResponse]:
    """List the clinic's patients."""
    return await PatientService(db).list_patients(clinic_id)


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    clinic_id: UUID,
    patient_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
) -> PatientResponse:
    """Get patient details."""
    return await PatientService(db).get_patient(clinic_id, patient_id)


@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    clinic_id: UUID,
    patient_id: UUID,
    data: PatientUpdate,
    session: CurrentSession,
    db: DatabaseSession,
) -> PatientResponse:
    """Update a patient's contact details."""
    return await PatientService(db).update_patient(clinic_id, patient_id, data)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    clinic_id: UUID,
    patient_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
) -> Response:
    """Remove a patient and their appointments."""
    await PatientService(db).delete_patient(clinic_id, patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
