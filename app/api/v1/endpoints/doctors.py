"""Doctor endpoints, scoped to a clinic."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.dependencies import CurrentSession, DatabaseSession
from app.schemas.doctors import DoctorCreate, DoctorResponse, DoctorUpdate
from app.services.doctor_service import DoctorService

router = APIRouter()


def get_doctor_service() -> DoctorService:
    """Get doctor service instance."""
    return DoctorService()


@router.post("/", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    clinic_id: UUID,
    doctor_data: DoctorCreate,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """
    Add a doctor to a clinic.

    - **available_from_week_day / available_to_week_day**: 0 (Sunday) to 6 (Saturday)
    - **available_from_time / available_to_time**: daily window, start before end
    - **appointment_price_in_cents**: price in currency minor units
    """
    return await doctor_service.create_doctor(db, clinic_id, doctor_data)


@router.get("/", response_model=list[DoctorResponse])
async def list_doctors(
    clinic_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """List the clinic's doctors."""
    return await doctor_service.get_doctors(db, clinic_id)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(
    clinic_id: UUID,
    doctor_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Get doctor details."""
    doctor = await doctor_service.get_doctor(db, clinic_id, doctor_id)

    if not doctor:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    return doctor


@router.patch("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    clinic_id: UUID,
    doctor_id: UUID,
    doctor_data: DoctorUpdate,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
):
    """Update a doctor's profile, availability or price."""
    return await doctor_service.update_doctor(db, clinic_id, doctor_id, doctor_data)


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    clinic_id: UUID,
    doctor_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> Response:
    """Remove a doctor and their appointments."""
    deleted = await doctor_service.delete_doctor(db, clinic_id, doctor_id)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
