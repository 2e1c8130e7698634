"""Appointment endpoints, scoped to a clinic."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from app.dependencies import CurrentSession, DatabaseSession
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentUpdate,
)
from app.services.appointment_service import AppointmentService

router = APIRouter()


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new appointment",
)
async def create_appointment(
    clinic_id: UUID,
    data: AppointmentCreate,
    session: CurrentSession,
    db: DatabaseSession,
) -> AppointmentResponse:
    """
    Book an appointment at the clinic.

    Args:
        clinic_id: Clinic ID
        data: Doctor, patient and appointment moment
        session: Caller's session
        db: Database session

    Returns:
        Created appointment
    """
    service = AppointmentService(db)
    return await service.create_appointment(clinic_id, data)


@router.get(
    "/",
    response_model=list[AppointmentResponse],
    summary="List appointments",
)
async def list_appointments(
    clinic_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
    doctor_id: UUID | None = Query(None),
    patient_id: UUID | None = Query(None),
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
) -> list[AppointmentResponse]:
    """List the clinic's appointments in chronological order."""
    filters = AppointmentFilters(
        doctor_id=doctor_id,
        patient_id=patient_id,
        date_from=date_from,
        date_to=date_to,
    )

    service = AppointmentService(db)
    return await service.list_appointments(clinic_id, filters)


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Get appointment details",
)
async def get_appointment(
    clinic_id: UUID,
    appointment_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
) -> AppointmentResponse:
    """Get a single appointment."""
    service = AppointmentService(db)
    return await service.get_appointment(clinic_id, appointment_id)


@router.patch(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Reschedule appointment",
)
async def update_appointment(
    clinic_id: UUID,
    appointment_id: UUID,
    data: AppointmentUpdate,
    session: CurrentSession,
    db: DatabaseSession,
) -> AppointmentResponse:
    """Change an appointment's moment, doctor or patient."""
    service = AppointmentService(db)
    return await service.update_appointment(clinic_id, appointment_id, data)


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
)
async def delete_appointment(
    clinic_id: UUID,
    appointment_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
) -> Response:
    """Delete an appointment."""
    service = AppointmentService(db)
    await service.delete_appointment(clinic_id, appointment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
