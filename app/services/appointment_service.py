"""Appointment service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.models.appointments import appointments
from app.models.doctors import doctors
from app.models.patients import patients
from app.schemas.appointments import (
    AppointmentCreate,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentUpdate,
)
from app.services.clinic_service import get_clinic_or_404

logger = structlog.get_logger()


class AppointmentService:
    """Service for managing appointments."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def _check_same_clinic(
        self, clinic_id: UUID, doctor_id: UUID, patient_id: UUID
    ) -> None:
        """
        Ensure the doctor and patient exist and belong to ``clinic_id``.

        The schema only guarantees that each reference points at some
        existing row; it does not tie them to the appointment's clinic.

        Raises:
            NotFoundException: If the doctor or patient does not exist
            ValidationException: If either belongs to another clinic
        """
        doctor_clinic = await self.db.scalar(
            select(doctors.c.clinic_id).where(doctors.c.id == doctor_id)
        )
        if doctor_clinic is None:
            raise NotFoundException("Doctor not found")

        patient_clinic = await self.db.scalar(
            select(patients.c.clinic_id).where(patients.c.id == patient_id)
        )
        if patient_clinic is None:
            raise NotFoundException("Patient not found")

        if doctor_clinic != clinic_id:
            raise ValidationException("Doctor does not belong to this clinic")
        if patient_clinic != clinic_id:
            raise ValidationException("Patient does not belong to this clinic")

    async def create_appointment(
        self,
        clinic_id: UUID,
        data: AppointmentCreate,
    ) -> AppointmentResponse:
        """
        Book an appointment at a clinic.

        Args:
            clinic_id: Clinic ID
            data: Appointment creation data

        Returns:
            Created appointment
        """
        await get_clinic_or_404(self.db, clinic_id)
        await self._check_same_clinic(clinic_id, data.doctor_id, data.patient_id)

        values = {
            "clinic_id": clinic_id,
            "doctor_id": data.doctor_id,
            "patient_id": data.patient_id,
            "appointment_date": data.appointment_date,
        }

        stmt = appointments.insert().values(**values).returning(appointments)
        result = await self.db.execute(stmt)
        await self.db.commit()

        row = result.mappings().one()
        logger.info(
            "appointment_created",
            appointment_id=str(row["id"]),
            clinic_id=str(clinic_id),
            doctor_id=str(data.doctor_id),
        )

        return AppointmentResponse.model_validate(dict(row))

    async def get_appointment(self, clinic_id: UUID, appointment_id: UUID) -> AppointmentResponse:
        """
        Get appointment by ID.

        Raises:
            NotFoundException: If appointment not found at this clinic
        """
        stmt = select(appointments).where(
            and_(
                appointments.c.id == appointment_id,
                appointments.c.clinic_id == clinic_id,
            )
        )

        result = await self.db.execute(stmt)
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Appointment not found")

        return AppointmentResponse.model_validate(dict(row))

    async def list_appointments(
        self,
        clinic_id: UUID,
        filters: AppointmentFilters,
    ) -> list[AppointmentResponse]:
        """
        List a clinic's appointments in chronological order.

        Args:
            clinic_id: Clinic ID
            filters: Optional doctor, patient and date range filters

        Returns:
            Matching appointments
        """
        conditions: list = [appointments.c.clinic_id == clinic_id]

        if filters.doctor_id:
            conditions.append(appointments.c.doctor_id == filters.doctor_id)
        if filters.patient_id:
            conditions.append(appointments.c.patient_id == filters.patient_id)
        if filters.date_from:
            conditions.append(appointments.c.appointment_date >= filters.date_from)
        if filters.date_to:
            conditions.append(appointments.c.appointment_date < filters.date_to)

        stmt = (
            select(appointments)
            .where(and_(*conditions))
            .order_by(appointments.c.appointment_date)
        )

        result = await self.db.execute(stmt)
        return [AppointmentResponse.model_validate(dict(row)) for row in result.mappings().all()]

    async def update_appointment(
        self,
        clinic_id: UUID,
        appointment_id: UUID,
        data: AppointmentUpdate,
    ) -> AppointmentResponse:
        """Reschedule an appointment or move it to another doctor/patient."""
        existing = await self.get_appointment(clinic_id, appointment_id)

        update_values: dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_values:
            return existing

        await self._check_same_clinic(
            clinic_id,
            update_values.get("doctor_id", existing.doctor_id),
            update_values.get("patient_id", existing.patient_id),
        )

        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(**update_values)
            .returning(appointments)
        )

        result = await self.db.execute(stmt)
        await self.db.commit()

        return AppointmentResponse.model_validate(dict(result.mappings().one()))

    async def delete_appointment(self, clinic_id: UUID, appointment_id: UUID) -> None:
        """
        Delete an appointment.

        Raises:
            NotFoundException: If appointment not found at this clinic
        """
        stmt = (
            delete(appointments)
            .where(
                appointments.c.id == appointment_id,
                appointments.c.clinic_id == clinic_id,
            )
            .returning(appointments.c.id)
        )

        result = await self.db.execute(stmt)
        if result.first() is None:
            await self.db.rollback()
            raise NotFoundException("Appointment not found")

        await self.db.commit()
