"""Doctor service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.models.doctors import doctors
from app.schemas.doctors import DoctorCreate, DoctorUpdate
from app.services.clinic_service import get_clinic_or_404

logger = structlog.get_logger()


class DoctorService:
    """Service for managing a clinic's doctors."""

    async def create_doctor(
        self, db: AsyncSession, clinic_id: UUID, doctor_data: DoctorCreate
    ) -> dict:
        """
        Register a doctor at a clinic.

        Args:
            db: Database session
            clinic_id: Clinic the doctor works at
            doctor_data: Doctor payload

        Returns:
            Created doctor

        Raises:
            NotFoundException: If the clinic does not exist
        """
        await get_clinic_or_404(db, clinic_id)

        query = (
            doctors.insert()
            .values(clinic_id=clinic_id, **doctor_data.model_dump())
            .returning(doctors)
        )

        result = await db.execute(query)
        doctor = dict(result.mappings().one())

        await db.commit()

        logger.info("doctor_created", doctor_id=str(doctor["id"]), clinic_id=str(clinic_id))
        return doctor

    async def get_doctors(self, db: AsyncSession, clinic_id: UUID) -> list[dict]:
        """List a clinic's doctors ordered by name."""
        query = select(doctors).where(doctors.c.clinic_id == clinic_id).order_by(doctors.c.name)

        result = await db.execute(query)
        return [dict(d) for d in result.mappings().all()]

    async def get_doctor(self, db: AsyncSession, clinic_id: UUID, doctor_id: UUID) -> dict | None:
        """Get a doctor of a clinic by ID."""
        query = select(doctors).where(
            doctors.c.id == doctor_id,
            doctors.c.clinic_id == clinic_id,
        )

        result = await db.execute(query)
        doctor = result.mappings().first()

        return dict(doctor) if doctor else None

    async def update_doctor(
        self,
        db: AsyncSession,
        clinic_id: UUID,
        doctor_id: UUID,
        doctor_data: DoctorUpdate,
    ) -> dict:
        """
        Update a doctor's profile or availability.

        Raises:
            NotFoundException: If the doctor does not exist at this clinic
            ValidationException: If the resulting time window is empty
        """
        existing = await self.get_doctor(db, clinic_id, doctor_id)
        if not existing:
            raise NotFoundException("Doctor not found")

        update_values: dict[str, Any] = doctor_data.model_dump(exclude_unset=True)
        if not update_values:
            return existing

        from_time = update_values.get("available_from_time", existing["available_from_time"])
        to_time = update_values.get("available_to_time", existing["available_to_time"])
        if from_time >= to_time:
            raise ValidationException("available_from_time must be before available_to_time")

        query = (
            update(doctors)
            .where(doctors.c.id == doctor_id)
            .values(**update_values)
            .returning(doctors)
        )

        result = await db.execute(query)
        doctor = dict(result.mappings().one())

        await db.commit()

        return doctor

    async def delete_doctor(self, db: AsyncSession, clinic_id: UUID, doctor_id: UUID) -> bool:
        """Delete a doctor; their appointments are removed by cascade."""
        query = (
            delete(doctors)
            .where(doctors.c.id == doctor_id, doctors.c.clinic_id == clinic_id)
            .returning(doctors.c.id)
        )

        result = await db.execute(query)
        deleted = result.first() is not None

        await db.commit()

        return deleted
