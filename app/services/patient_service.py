"""Patient service for business logic."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.models.patients import patients
from app.schemas.patients import PatientCreate, PatientResponse, PatientUpdate
from app.services.clinic_service import get_clinic_or_404

logger = structlog.get_logger()


class PatientService:
    """Service for managing a clinic's patients."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_patient(self, clinic_id: UUID, data: PatientCreate) -> PatientResponse:
        """
        Register a patient at a clinic.

        Args:
            clinic_id: Clinic the patient belongs to
            data: Patient creation data

        Returns:
            Created patient

        Raises:
            NotFoundException: If the clinic does not exist
        """
        await get_clinic_or_404(self.db, clinic_id)

        values = {
            "clinic_id": clinic_id,
            "name": data.name,
            "email": data.email,
            "phone_number": data.phone_number,
            "sex": data.sex,
        }

        stmt = patients.insert().values(**values).returning(patients)
        result = await self.db.execute(stmt)
        await self.db.commit()

        row = result.mappings().one()
        logger.info("patient_created", patient_id=str(row["id"]), clinic_id=str(clinic_id))

        return PatientResponse.model_validate(dict(row))

    async def list_patients(self, clinic_id: UUID) -> list[PatientResponse]:
        """List a clinic's patients ordered by name."""
        stmt = select(patients).where(patients.c.clinic_id == clinic_id).order_by(patients.c.name)

        result = await self.db.execute(stmt)
        return [PatientResponse.model_validate(dict(row)) for row in result.mappings().all()]

    async def get_patient(self, clinic_id: UUID, patient_id: UUID) -> PatientResponse:
        """
        Get a patient of a clinic.

        Raises:
            NotFoundException: If the patient does not exist at this clinic
        """
        stmt = select(patients).where(
            patients.c.id == patient_id,
            patients.c.clinic_id == clinic_id,
        )

        result = await self.db.execute(stmt)
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Patient not found")

        return PatientResponse.model_validate(dict(row))

    async def update_patient(
        self, clinic_id: UUID, patient_id: UUID, data: PatientUpdate
    ) -> PatientResponse:
        """Update a patient's contact details."""
        existing = await self.get_patient(clinic_id, patient_id)

        update_values: dict[str, Any] = data.model_dump(exclude_unset=True)
        if not update_values:
            return existing

        stmt = (
            update(patients)
            .where(patients.c.id == patient_id)
            .values(**update_values)
            .returning(patients)
        )

        result = await self.db.execute(stmt)
        await self.db.commit()

        return PatientResponse.model_validate(dict(result.mappings().one()))

    async def delete_patient(self, clinic_id: UUID, patient_id: UUID) -> None:
        """
        Delete a patient; their appointments are removed by cascade.

        Raises:
            NotFoundException: If the patient does not exist at this clinic
        """
        stmt = (
            delete(patients)
            .where(patients.c.id == patient_id, patients.c.clinic_id == clinic_id)
            .returning(patients.c.id)
        )

        result = await self.db.execute(stmt)
        if result.first() is None:
            await self.db.rollback()
            raise NotFoundException("Patient not found")

        await self.db.commit()
