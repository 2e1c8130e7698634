"""Clinic service for business logic."""

from uuid import UUID

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException
from app.models.clinics import clinics, users_to_clinics
from app.models.users import users
from app.schemas.clinics import ClinicCreate, ClinicUpdate

logger = structlog.get_logger()


async def get_clinic_or_404(db: AsyncSession, clinic_id: UUID) -> dict:
    """
    Load a clinic or fail.

    Args:
        db: Database session
        clinic_id: Clinic ID

    Returns:
        Clinic row as dict

    Raises:
        NotFoundException: If the clinic does not exist
    """
    clinic = await ClinicService().get_clinic_by_id(db, clinic_id)
    if not clinic:
        raise NotFoundException("Clinic not found")
    return clinic


class ClinicService:
    """Service for clinic operations."""

    async def create_clinic(
        self, db: AsyncSession, clinic_data: ClinicCreate, owner_id: str
    ) -> dict:
        """
        Create a clinic and register ``owner_id`` as its first member.

        The clinic row and the membership row are committed together; if
        either insert fails nothing is kept and the database error is
        re-raised unchanged.

        Args:
            db: Database session
            clinic_data: Clinic payload
            owner_id: ID of the user creating the clinic

        Returns:
            Created clinic
        """
        try:
            result = await db.execute(
                clinics.insert().values(name=clinic_data.name).returning(clinics)
            )
            clinic = dict(result.mappings().one())

            await db.execute(
                users_to_clinics.insert().values(user_id=owner_id, clinic_id=clinic["id"])
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("clinic_created", clinic_id=str(clinic["id"]), user_id=owner_id)
        return clinic

    async def get_clinic_by_id(self, db: AsyncSession, clinic_id: UUID) -> dict | None:
        """Get clinic by ID."""
        query = select(clinics).where(clinics.c.id == clinic_id)

        result = await db.execute(query)
        clinic = result.mappings().first()

        return dict(clinic) if clinic else None

    async def get_clinics_for_user(self, db: AsyncSession, user_id: str) -> list[dict]:
        """Get the clinics a user is a member of, ordered by name."""
        query = (
            select(clinics)
            .select_from(
                clinics.join(users_to_clinics, users_to_clinics.c.clinic_id == clinics.c.id)
            )
            .where(users_to_clinics.c.user_id == user_id)
            .order_by(clinics.c.name)
        )

        result = await db.execute(query)
        return [dict(c) for c in result.mappings().all()]

    async def update_clinic(
        self, db: AsyncSession, clinic_id: UUID, clinic_data: ClinicUpdate
    ) -> dict | None:
        """Rename a clinic."""
        query = (
            update(clinics)
            .where(clinics.c.id == clinic_id)
            .values(name=clinic_data.name)
            .returning(clinics)
        )

        result = await db.execute(query)
        updated_clinic = result.mappings().first()

        await db.commit()

        return dict(updated_clinic) if updated_clinic else None

    async def delete_clinic(self, db: AsyncSession, clinic_id: UUID) -> bool:
        """
        Delete a clinic.

        Doctors, patients, appointments and memberships of the clinic are
        removed by the database through ON DELETE CASCADE.
        """
        result = await db.execute(
            delete(clinics).where(clinics.c.id == clinic_id).returning(clinics.c.id)
        )
        deleted = result.first() is not None

        await db.commit()

        if deleted:
            logger.info("clinic_deleted", clinic_id=str(clinic_id))
        return deleted

    async def add_member(self, db: AsyncSession, clinic_id: UUID, user_id: str) -> dict:
        """
        Add an existing user to a clinic.

        Args:
            db: Database session
            clinic_id: Clinic ID
            user_id: ID of the user to add

        Returns:
            Created membership

        Raises:
            NotFoundException: If the clinic or the user does not exist
            ConflictException: If the user already belongs to the clinic
        """
        await get_clinic_or_404(db, clinic_id)

        user_exists = await db.scalar(select(users.c.id).where(users.c.id == user_id))
        if user_exists is None:
            raise NotFoundException("User not found")

        already_member = await db.scalar(
            select(users_to_clinics.c.user_id).where(
                users_to_clinics.c.user_id == user_id,
                users_to_clinics.c.clinic_id == clinic_id,
            )
        )
        if already_member is not None:
            raise ConflictException("User is already a member of this clinic")

        result = await db.execute(
            users_to_clinics.insert()
            .values(user_id=user_id, clinic_id=clinic_id)
            .returning(users_to_clinics)
        )
        membership = dict(result.mappings().one())

        await db.commit()

        logger.info("clinic_member_added", clinic_id=str(clinic_id), user_id=user_id)
        return membership
