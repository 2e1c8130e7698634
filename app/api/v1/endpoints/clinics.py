"""Clinic management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import RedirectResponse

from app.config import settings
from app.core.exceptions import NotFoundException
from app.dependencies import CurrentSession, DatabaseSession
from app.schemas.clinics import (
    ClinicCreate,
    ClinicMemberCreate,
    ClinicMembershipResponse,
    ClinicResponse,
    ClinicUpdate,
)
from app.services.clinic_service import ClinicService, get_clinic_or_404

router = APIRouter()


def get_clinic_service() -> ClinicService:
    """Get clinic service instance."""
    return ClinicService()


@router.post(
    "/",
    status_code=status.HTTP_303_SEE_OTHER,
    response_class=RedirectResponse,
    summary="Create clinic",
)
async def create_clinic(
    clinic_data: ClinicCreate,
    session: CurrentSession,
    db: DatabaseSession,
    clinic_service: ClinicService = Depends(get_clinic_service),
) -> RedirectResponse:
    """
    Create a clinic owned by the calling user.

    The session is resolved before anything is written; callers without a
    session get 401 and no rows are created. On success the caller is sent
    to the dashboard.

    - **name**: Clinic name (required)
    """
    await clinic_service.create_clinic(db, clinic_data, owner_id=session.user_id)
    return RedirectResponse(url=settings.dashboard_path, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_model=list[ClinicResponse], summary="List my clinics")
async def list_my_clinics(
    session: CurrentSession,
    db: DatabaseSession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """List the clinics the calling user is a member of."""
    clinics = await clinic_service.get_clinics_for_user(db, session.user_id)
    return [ClinicResponse.model_validate(c) for c in clinics]


@router.get("/{clinic_id}", response_model=ClinicResponse)
async def get_clinic(
    clinic_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
):
    """Get clinic details by ID."""
    return await get_clinic_or_404(db, clinic_id)


@router.patch("/{clinic_id}", response_model=ClinicResponse)
async def update_clinic(
    clinic_id: UUID,
    clinic_data: ClinicUpdate,
    session: CurrentSession,
    db: DatabaseSession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """Rename a clinic."""
    clinic = await clinic_service.update_clinic(db, clinic_id, clinic_data)

    if not clinic:
        raise NotFoundException("Clinic not found")

    return clinic


@router.delete("/{clinic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_clinic(
    clinic_id: UUID,
    session: CurrentSession,
    db: DatabaseSession,
    clinic_service: ClinicService = Depends(get_clinic_service),
) -> Response:
    """
    Delete a clinic.

    Its doctors, patients, appointments and memberships are deleted with it.
    """
    deleted = await clinic_service.delete_clinic(db, clinic_id)

    if not deleted:
        raise NotFoundException("Clinic not found")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{clinic_id}/members",
    response_model=ClinicMembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_clinic_member(
    clinic_id: UUID,
    member_data: ClinicMemberCreate,
    session: CurrentSession,
    db: DatabaseSession,
    clinic_service: ClinicService = Depends(get_clinic_service),
):
    """
    Add an existing user to a clinic.

    - **user_id**: ID of the user to add
    """
    return await clinic_service.add_member(db, clinic_id, member_data.user_id)
