"""User endpoints."""

from fastapi import APIRouter, HTTPException, status

from app.dependencies import CurrentSession, DatabaseSession
from app.schemas.users import UserResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(session: CurrentSession, db: DatabaseSession):
    """Get the calling user's profile."""
    user = await UserService.get_user_by_id(db, session.user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse.model_validate(user)
