"""User service for business logic."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.users import users


class UserService:
    """Read access to users; the auth provider owns their lifecycle."""

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: str) -> dict | None:
        """Get user by ID."""
        query = select(users).where(users.c.id == user_id)
        result = await db.execute(query)
        user = result.mappings().first()
        return dict(user) if user else None
