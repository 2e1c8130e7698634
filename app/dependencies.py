"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import DatabaseSessionResolver, SessionResolver, require_session
from app.database import get_db
from app.schemas.auth import SessionInfo


async def get_session_resolver(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionResolver:
    """
    Provide the session resolver used to authenticate callers.

    Override this dependency to plug in a different auth collaborator.

    Args:
        db: Database session

    Returns:
        Session resolver
    """
    return DatabaseSessionResolver(db)


async def get_current_session(
    request: Request,
    resolver: Annotated[SessionResolver, Depends(get_session_resolver)],
) -> SessionInfo:
    """
    Resolve the current session from request headers.

    Args:
        request: Incoming request
        resolver: Session resolver

    Returns:
        The caller's session

    Raises:
        UnauthorizedException: If no valid session is present
    """
    return await require_session(resolver, request.headers)


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CurrentSession = Annotated[SessionInfo, Depends(get_current_session)]
