"""Session resolution against the auth provider's session store.

Login, token issuance and password hashing belong to the external auth
provider. This module only answers "who is calling?" by looking up the
session token the provider handed to the client.
"""

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Protocol
from urllib.parse import unquote

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import cookie_parser

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.models.auth import sessions
from app.models.users import users
from app.schemas.auth import SessionInfo

logger = structlog.get_logger()


class SessionResolver(Protocol):
    """Resolves the caller's session from request headers."""

    async def __call__(self, headers: Mapping[str, str]) -> SessionInfo | None:
        """Return the active session or None."""
        ...


def extract_session_token(headers: Mapping[str, str], cookie_name: str) -> str | None:
    """
    Pull the session token out of request headers.

    A bearer token in the Authorization header wins over the session
    cookie. Signed cookie values have the form ``<token>.<signature>``;
    only the token part is returned.

    Args:
        headers: Request headers
        cookie_name: Name of the session cookie

    Returns:
        Session token or None if the request carries none
    """
    normalized = {key.lower(): value for key, value in headers.items()}

    authorization = normalized.get("authorization")
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

    cookie_header = normalized.get("cookie")
    if not cookie_header:
        return None

    raw_value = cookie_parser(cookie_header).get(cookie_name)
    if not raw_value:
        return None

    token, _, _signature = unquote(raw_value).partition(".")
    return token or None


class DatabaseSessionResolver:
    """Looks up unexpired sessions in the shared ``sessions`` table."""

    def __init__(
        self,
        db: AsyncSession,
        cookie_name: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize resolver with a database session."""
        self.db = db
        self.cookie_name = cookie_name or settings.session_cookie_name
        self.clock = clock or (lambda: datetime.now(UTC))

    async def __call__(self, headers: Mapping[str, str]) -> SessionInfo | None:
        """
        Resolve the session carried by the request.

        Args:
            headers: Request headers

        Returns:
            Session info, or None when the token is missing, unknown or expired
        """
        token = extract_session_token(headers, self.cookie_name)
        if token is None:
            return None

        query = (
            select(
                sessions.c.id.label("session_id"),
                sessions.c.user_id,
                sessions.c.expires_at,
                users.c.name,
                users.c.email,
                users.c.image,
            )
            .select_from(sessions.join(users, users.c.id == sessions.c.user_id))
            .where(sessions.c.token == token, sessions.c.expires_at > self.clock())
        )

        result = await self.db.execute(query)
        row = result.mappings().first()

        return SessionInfo.model_validate(dict(row)) if row else None


async def require_session(
    resolver: SessionResolver,
    headers: Mapping[str, str],
) -> SessionInfo:
    """
    Resolve the caller's session or reject the request.

    Args:
        resolver: Session resolver
        headers: Request headers

    Returns:
        The caller's session

    Raises:
        UnauthorizedException: If no valid session is present
    """
    session = await resolver(headers)

    if session is None:
        logger.info("session_rejected")
        raise UnauthorizedException("Authentication required")

    return session
