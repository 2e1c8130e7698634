"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel


class SessionInfo(BaseModel):
    """Caller identity resolved from an active session."""

    session_id: str
    user_id: str
    expires_at: datetime
    name: str
    email: str
    image: str | None = None

    model_config = {"from_attributes": True}
