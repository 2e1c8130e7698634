"""User schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    """User schema for API responses."""

    id: str
    name: str
    email: str
    email_verified: bool
    image: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
