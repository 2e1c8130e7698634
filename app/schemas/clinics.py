"""Clinic schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ClinicBase(BaseModel):
    """Base schema for clinic."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Reject blank names and trim surrounding whitespace."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Clinic name must not be blank")
        return stripped


class ClinicCreate(ClinicBase):
    """Schema for creating a clinic."""


class ClinicUpdate(ClinicBase):
    """Schema for renaming a clinic."""


class ClinicResponse(BaseModel):
    """Clinic response schema."""

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ClinicMemberCreate(BaseModel):
    """Schema for adding a user to a clinic."""

    user_id: str = Field(..., min_length=1)


class ClinicMembershipResponse(BaseModel):
    """Link between a user and a clinic."""

    user_id: str
    clinic_id: UUID
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
