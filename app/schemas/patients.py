"""Patient schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.patients import PatientSex


def check_phone_number(v: str) -> str:
    """Validate phone number format."""
    # Remove common separators
    cleaned = v.replace("-", "").replace(" ", "").replace("(", "").replace(")", "").replace("+", "")
    if not cleaned.isdigit():
        raise ValueError("Phone number must contain only digits and separators")
    if len(cleaned) < 7:
        raise ValueError("Phone number must have at least 7 digits")
    return v


class PatientBase(BaseModel):
    """Base patient schema."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone_number: str = Field(..., min_length=7, max_length=20)
    sex: PatientSex

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate phone number format."""
        return check_phone_number(v)


class PatientCreate(PatientBase):
    """Schema for registering a patient at a clinic."""


class PatientUpdate(BaseModel):
    """
    Schema for updating a patient.

    Fields may be omitted but not cleared; every patient column is required.
    """

    name: str | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone_number: str | None = Field(None, min_length=7, max_length=20)
    sex: PatientSex | None = None

    @field_validator("name", "email", "phone_number", "sex")
    @classmethod
    def reject_null(cls, v):
        """Explicit nulls are rejected."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        """Validate phone number format."""
        return check_phone_number(v) if v is not None else v


class PatientResponse(BaseModel):
    """Patient response schema."""

    id: UUID
    clinic_id: UUID
    name: str
    email: str
    phone_number: str
    sex: PatientSex
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
