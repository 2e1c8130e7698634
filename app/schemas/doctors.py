"""Doctor schemas for request/response validation."""

from datetime import datetime, time
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


class DoctorBase(BaseModel):
    """Base doctor schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200)
    avatar_image_url: str | None = None
    specialty: str = Field(..., min_length=1, max_length=200)
    # 0 = Sunday .. 6 = Saturday
    available_from_week_day: int = Field(..., ge=0, le=6)
    available_to_week_day: int = Field(..., ge=0, le=6)
    available_from_time: time
    available_to_time: time
    appointment_price_in_cents: int = Field(..., ge=0)


class DoctorCreate(DoctorBase):
    """Schema for creating a doctor."""

    @model_validator(mode="after")
    def validate_time_range(self) -> "DoctorCreate":
        """Availability must start before it ends."""
        if self.available_from_time >= self.available_to_time:
            raise ValueError("available_from_time must be before available_to_time")
        return self


class DoctorUpdate(BaseModel):
    """Schema for updating a doctor."""

    name: str | None = Field(None, min_length=1, max_length=200)
    avatar_image_url: str | None = None
    specialty: str | None = Field(None, min_length=1, max_length=200)
    available_from_week_day: int | None = Field(None, ge=0, le=6)
    available_to_week_day: int | None = Field(None, ge=0, le=6)
    available_from_time: time | None = None
    available_to_time: time | None = None
    appointment_price_in_cents: int | None = Field(None, ge=0)

    @field_validator(
        "name",
        "specialty",
        "available_from_week_day",
        "available_to_week_day",
        "available_from_time",
        "available_to_time",
        "appointment_price_in_cents",
    )
    @classmethod
    def reject_null(cls, v):
        """Only avatar_image_url may be cleared."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class DoctorResponse(DoctorBase):
    """Doctor response schema."""

    id: UUID
    clinic_id: UUID
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
