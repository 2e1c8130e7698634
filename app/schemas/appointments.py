"""Appointment schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment."""

    doctor_id: UUID
    patient_id: UUID
    appointment_date: datetime


class AppointmentUpdate(BaseModel):
    """Schema for changing an existing appointment."""

    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    appointment_date: datetime | None = None


class AppointmentFilters(BaseModel):
    """Filters for listing a clinic's appointments."""

    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    date_from: datetime | None = Field(None, description="Inclusive lower bound")
    date_to: datetime | None = Field(None, description="Exclusive upper bound")


class AppointmentResponse(BaseModel):
    """Appointment response schema."""

    id: UUID
    clinic_id: UUID
    doctor_id: UUID
    patient_id: UUID
    appointment_date: datetime
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
