"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Table,
    Uuid,
    func,
)

from app.models.base import metadata, new_uuid, utcnow

# Appointments table
appointments = Table(
    "appointments",
    metadata,
    Column("id", Uuid, primary_key=True, default=new_uuid),
    # Ownership / references
    # doctor and patient must belong to clinic_id; checked in AppointmentService
    Column(
        "clinic_id",
        Uuid,
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "doctor_id",
        Uuid,
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "patient_id",
        Uuid,
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("appointment_date", DateTime(timezone=True), nullable=False),
    # Audit fields
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    ),
    Column(
        "updated_at",
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    ),
)
