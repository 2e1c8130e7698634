"""Clinic and clinic membership tables using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    PrimaryKeyConstraint,
    Table,
    Text,
    Uuid,
    func,
)

from app.models.base import metadata, new_uuid, utcnow

# Root of the tenancy tree: doctors, patients and appointments hang off a clinic
clinics = Table(
    "clinics",
    metadata,
    Column("id", Uuid, primary_key=True, default=new_uuid),
    Column("name", Text, nullable=False),
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

# Many-to-many between users and clinics
users_to_clinics = Table(
    "users_to_clinics",
    metadata,
    Column(
        "user_id",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "clinic_id",
        Uuid,
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
    ),
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
    # A user belongs to a given clinic at most once
    PrimaryKeyConstraint("user_id", "clinic_id", name="users_to_clinics_pkey"),
)

Index("users_to_clinics_clinic_id_idx", users_to_clinics.c.clinic_id)
