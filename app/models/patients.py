"""Patient model definition using SQLAlchemy Core."""

from enum import Enum

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Table,
    Text,
    Uuid,
    func,
)
from sqlalchemy import Enum as SAEnum

from app.models.base import metadata, new_uuid, utcnow


class PatientSex(str, Enum):
    """Patient sex enumeration."""

    MALE = "male"
    FEMALE = "female"


patients = Table(
    "patients",
    metadata,
    Column("id", Uuid, primary_key=True, default=new_uuid),
    Column(
        "clinic_id",
        Uuid,
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # Contact
    Column("name", Text, nullable=False),
    Column("email", Text, nullable=False),
    Column("phone_number", Text, nullable=False),
    # Native enum on PostgreSQL, CHECK constraint elsewhere
    Column(
        "sex",
        SAEnum(
            PatientSex,
            name="patient_sex",
            values_callable=lambda members: [member.value for member in members],
            create_constraint=True,
            validate_strings=False,
        ),
        nullable=False,
    ),
    # Metadata
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
