"""Doctor model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Table,
    Text,
    Time,
    Uuid,
    func,
)

from app.models.base import metadata, new_uuid, utcnow

doctors = Table(
    "doctors",
    metadata,
    Column("id", Uuid, primary_key=True, default=new_uuid),
    Column(
        "clinic_id",
        Uuid,
        ForeignKey("clinics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # Profile
    Column("name", Text, nullable=False),
    Column("avatar_image_url", Text),
    Column("specialty", Text, nullable=False),
    # Weekly availability: week days are 0 (Sunday) through 6 (Saturday)
    Column("available_from_week_day", Integer, nullable=False),
    Column("available_to_week_day", Integer, nullable=False),
    Column("available_from_time", Time, nullable=False),
    Column("available_to_time", Time, nullable=False),
    # Price in currency minor units
    Column("appointment_price_in_cents", Integer, nullable=False),
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
