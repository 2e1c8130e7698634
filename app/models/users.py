"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Table,
    Text,
    false,
    func,
)

from app.models.base import metadata, utcnow

# Identity records written by the external auth provider
users = Table(
    "users",
    metadata,
    # Provider-issued identifier
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("email_verified", Boolean, nullable=False, default=False, server_default=false()),
    Column("image", Text),
    # Audit
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
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    ),
)
