"""Auth provider tables: sessions, linked accounts and verifications."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Table,
    Text,
    func,
)

from app.models.base import metadata, utcnow

sessions = Table(
    "sessions",
    metadata,
    Column("id", Text, primary_key=True),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    Column("token", Text, nullable=False, unique=True),
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
    Column("ip_address", Text),
    Column("user_agent", Text),
    Column(
        "user_id",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
)

Index("sessions_user_id_idx", sessions.c.user_id)

accounts = Table(
    "accounts",
    metadata,
    Column("id", Text, primary_key=True),
    # Identifier of the account at the provider (e.g. Google subject)
    Column("account_id", Text, nullable=False),
    Column("provider_id", Text, nullable=False),
    Column(
        "user_id",
        Text,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # OAuth credentials
    Column("access_token", Text),
    Column("refresh_token", Text),
    Column("id_token", Text),
    Column("access_token_expires_at", DateTime(timezone=True)),
    Column("refresh_token_expires_at", DateTime(timezone=True)),
    Column("scope", Text),
    # Password hash for email/password accounts
    Column("password", Text),
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

Index("accounts_user_id_idx", accounts.c.user_id)

verifications = Table(
    "verifications",
    metadata,
    Column("id", Text, primary_key=True),
    Column("identifier", Text, nullable=False),
    Column("value", Text, nullable=False),
    Column("expires_at", DateTime(timezone=True), nullable=False),
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

Index("verifications_identifier_idx", verifications.c.identifier)
