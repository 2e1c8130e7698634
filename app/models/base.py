"""Shared metadata and column default factories.

Every table is registered on the same ``metadata`` so that string foreign
keys (``"clinics.id"``) resolve across model modules.

Generated values (primary keys and timestamps) are produced client-side by
``new_uuid()`` and ``utcnow()``. Both delegate to ``column_defaults``, which
tests can swap with ``override_column_defaults`` to get a deterministic
clock or predictable identifiers.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import MetaData

metadata = MetaData()


def _system_clock() -> datetime:
    return datetime.now(UTC)


class ColumnDefaults:
    """Factories used for generated column values."""

    def __init__(
        self,
        clock: Callable[[], datetime] = _system_clock,
        uuid_factory: Callable[[], UUID] = uuid4,
    ):
        """Initialize with a clock and a UUID factory."""
        self.clock = clock
        self.uuid_factory = uuid_factory


column_defaults = ColumnDefaults()


def utcnow() -> datetime:
    """Current time for created_at/updated_at columns."""
    return column_defaults.clock()


def new_uuid() -> UUID:
    """Identifier for UUID primary keys."""
    return column_defaults.uuid_factory()


@contextmanager
def override_column_defaults(
    clock: Callable[[], datetime] | None = None,
    uuid_factory: Callable[[], UUID] | None = None,
) -> Iterator[ColumnDefaults]:
    """
    Temporarily replace the clock and/or UUID factory.

    Args:
        clock: Callable returning the current time
        uuid_factory: Callable returning a new UUID

    Yields:
        The active column defaults
    """
    previous_clock = column_defaults.clock
    previous_factory = column_defaults.uuid_factory

    if clock is not None:
        column_defaults.clock = clock
    if uuid_factory is not None:
        column_defaults.uuid_factory = uuid_factory

    try:
        yield column_defaults
    finally:
        column_defaults.clock = previous_clock
        column_defaults.uuid_factory = previous_factory
