import os
import sys
from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, time, timedelta

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Load environment variables from .env file
load_dotenv()

# Settings are read at import time; never point the app at a real database by default
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "console")

from app.config import settings  # noqa: E402
from app.database import enable_sqlite_foreign_keys, get_db  # noqa: E402
from app.dependencies import get_session_resolver  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    PatientSex,
    clinics,
    doctors,
    metadata,
    patients,
    sessions,
    users,
    users_to_clinics,
)
from app.models.base import override_column_defaults  # noqa: E402
from app.schemas.auth import SessionInfo  # noqa: E402

# Optional server database for tests; defaults to a throwaway SQLite file per test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

# Safety check: prevent running tests against the application database
if TEST_DATABASE_URL and TEST_DATABASE_URL == settings.database_url:
    print("\n❌ CRITICAL ERROR: Test database URL is same as application database!")
    print("This would DROP all data during tests.")
    print("Please set TEST_DATABASE_URL to a separate test database in .env")
    sys.exit(1)


class FakeClock:
    """Deterministic clock for generated timestamps."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine bound to a fresh schema."""
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(url, echo=False, poolclass=NullPool)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def clock():
    """Freeze generated timestamps; advance with ``clock.advance(minutes=5)``."""
    fake = FakeClock(datetime(2026, 1, 5, 9, 0, tzinfo=UTC))
    with override_column_defaults(clock=fake):
        yield fake


@pytest.fixture
def override_session_resolver() -> Callable[[SessionInfo | None], None]:
    """Replace the session lookup with a fixed answer."""

    def _override(session_info: SessionInfo | None) -> None:
        async def resolver(headers) -> SessionInfo | None:
            return session_info

        app.dependency_overrides[get_session_resolver] = lambda: resolver

    return _override


@pytest.fixture
async def test_user(db_session: AsyncSession) -> dict:
    """Create a test user in the database."""
    user_data = {
        "id": "user_ana",
        "name": "Ana Lima",
        "email": "ana@example.com",
        "email_verified": True,
    }

    await db_session.execute(insert(users).values(**user_data))
    await db_session.commit()

    return user_data


@pytest.fixture
async def user_session(db_session: AsyncSession, test_user: dict) -> dict:
    """Create an active session for the test user."""
    session_data = {
        "id": "session_ana",
        "token": "ana-session-token",
        "expires_at": datetime.now(UTC) + timedelta(days=7),
        "user_id": test_user["id"],
        "ip_address": "127.0.0.1",
        "user_agent": "pytest",
    }

    await db_session.execute(insert(sessions).values(**session_data))
    await db_session.commit()

    return session_data


@pytest.fixture
def auth_headers(user_session: dict) -> dict:
    """Create authentication headers for testing protected endpoints."""
    return {"Authorization": f"Bearer {user_session['token']}"}


@pytest.fixture
async def clinic(db_session: AsyncSession, test_user: dict) -> dict:
    """A clinic the test user is a member of."""
    result = await db_session.execute(
        insert(clinics).values(name="Central Clinic").returning(clinics)
    )
    clinic_row = dict(result.mappings().one())

    await db_session.execute(
        insert(users_to_clinics).values(user_id=test_user["id"], clinic_id=clinic_row["id"])
    )
    await db_session.commit()

    return clinic_row


@pytest.fixture
def sample_doctor_data() -> dict:
    """Doctor column values (Monday to Friday, 08:00-17:00)."""
    return {
        "name": "Dr. Maria Souza",
        "specialty": "Cardiology",
        "available_from_week_day": 1,
        "available_to_week_day": 5,
        "available_from_time": time(8, 0),
        "available_to_time": time(17, 0),
        "appointment_price_in_cents": 25000,
    }


@pytest.fixture
def sample_patient_data() -> dict:
    """Patient column values."""
    return {
        "name": "João Pereira",
        "email": "joao@example.com",
        "phone_number": "+55 11 91234-5678",
        "sex": PatientSex.MALE,
    }


@pytest.fixture
async def doctor(db_session: AsyncSession, clinic: dict, sample_doctor_data: dict) -> dict:
    """A doctor working at ``clinic``."""
    result = await db_session.execute(
        insert(doctors).values(clinic_id=clinic["id"], **sample_doctor_data).returning(doctors)
    )
    await db_session.commit()
    return dict(result.mappings().one())


@pytest.fixture
async def patient(db_session: AsyncSession, clinic: dict, sample_patient_data: dict) -> dict:
    """A patient registered at ``clinic``."""
    result = await db_session.execute(
        insert(patients).values(clinic_id=clinic["id"], **sample_patient_data).returning(patients)
    )
    await db_session.commit()
    return dict(result.mappings().one())
