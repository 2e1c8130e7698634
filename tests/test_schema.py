"""Tests for table constraints, cascades and generated columns."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import DataError, IntegrityError

from app.models import (
    accounts,
    appointments,
    clinics,
    doctors,
    patients,
    sessions,
    users,
    users_to_clinics,
    verifications,
)
from app.models.base import override_column_defaults


async def count_rows(db_session, table, *conditions) -> int:
    """Count rows of ``table`` matching ``conditions``."""
    query = select(func.count()).select_from(table)
    if conditions:
        query = query.where(*conditions)
    return await db_session.scalar(query)


@pytest.mark.asyncio
async def test_clinic_id_comes_from_uuid_factory(db_session):
    """Test generated identifiers come from the injected factory."""
    fixed_id = UUID("00000000-0000-4000-8000-000000000001")

    with override_column_defaults(uuid_factory=lambda: fixed_id):
        result = await db_session.execute(
            insert(clinics).values(name="Downtown Clinic").returning(clinics)
        )
        await db_session.commit()

    clinic = result.mappings().one()
    assert clinic["id"] == fixed_id
    assert clinic["created_at"] is not None
    assert clinic["updated_at"] is not None


@pytest.mark.asyncio
async def test_created_at_fixed_and_updated_at_refreshed(db_session, clock):
    """Test updated_at moves forward on every write while created_at stays put."""
    result = await db_session.execute(insert(clinics).values(name="Old Name").returning(clinics))
    await db_session.commit()
    original = result.mappings().one()

    assert original["created_at"] == original["updated_at"]

    previous_updated_at = original["updated_at"]
    for new_name in ("New Name", "Newer Name"):
        clock.advance(minutes=5)
        await db_session.execute(
            update(clinics).where(clinics.c.id == original["id"]).values(name=new_name)
        )
        await db_session.commit()

        result = await db_session.execute(select(clinics).where(clinics.c.id == original["id"]))
        current = result.mappings().one()

        assert current["name"] == new_name
        assert current["created_at"] == original["created_at"]
        assert current["updated_at"] - previous_updated_at == timedelta(minutes=5)
        previous_updated_at = current["updated_at"]


@pytest.mark.asyncio
async def test_user_updated_at_refreshed(db_session, clock):
    """Test auth tables refresh updated_at too."""
    await db_session.execute(
        insert(users).values(id="user_bruno", name="Bruno", email="bruno@example.com")
    )
    await db_session.commit()
    query = select(users).where(users.c.id == "user_bruno")
    before = (await db_session.execute(query)).mappings().one()

    clock.advance(hours=1)
    await db_session.execute(
        update(users).where(users.c.id == "user_bruno").values(image="https://example.com/b.png")
    )
    await db_session.commit()

    after = (await db_session.execute(query)).mappings().one()

    assert after["created_at"] == before["created_at"]
    assert after["updated_at"] - before["updated_at"] == timedelta(hours=1)


@pytest.mark.asyncio
async def test_email_verified_defaults_to_false(db_session):
    """Test new users start unverified."""
    await db_session.execute(
        insert(users).values(id="user_new", name="New User", email="new@example.com")
    )
    await db_session.commit()

    verified = await db_session.scalar(
        select(users.c.email_verified).where(users.c.id == "user_new")
    )
    assert verified is False


@pytest.mark.asyncio
async def test_unique_user_email(db_session, test_user):
    """Test that user email must be unique."""
    with pytest.raises(IntegrityError):
        await db_session.execute(
            insert(users).values(id="user_other", name="Other", email=test_user["email"])
        )
    await db_session.rollback()


@pytest.mark.asyncio
async def test_unique_session_token(db_session, user_session):
    """Test that session tokens must be unique."""
    with pytest.raises(IntegrityError):
        await db_session.execute(
            insert(sessions).values(
                id="session_dup",
                token=user_session["token"],
                expires_at=datetime.now(UTC) + timedelta(days=1),
                user_id=user_session["user_id"],
            )
        )
    await db_session.rollback()


@pytest.mark.asyncio
async def test_patient_sex_must_be_male_or_female(db_session, clinic, sample_patient_data):
    """Test the sex enumeration rejects other values."""
    sample_patient_data["sex"] = "other"

    with pytest.raises((IntegrityError, DataError)):
        await db_session.execute(
            insert(patients).values(clinic_id=clinic["id"], **sample_patient_data)
        )
    await db_session.rollback()

    assert await count_rows(db_session, patients) == 0


@pytest.mark.asyncio
async def test_membership_is_unique_per_user_and_clinic(db_session, clinic, test_user):
    """Test a user cannot join the same clinic twice."""
    with pytest.raises(IntegrityError):
        await db_session.execute(
            insert(users_to_clinics).values(user_id=test_user["id"], clinic_id=clinic["id"])
        )
    await db_session.rollback()


@pytest.mark.asyncio
async def test_doctor_requires_existing_clinic(db_session, sample_doctor_data):
    """Test foreign keys reject references to missing clinics."""
    missing_clinic = UUID("00000000-0000-4000-8000-00000000dead")

    with pytest.raises(IntegrityError):
        await db_session.execute(
            insert(doctors).values(clinic_id=missing_clinic, **sample_doctor_data)
        )
    await db_session.rollback()


@pytest.mark.asyncio
async def test_deleting_clinic_cascades(db_session, clinic, doctor, patient, test_user):
    """Test deleting a clinic removes its doctors, patients, appointments and memberships."""
    await db_session.execute(
        insert(appointments).values(
            clinic_id=clinic["id"],
            doctor_id=doctor["id"],
            patient_id=patient["id"],
            appointment_date=datetime(2026, 3, 2, 14, 30, tzinfo=UTC),
        )
    )
    await db_session.commit()

    await db_session.execute(delete(clinics).where(clinics.c.id == clinic["id"]))
    await db_session.commit()

    assert await count_rows(db_session, doctors) == 0
    assert await count_rows(db_session, patients) == 0
    assert await count_rows(db_session, appointments) == 0
    assert await count_rows(db_session, users_to_clinics) == 0
    # The member survives
    assert await count_rows(db_session, users, users.c.id == test_user["id"]) == 1


@pytest.mark.asyncio
async def test_deleting_doctor_cascades_to_appointments(db_session, clinic, doctor, patient):
    """Test appointments go away with their doctor."""
    await db_session.execute(
        insert(appointments).values(
            clinic_id=clinic["id"],
            doctor_id=doctor["id"],
            patient_id=patient["id"],
            appointment_date=datetime(2026, 3, 2, 14, 30, tzinfo=UTC),
        )
    )
    await db_session.commit()

    await db_session.execute(delete(doctors).where(doctors.c.id == doctor["id"]))
    await db_session.commit()

    assert await count_rows(db_session, appointments) == 0
    assert await count_rows(db_session, patients) == 1


@pytest.mark.asyncio
async def test_deleting_user_cascades(db_session, test_user, user_session, clinic):
    """Test deleting a user removes sessions, accounts and memberships, not clinics."""
    await db_session.execute(
        insert(accounts).values(
            id="account_ana",
            account_id="google-oauth2|123",
            provider_id="google",
            user_id=test_user["id"],
            access_token="access",
        )
    )
    await db_session.commit()

    await db_session.execute(delete(users).where(users.c.id == test_user["id"]))
    await db_session.commit()

    assert await count_rows(db_session, sessions) == 0
    assert await count_rows(db_session, accounts) == 0
    assert await count_rows(db_session, users_to_clinics) == 0
    assert await count_rows(db_session, clinics) == 1


@pytest.mark.asyncio
async def test_verification_is_independent_of_users(db_session):
    """Test verifications are stored without a user reference."""
    await db_session.execute(
        insert(verifications).values(
            id="verification_1",
            identifier="ana@example.com",
            value="123456",
            expires_at=datetime.now(UTC) + timedelta(minutes=10),
        )
    )
    await db_session.commit()

    assert await count_rows(db_session, verifications) == 1
