"""Tests for appointment endpoints."""

from datetime import UTC, datetime

import pytest
from httpx import AsyncClient
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import appointments, clinics, doctors, patients

MISSING_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
async def other_clinic_doctor(db_session: AsyncSession, sample_doctor_data: dict) -> dict:
    """A doctor working at a different clinic."""
    result = await db_session.execute(
        insert(clinics).values(name="Hillside Clinic").returning(clinics.c.id)
    )
    other_clinic_id = result.scalar_one()

    result = await db_session.execute(
        insert(doctors)
        .values(clinic_id=other_clinic_id, **{**sample_doctor_data, "name": "Dr. Paulo Reis"})
        .returning(doctors)
    )
    await db_session.commit()
    return dict(result.mappings().one())


@pytest.fixture
async def booked(db_session: AsyncSession, clinic: dict, doctor: dict, patient: dict) -> list:
    """Three appointments, inserted out of chronological order."""
    moments = [
        datetime(2026, 3, 4, 10, 0, tzinfo=UTC),
        datetime(2026, 3, 2, 9, 0, tzinfo=UTC),
        datetime(2026, 3, 3, 15, 30, tzinfo=UTC),
    ]
    rows = []
    for moment in moments:
        result = await db_session.execute(
            insert(appointments)
            .values(
                clinic_id=clinic["id"],
                doctor_id=doctor["id"],
                patient_id=patient["id"],
                appointment_date=moment,
            )
            .returning(appointments)
        )
        rows.append(dict(result.mappings().one()))
    await db_session.commit()
    return rows


def appointments_url(clinic: dict) -> str:
    return f"/api/v1/clinics/{clinic['id']}/appointments/"


@pytest.mark.asyncio
async def test_create_appointment(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    doctor: dict,
    patient: dict,
) -> None:
    """Test booking an appointment."""
    response = await client.post(
        appointments_url(clinic),
        json={
            "doctor_id": str(doctor["id"]),
            "patient_id": str(patient["id"]),
            "appointment_date": "2026-03-02T14:30:00Z",
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["clinic_id"] == str(clinic["id"])
    assert data["doctor_id"] == str(doctor["id"])
    assert data["patient_id"] == str(patient["id"])
    assert data["appointment_date"].startswith("2026-03-02T14:30:00")


@pytest.mark.asyncio
async def test_create_appointment_doctor_from_other_clinic(
    client: AsyncClient,
    db_session: AsyncSession,
    auth_headers: dict,
    clinic: dict,
    patient: dict,
    other_clinic_doctor: dict,
) -> None:
    """Test doctor and patient must belong to the appointment's clinic."""
    response = await client.post(
        appointments_url(clinic),
        json={
            "doctor_id": str(other_clinic_doctor["id"]),
            "patient_id": str(patient["id"]),
            "appointment_date": "2026-03-02T14:30:00Z",
        },
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert response.json()["message"] == "Doctor does not belong to this clinic"
    assert await db_session.scalar(select(func.count()).select_from(appointments)) == 0


@pytest.mark.asyncio
async def test_create_appointment_missing_patient(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    doctor: dict,
) -> None:
    """Test booking with an unknown patient."""
    response = await client.post(
        appointments_url(clinic),
        json={
            "doctor_id": str(doctor["id"]),
            "patient_id": MISSING_ID,
            "appointment_date": "2026-03-02T14:30:00Z",
        },
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Patient not found"


@pytest.mark.asyncio
async def test_list_appointments_chronological(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    booked: list,
) -> None:
    """Test appointments come back ordered by date."""
    response = await client.get(appointments_url(clinic), headers=auth_headers)

    assert response.status_code == 200
    dates = [a["appointment_date"][:10] for a in response.json()]
    assert dates == ["2026-03-02", "2026-03-03", "2026-03-04"]


@pytest.mark.asyncio
async def test_list_appointments_date_range(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    booked: list,
) -> None:
    """Test date_from is inclusive and date_to exclusive."""
    response = await client.get(
        appointments_url(clinic),
        params={"date_from": "2026-03-03T00:00:00Z", "date_to": "2026-03-04T10:00:00Z"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert [a["id"] for a in data] == [str(booked[2]["id"])]


@pytest.mark.asyncio
async def test_list_appointments_by_doctor(
    client: AsyncClient,
    db_session: AsyncSession,
    auth_headers: dict,
    clinic: dict,
    patient: dict,
    booked: list,
    sample_doctor_data: dict,
) -> None:
    """Test filtering by doctor."""
    result = await db_session.execute(
        insert(doctors)
        .values(clinic_id=clinic["id"], **{**sample_doctor_data, "name": "Dr. Lucas Alves"})
        .returning(doctors.c.id)
    )
    second_doctor_id = result.scalar_one()
    await db_session.execute(
        insert(appointments).values(
            clinic_id=clinic["id"],
            doctor_id=second_doctor_id,
            patient_id=patient["id"],
            appointment_date=datetime(2026, 3, 5, 8, 0, tzinfo=UTC),
        )
    )
    await db_session.commit()

    response = await client.get(
        appointments_url(clinic),
        params={"doctor_id": str(second_doctor_id)},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["doctor_id"] == str(second_doctor_id)


@pytest.mark.asyncio
async def test_reschedule_appointment(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    booked: list,
) -> None:
    """Test moving an appointment to another moment."""
    response = await client.patch(
        f"{appointments_url(clinic)}{booked[0]['id']}",
        json={"appointment_date": "2026-03-10T11:00:00Z"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["appointment_date"].startswith("2026-03-10T11:00:00")


@pytest.mark.asyncio
async def test_reassign_appointment_to_other_clinic_doctor(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
    booked: list,
    other_clinic_doctor: dict,
) -> None:
    """Test an appointment cannot be moved to another clinic's doctor."""
    response = await client.patch(
        f"{appointments_url(clinic)}{booked[0]['id']}",
        json={"doctor_id": str(other_clinic_doctor["id"])},
        headers=auth_headers,
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_appointment_not_found(
    client: AsyncClient,
    auth_headers: dict,
    clinic: dict,
) -> None:
    """Test getting a non-existent appointment."""
    response = await client.get(f"{appointments_url(clinic)}{MISSING_ID}", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_appointment(
    client: AsyncClient,
    db_session: AsyncSession,
    auth_headers: dict,
    clinic: dict,
    booked: list,
) -> None:
    """Test cancelling an appointment keeps the doctor and patient."""
    response = await client.delete(
        f"{appointments_url(clinic)}{booked[0]['id']}", headers=auth_headers
    )

    assert response.status_code == 204
    assert await db_session.scalar(select(func.count()).select_from(appointments)) == 2
    assert await db_session.scalar(select(func.count()).select_from(doctors)) == 1
    assert await db_session.scalar(select(func.count()).select_from(patients)) == 1


@pytest.mark.asyncio
async def test_deleting_patient_removes_appointments(
    client: AsyncClient,
    db_session: AsyncSession,
    auth_headers: dict,
    clinic: dict,
    patient: dict,
    booked: list,
) -> None:
    """Test appointments go away with their patient."""
    response = await client.delete(
        f"/api/v1/clinics/{clinic['id']}/patients/{patient['id']}", headers=auth_headers
    )

    assert response.status_code == 204
    assert await db_session.scalar(select(func.count()).select_from(appointments)) == 0
