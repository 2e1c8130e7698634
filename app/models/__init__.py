"""Database models."""

from app.models.appointments import appointments
from app.models.auth import accounts, sessions, verifications
from app.models.base import metadata
from app.models.clinics import clinics, users_to_clinics
from app.models.doctors import doctors
from app.models.patients import PatientSex, patients
from app.models.users import users

__all__ = [
    "PatientSex",
    "accounts",
    "appointments",
    "clinics",
    "doctors",
    "metadata",
    "patients",
    "sessions",
    "users",
    "users_to_clinics",
    "verifications",
]
