"""
Shared pytest fixtures for all tests.

MongoDB is replaced by mongomock-motor with Beanie initialised on a fresh
in-memory database per test, so every test starts from empty collections.
"""

from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.config import Settings
from app.core.security import PasswordHasher, Role, TokenMaker, TokenPayload
from app.database import init_documents
from app.features.appointments.service import AppointmentService
from app.features.doctors.schemas import CreateDoctorRequest
from app.features.doctors.service import DoctorService
from app.features.patients.schemas import CreatePatientRequest
from app.features.patients.service import PatientService
from app.features.prescriptions.service import PrescriptionService
from app.main import create_app


TEST_SYMMETRIC_KEY = "12345678901234567890123456789012"
TODAY = date(2025, 6, 1)
PASSWORD = "secret123"


# ============================================================================
# CONFIGURATION
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Explicit test configuration, independent of the environment."""
    return Settings(
        _env_file=None,
        MONGODB_URL="mongodb://localhost:27017",
        DATABASE_NAME="vitareach_test",
        TOKEN_SYMMETRIC_KEY=TEST_SYMMETRIC_KEY,
        TOKEN_DURATION_MINUTES=15,
        BCRYPT_ROUNDS=4,
        CHAT_API_KEY=None,
        PAYMENT_KEY_ID="rzp_test_key",
        PAYMENT_KEY_SECRET="k",
        LOG_LEVEL="WARNING",
    )


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with all document models registered."""
    client = AsyncMongoMockClient()
    database = client["vitareach_test"]
    await init_documents(database)
    yield database


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_maker() -> TokenMaker:
    return TokenMaker(TEST_SYMMETRIC_KEY)


@pytest.fixture
def patient_service(db, settings, hasher, token_maker) -> PatientService:
    return PatientService(settings, hasher, token_maker)


@pytest.fixture
def doctor_service(db, settings, hasher, token_maker) -> DoctorService:
    return DoctorService(settings, hasher, token_maker)


@pytest.fixture
def appointment_service(db) -> AppointmentService:
    return AppointmentService(today=lambda: TODAY)


@pytest.fixture
def prescription_service(appointment_service) -> PrescriptionService:
    return PrescriptionService(appointment_service)


# ============================================================================
# TEST DATA
# ============================================================================


def make_identity(username: str, role: Role) -> TokenPayload:
    """Verified identity as the auth dependency would produce it."""
    now = datetime.now(timezone.utc)
    return TokenPayload(
        sub=username,
        role=role,
        nonce="test-nonce",
        issued_at=now,
        expires_at=now + timedelta(minutes=15),
    )


def patient_request(username: str = "alice", **overrides) -> CreatePatientRequest:
    data = {
        "username": username,
        "name": username.capitalize(),
        "email": f"{username}@example.com",
        "phone": "9876543210",
        "age": 30,
        "gender": "female",
        "password": PASSWORD,
    }
    data.update(overrides)
    return CreatePatientRequest(**data)


def doctor_request(username: str = "bob", **overrides) -> CreateDoctorRequest:
    data = {
        "username": username,
        "name": f"Dr {username.capitalize()}",
        "email": f"{username}@clinic.example.com",
        "phone": "9123456780",
        "gender": "male",
        "specialization": "Cardiology",
        "qualification": "MBBS, MD",
        "experience": 10,
        "password": PASSWORD,
    }
    data.update(overrides)
    return CreateDoctorRequest(**data)


@pytest.fixture
def alice() -> TokenPayload:
    return make_identity("alice", Role.PATIENT)


@pytest.fixture
def bob() -> TokenPayload:
    return make_identity("bob", Role.DOCTOR)


@pytest_asyncio.fixture
async def registered(patient_service, doctor_service):
    """Patients alice and carol, doctors bob and dave."""
    await patient_service.create_patient(patient_request("alice"))
    await patient_service.create_patient(patient_request("carol"))
    await doctor_service.create_doctor(doctor_request("bob"))
    await doctor_service.create_doctor(doctor_request("dave", specialization="Dermatology"))


# ============================================================================
# HTTP FIXTURES
# ============================================================================


@pytest.fixture
def chat_client() -> MagicMock:
    """Stub for the OpenAI-compatible client."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def app(db, settings, chat_client):
    return create_app(settings, chat_client=chat_client, today=lambda: TODAY)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app; the lifespan is not run, the db fixture stands in."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
