"""MongoDB database connection manager."""

from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.config import Settings
from app.core.logging import logger


def document_models() -> list:
    """Document models registered with Beanie."""
    from app.features.appointments.models import Appointment
    from app.features.doctors.models import Doctor
    from app.features.patients.models import Patient
    from app.features.prescriptions.models import Prescription

    return [Patient, Doctor, Appointment, Prescription]


async def init_documents(database: AsyncIOMotorDatabase):
    """Initialize Beanie on the given database and build indexes."""
    await init_beanie(database=database, document_models=document_models())


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls, settings: Settings):
        """Connect to MongoDB and initialize Beanie."""
        cls.client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=int(settings.OUTBOUND_TIMEOUT_SECONDS * 1000),
        )
        await init_documents(cls.client[settings.DATABASE_NAME])

        logger.info(f"Connected to MongoDB database: {settings.DATABASE_NAME}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            cls.client = None
            logger.info("Closed MongoDB connection")
