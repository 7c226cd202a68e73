# Appointments Feature - Models

from enum import Enum
from typing import Optional

from beanie import Indexed

from app.shared.models import BaseDocument


# Calendar format of appointment_date
DATE_FORMAT = "%Y-%m-%d"


class AppointmentStatus(str, Enum):
    """Lifecycle states of an appointment. completed and cancelled are terminal."""

    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(BaseDocument):
    """
    Appointment document model.
    Booked by a patient with one doctor; only those two parties may see or change it.
    """

    # Bound parties
    patient_username: Indexed(str)
    doctor_username: Indexed(str)
    doctor_name: str  # Stored for display purposes

    # Schedule (YYYY-MM-DD sorts chronologically as a string)
    appointment_date: str
    appointment_time: str

    # Consultation details
    specialty: str
    symptoms: str
    notes: Optional[str] = None

    status: AppointmentStatus = AppointmentStatus.UPCOMING

    class Settings:
        name = "appointments"
        indexes = [
            [("patient_username", 1), ("appointment_date", 1)],
            [("doctor_username", 1), ("appointment_date", 1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "patient_username": "alice",
                "doctor_username": "bob",
                "doctor_name": "Dr. Bob Mehta",
                "appointment_date": "2025-06-01",
                "appointment_time": "10:00",
                "specialty": "Cardiology",
                "symptoms": "Chest tightness after exercise",
                "status": "upcoming",
            }
        }
