# Appointments Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.features.appointments.models import AppointmentStatus


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment."""
    doctor_username: str = Field(..., min_length=1, max_length=50)
    appointment_date: str = Field(..., description="Date in YYYY-MM-DD format")
    appointment_time: str = Field(..., min_length=1, max_length=20, description="e.g. 10:00")
    specialty: Optional[str] = Field(None, max_length=100, description="Defaults to the doctor's specialization")
    symptoms: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {
            "example": {
                "doctor_username": "bob",
                "appointment_date": "2025-06-01",
                "appointment_time": "10:00",
                "specialty": "Cardiology",
                "symptoms": "Chest tightness after exercise",
            }
        }


class AppointmentStatusUpdate(BaseModel):
    """Schema for changing an appointment's status; the value is checked by the service."""
    status: str


class AppointmentNotesUpdate(BaseModel):
    """Schema for the doctor's notes on an appointment."""
    notes: str = Field(..., min_length=1)


class AppointmentResponse(BaseModel):
    """Schema for appointment response."""
    id: str
    patient_username: str
    doctor_username: str
    doctor_name: str
    appointment_date: str
    appointment_time: str
    specialty: str
    symptoms: str
    status: AppointmentStatus
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
