# Prescriptions Feature - Models

from typing import Optional

from beanie import Indexed

from app.shared.models import BaseDocument


class Prescription(BaseDocument):
    """
    Prescription document model.
    At most one per appointment, written by the appointment's doctor.
    """

    # Parent appointment (one prescription per appointment)
    appointment_id: Indexed(str, unique=True)

    prescription_text: str
    consultation_notes: Optional[str] = None

    # Patient feedback, submitted once
    feedback_rating: Optional[int] = None
    feedback_comment: Optional[str] = None

    # Set when the prescription was stored but completing the appointment failed
    appointment_sync_failed: bool = False

    class Settings:
        name = "prescriptions"

    class Config:
        json_schema_extra = {
            "example": {
                "appointment_id": "665f1c2e8b3f4a0012345678",
                "prescription_text": "Atorvastatin 10mg once daily for 30 days",
                "consultation_notes": "Lipid panel in four weeks.",
            }
        }
