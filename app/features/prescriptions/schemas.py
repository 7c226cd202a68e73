# Prescriptions Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


MIN_RATING = 1
MAX_RATING = 5


class PrescriptionCreate(BaseModel):
    """Schema for writing a prescription after a consultation."""
    appointment_id: str = Field(..., min_length=1)
    prescription_text: str = Field(..., min_length=1)
    consultation_notes: Optional[str] = None


class PrescriptionUpdate(BaseModel):
    """Schema for revising a prescription."""
    prescription_text: str = Field(..., min_length=1)
    consultation_notes: Optional[str] = None


class FeedbackCreate(BaseModel):
    """Schema for the patient's feedback on a consultation."""
    feedback_rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    feedback_comment: Optional[str] = None


class PrescriptionResponse(BaseModel):
    """Schema for prescription response."""
    id: str
    appointment_id: str
    prescription_text: str
    consultation_notes: Optional[str] = None
    feedback_rating: Optional[int] = None
    feedback_comment: Optional[str] = None
    appointment_sync_failed: bool = False
    created_at: datetime
    updated_at: datetime
