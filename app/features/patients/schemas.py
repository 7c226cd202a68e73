# Patient Accounts Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from app.features.auth.schemas import USERNAME_PATTERN


# ============== Register Patient ==============

class CreatePatientRequest(BaseModel):
    """Request schema for patient signup."""
    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    age: int = Field(..., ge=0)
    gender: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=6, max_length=100)


# ============== Update Patient ==============

class UpdatePatientRequest(BaseModel):
    """Request schema for updating the patient's own profile."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    age: Optional[int] = Field(None, ge=0)
    gender: Optional[str] = Field(None, min_length=1, max_length=20)


# ============== Patient Response ==============

class PatientResponse(BaseModel):
    """Response schema for patient data (never includes the password hash)."""
    username: str
    name: str
    email: str
    phone: str
    age: int
    gender: str
    created_at: datetime
    updated_at: datetime


# ============== Login ==============

class PatientLoginResponse(BaseModel):
    """Response schema for patient login."""
    access_token: str
    token_type: str = "bearer"
    patient: PatientResponse
