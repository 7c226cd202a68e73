# Doctor Accounts Feature - Schemas

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from app.features.auth.schemas import USERNAME_PATTERN


# ============== Register Doctor ==============

class CreateDoctorRequest(BaseModel):
    """Request schema for doctor signup."""
    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=20)
    gender: str = Field(..., min_length=1, max_length=20)
    specialization: str = Field(..., min_length=1, max_length=100)
    qualification: str = Field(..., min_length=1, max_length=200)
    experience: int = Field(..., ge=0, description="Years of experience")
    password: str = Field(..., min_length=6, max_length=100)


# ============== Update Doctor ==============

class UpdateDoctorRequest(BaseModel):
    """Request schema for updating the doctor's own profile."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    gender: Optional[str] = Field(None, min_length=1, max_length=20)
    specialization: Optional[str] = Field(None, min_length=1, max_length=100)
    qualification: Optional[str] = Field(None, min_length=1, max_length=200)
    experience: Optional[int] = Field(None, ge=0)


# ============== Doctor Response ==============

class DoctorResponse(BaseModel):
    """Response schema for doctor data (never includes the password hash)."""
    username: str
    name: str
    email: str
    phone: str
    gender: str
    specialization: str
    qualification: str
    experience: int
    created_at: datetime
    updated_at: datetime


class DoctorListResponse(BaseModel):
    """Response schema for one page of doctors."""
    doctors: List[DoctorResponse]
    page_id: int
    page_size: int
    total: int


# ============== Login ==============

class DoctorLoginResponse(BaseModel):
    """Response schema for doctor login."""
    access_token: str
    token_type: str = "bearer"
    doctor: DoctorResponse
