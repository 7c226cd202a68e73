# Doctor Accounts Feature - Models

from beanie import Indexed
from pydantic import EmailStr

from app.shared.models import BaseDocument


class Doctor(BaseDocument):
    """Doctor account document."""

    username: Indexed(str, unique=True)
    email: Indexed(EmailStr, unique=True)
    password_hash: str

    # Personal information
    name: str
    phone: str
    gender: str

    # Professional information
    specialization: Indexed(str)
    qualification: str
    experience: int  # years

    class Settings:
        name = "doctors"

    class Config:
        json_schema_extra = {
            "example": {
                "username": "bob",
                "email": "bob@clinic.example.com",
                "name": "Dr. Bob Mehta",
                "phone": "+919800000002",
                "gender": "Male",
                "specialization": "Cardiology",
                "qualification": "MBBS, MD",
                "experience": 12,
            }
        }
