# Patient Accounts Feature - Models

from beanie import Indexed
from pydantic import EmailStr

from app.shared.models import BaseDocument


class Patient(BaseDocument):
    """Patient account document."""

    username: Indexed(str, unique=True)
    email: Indexed(EmailStr, unique=True)
    password_hash: str

    # Personal information
    name: str
    phone: str
    age: int
    gender: str

    class Settings:
        name = "patients"

    class Config:
        json_schema_extra = {
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "name": "Alice Sharma",
                "phone": "+919800000001",
                "age": 34,
                "gender": "Female",
            }
        }
