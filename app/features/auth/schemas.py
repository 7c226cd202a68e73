from pydantic import BaseModel, Field


USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class LoginRequest(BaseModel):
    """Login request schema."""

    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=6, max_length=100)


class ChangePasswordRequest(BaseModel):
    """Change password request schema."""

    current_password: str = Field(..., min_length=6, max_length=100)
    new_password: str = Field(..., min_length=6, max_length=100)
