from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    message: str


class ExistsResponse(BaseModel):
    """Availability / existence check response."""

    exists: bool
    message: Optional[str] = None
