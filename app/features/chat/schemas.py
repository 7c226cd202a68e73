# Chat Feature - Schemas

from typing import Optional
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Schema for a chatbot question."""
    message: str = Field(..., min_length=1, max_length=4000)
    format: Optional[str] = Field(None, max_length=500, description="Optional response format instruction")


class ChatResponse(BaseModel):
    """Schema for the chatbot's answer."""
    response: str
