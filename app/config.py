"""Application configuration settings."""

from functools import lru_cache
from typing import List, Optional
import json

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    MONGODB_URL: str
    DATABASE_NAME: str = "vitareach"

    # Session tokens (key must be exactly 32 bytes)
    TOKEN_SYMMETRIC_KEY: str
    TOKEN_DURATION_MINUTES: int = 1440

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Application
    APP_NAME: str = "VitaReach"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Chatbot (OpenAI-compatible endpoint)
    CHAT_API_KEY: Optional[str] = None
    CHAT_MODEL: str = "gemini-1.5-flash"
    CHAT_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    CHAT_MAX_TOKENS: int = 400
    CHAT_TEMPERATURE: float = 0.3
    CHAT_TOP_P: float = 0.98

    # Payments
    PAYMENT_KEY_ID: Optional[str] = None
    PAYMENT_KEY_SECRET: Optional[str] = None
    PAYMENT_CURRENCY: str = "INR"

    # Outbound calls
    OUTBOUND_TIMEOUT_SECONDS: float = 30.0

    # CORS
    BACKEND_CORS_ORIGINS: str = '["http://localhost:8080", "http://localhost:5173"]'

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False  # forces DEBUG logging

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS origins from JSON string."""
        try:
            return json.loads(self.BACKEND_CORS_ORIGINS)
        except json.JSONDecodeError:
            return ["http://localhost:8080"]


@lru_cache
def get_settings() -> Settings:
    """Load settings once for the lifetime of the process."""
    return Settings()
