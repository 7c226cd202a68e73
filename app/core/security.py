import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Tuple

from jose import jwe
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from app.shared.exceptions import (
    ConfigError,
    ExpiredTokenError,
    HashingError,
    InvalidTokenError,
)
from app.shared.models import utc_now


# Size of the A256GCM content-encryption key
SYMMETRIC_KEY_SIZE = 32


class Role(str, Enum):
    """Account role carried in every session token."""

    PATIENT = "patient"
    DOCTOR = "doctor"


class TokenPayload(BaseModel):
    """Verified identity carried inside a session token."""

    sub: str
    role: Role
    nonce: str
    issued_at: datetime
    expires_at: datetime


class PasswordHasher:
    """Opaque bcrypt hash/verify capability."""

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password."""
        try:
            return self.context.hash(password)
        except Exception as e:
            raise HashingError(f"Password hashing failed: {type(e).__name__}") from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against a hash."""
        try:
            return self.context.verify(password, hashed_password)
        except Exception as e:
            raise HashingError(f"Password verification failed: {type(e).__name__}") from e


class TokenMaker:
    """
    Issues and verifies encrypted session tokens.

    Tokens are compact JWE blobs (direct key agreement, AES-256-GCM) so the
    payload is both confidential and authenticated under the process-wide
    symmetric key.
    """

    def __init__(self, symmetric_key: str, clock: Optional[Callable[[], datetime]] = None):
        if len(symmetric_key.encode("utf-8")) != SYMMETRIC_KEY_SIZE:
            raise ConfigError(f"Token symmetric key must be exactly {SYMMETRIC_KEY_SIZE} bytes")
        self._key = symmetric_key
        self._clock = clock or utc_now

    def issue_token(self, subject: str, role: Role, ttl: timedelta) -> Tuple[str, TokenPayload]:
        """Create a token for the given subject and role."""
        issued_at = self._clock()
        payload = TokenPayload(
            sub=subject,
            role=role,
            nonce=str(uuid.uuid4()),
            issued_at=issued_at,
            expires_at=issued_at + ttl,
        )
        token = jwe.encrypt(
            payload.model_dump_json(),
            self._key,
            algorithm=ALGORITHMS.DIR,
            encryption=ALGORITHMS.A256GCM,
        )
        return token.decode("utf-8"), payload

    def verify_token(self, token: str) -> TokenPayload:
        """
        Decrypt a token and check its validity window.

        Raises:
            InvalidTokenError: If the token does not decrypt, authenticate or parse
            ExpiredTokenError: If the current time is at or past expiry
        """
        try:
            plaintext = jwe.decrypt(token, self._key)
            payload = TokenPayload.model_validate_json(plaintext)
        except (JOSEError, ValidationError, ValueError, TypeError):
            raise InvalidTokenError()

        if self._clock() >= payload.expires_at:
            raise ExpiredTokenError()

        return payload
