from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base exception carrying a machine-readable error kind."""

    kind: str = "internal_error"
    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail_default: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code_default,
            detail=detail or self.detail_default,
            headers=headers,
        )


class ValidationException(AppException):
    """Exception for malformed or missing request fields."""

    kind = "validation_error"
    status_code_default = status.HTTP_400_BAD_REQUEST
    detail_default = "Invalid request"


class CredentialsException(AppException):
    """Exception for a missing or unverifiable identity."""

    kind = "unauthenticated"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    detail_default = "Could not validate credentials"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail=detail, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialsException(CredentialsException):
    """Exception for a failed username/password check."""

    kind = "invalid_credentials"
    detail_default = "Invalid username or password"


class InvalidTokenError(CredentialsException):
    """Exception for a token that fails to decrypt or authenticate."""

    kind = "invalid_token"
    detail_default = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    """Exception for a token used after its expiry."""

    kind = "expired_token"
    detail_default = "Token has expired"


class ForbiddenException(AppException):
    """Exception for a valid identity lacking the role or ownership required."""

    kind = "unauthorized"
    status_code_default = status.HTTP_403_FORBIDDEN
    detail_default = "Forbidden"


class NotFoundException(AppException):
    """Exception for resource not found."""

    kind = "not_found"
    status_code_default = status.HTTP_404_NOT_FOUND
    detail_default = "Resource not found"


class ConflictException(AppException):
    """Exception for a uniqueness violation."""

    kind = "conflict"
    status_code_default = status.HTTP_400_BAD_REQUEST
    detail_default = "Resource already exists"


class UpstreamException(AppException):
    """Exception for a failing third-party provider."""

    kind = "upstream_error"
    status_code_default = status.HTTP_502_BAD_GATEWAY
    detail_default = "Upstream provider error"


class InternalException(AppException):
    """Exception for storage or unexpected failures."""


class HashingError(InternalException):
    """Exception for a failure inside the password hashing primitive."""

    detail_default = "Password hashing failed"


class ConfigError(ValueError):
    """Raised at startup when configuration is unusable."""
