from typing import Optional

from fastapi import Request

from app.core.logging import logger
from app.core.security import TokenMaker, TokenPayload
from app.shared.exceptions import CredentialsException


AUTHORIZATION_HEADER = "authorization"
AUTHORIZATION_TYPE_BEARER = "bearer"


def parse_bearer(authorization_header: Optional[str]) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        CredentialsException: If the header is missing, malformed or uses another scheme
    """
    if not authorization_header:
        raise CredentialsException("Authorization header is not provided")

    fields = authorization_header.split()
    if len(fields) < 2:
        raise CredentialsException("Invalid authorization header format")

    authorization_type = fields[0].lower()
    if authorization_type != AUTHORIZATION_TYPE_BEARER:
        raise CredentialsException(f"Unsupported authorization type {authorization_type}")

    return fields[1]


def get_token_maker(request: Request) -> TokenMaker:
    return request.app.state.token_maker


async def get_current_identity(request: Request) -> TokenPayload:
    """
    Dependency resolving the caller's verified identity.

    Args:
        request: Incoming request

    Returns:
        TokenPayload: Identity carried by the bearer token

    Raises:
        CredentialsException: If the header or the token is invalid
    """
    token = parse_bearer(request.headers.get(AUTHORIZATION_HEADER))

    try:
        identity = get_token_maker(request).verify_token(token)
    except CredentialsException as e:
        logger.warning(f"Token verification failed on {request.method} {request.url.path}: {e.detail}")
        raise

    logger.debug(f"Authenticated {identity.role.value} {identity.sub}")
    return identity
