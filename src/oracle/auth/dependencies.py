"""FastAPI authentication dependencies."""

from __future__ import annotations

from dataclasses import dataclass

import jwt
import structlog
from fastapi import Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from oracle.auth.jwt import verify_token
from oracle.errors import AuthInvalidError, AuthMissingError

logger = structlog.get_logger()

# auto_error=False so a missing header maps to our own 401 body instead of FastAPI's.
_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified access token."""

    id: str
    email: str | None = None
    role: str = "authenticated"


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> AuthenticatedUser:
    """
    Extract and verify the bearer JWT, return the caller's identity.

    Runs before any database access. Raises 401 on a missing or rejected
    credential and 500 when the server has no signing secret configured.
    A header that is present but not a usable bearer token counts as rejected.
    """
    if credentials is None or not credentials.credentials:
        if request.headers.get("Authorization"):
            logger.info("auth_rejected", reason="malformed authorization header")
            raise AuthInvalidError
        raise AuthMissingError

    try:
        payload = verify_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        logger.info("auth_rejected", reason=str(e))
        raise AuthInvalidError from e

    return AuthenticatedUser(
        id=str(payload["sub"]),
        email=payload.get("email"),
        role=payload.get("role", "authenticated"),
    )
