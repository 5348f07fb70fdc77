"""
Identity provider JWT verification.

The hosted identity provider signs access tokens with a shared HS256 secret
and the ``authenticated`` audience. The subject claim is the user's UUID.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from oracle.config import get_settings
from oracle.errors import ConfigMissingError


def _signing_secret() -> str:
    """Return the configured secret, or raise if the server is misconfigured."""
    settings = get_settings()
    if not settings.jwt_secret:
        raise ConfigMissingError
    return settings.jwt_secret


def create_access_token(
    user_id: str,
    email: str | None = None,
    role: str = "authenticated",
    expires_in: timedelta | None = None,
) -> str:
    """
    Mint an access token the way the identity provider does.

    Used by local tooling and the test suite; production tokens come from the
    provider itself.

    Args:
        user_id: The user's UUID (becomes the ``sub`` claim).
        email: Optional email claim.
        role: Role claim; the provider uses ``authenticated`` for signed-in users.
        expires_in: Lifetime override. Negative values produce expired tokens.

    Returns:
        Encoded JWT string.
    """
    secret = _signing_secret()
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_in is None:
        expires_in = timedelta(minutes=settings.jwt_access_token_expire_minutes)
    payload: dict[str, Any] = {
        "sub": user_id,
        "aud": settings.jwt_audience,
        "role": role,
        "iat": now,
        "exp": now + expires_in,
    }
    if email is not None:
        payload["email"] = email
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Args:
        token: The encoded JWT string.

    Returns:
        Decoded payload dictionary.

    Raises:
        ConfigMissingError: If no signing secret is configured.
        jwt.InvalidTokenError: If the token is invalid, expired, or has no UUID subject.
    """
    secret = _signing_secret()
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer or None,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise jwt.InvalidTokenError(msg) from None

    try:
        uuid.UUID(str(payload["sub"]))
    except ValueError:
        msg = "Subject claim is not a user id"
        raise jwt.InvalidTokenError(msg) from None

    return payload
