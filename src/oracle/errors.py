"""Exception taxonomy mapped to HTTP status codes by the global error handlers."""

from __future__ import annotations


class OracleError(Exception):
    """Base error. ``message`` is safe to show to clients."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthMissingError(OracleError):
    """No bearer credential on the request."""

    status_code = 401
    message = "Missing authorization header"


class AuthInvalidError(OracleError):
    """Credential rejected by the identity provider."""

    status_code = 401
    message = "Unauthorized"


class ConfigMissingError(OracleError):
    """Server is missing configuration required to serve the request."""

    status_code = 500
    message = "Server configuration error"


class ValidationFailedError(OracleError):
    status_code = 400
    message = "Missing required fields"


class NotFoundError(OracleError):
    status_code = 404
    message = "Not found"


class WordNotFoundError(NotFoundError):
    """Referenced word is absent from the catalog on a non-VOID spin."""

    message = "Divine word not found"


class InternalError(OracleError):
    status_code = 500
    message = "Internal server error"
