"""Global error handlers: consistent JSON error responses of the form {"error": "..."}."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from oracle.config import get_settings
from oracle.errors import OracleError
from oracle.middleware.cors import cors_headers

logger = structlog.get_logger()


def setup_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(OracleError)
    async def oracle_exception_handler(request: Request, exc: OracleError) -> JSONResponse:
        """Map the domain error taxonomy to its status code."""
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                method=request.method,
                error=exc.message,
                cause=repr(exc.__cause__) if exc.__cause__ else None,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent JSON format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, _exc: RequestValidationError) -> JSONResponse:
        """Malformed requests are client errors (400), never 422."""
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions, always JSON.

        This handler runs outside the middleware stack, so the CORS headers are
        attached here explicitly.
        """
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers=cors_headers(get_settings()),
        )
