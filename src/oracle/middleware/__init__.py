"""Middleware registration."""

from fastapi import FastAPI

from oracle.config import Settings
from oracle.middleware.cors import CORSHeadersMiddleware
from oracle.middleware.error_handler import setup_error_handlers
from oracle.middleware.logging import setup_logging
from oracle.middleware.rate_limit import RateLimitMiddleware
from oracle.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware in the correct order.

    FastAPI/Starlette executes middleware in reverse-add order (last added = outermost).
    CORS is outermost so preflights never count against the rate limit and
    429 responses still carry the CORS headers.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(CORSHeadersMiddleware, settings=settings)
