"""Permissive CORS: fixed headers on every response, any OPTIONS answered 200."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from oracle.config import Settings


def cors_headers(settings: Settings) -> dict[str, str]:
    """The CORS headers stamped onto every response."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Short-circuit preflights and add the CORS headers to every response.

    Unlike Starlette's CORSMiddleware, the headers are sent whether or not the
    request carries an ``Origin`` header.
    """

    def __init__(self, app: object, settings: Settings) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self.headers = cors_headers(settings)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Answer OPTIONS directly, otherwise decorate the downstream response."""
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.headers)

        response = await call_next(request)
        response.headers.update(self.headers)
        return response
