"""
Starlette middleware for the cross-origin and content-type concerns.

Registered outermost first: CORS wraps the JSON content-type middleware,
which wraps the router.
"""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

JSON_CONTENT_TYPE = "application/json"


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Permissive CORS: every origin, the CRUD methods, two request headers.

    Preflight requests are answered here with an empty 200 and never reach
    the router.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Force ``Content-Type: application/json`` on every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers["Content-Type"] = JSON_CONTENT_TYPE
        return response
