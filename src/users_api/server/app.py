"""Starlette ASGI application exposing CRUD over the users table."""

from __future__ import annotations

import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from ..exceptions import StorageError
from ..persistence import UserStore
from .middleware import CORSHeadersMiddleware, JSONContentTypeMiddleware
from .schemas import parse_user_payload

logger = logging.getLogger(__name__)

# Largest value SQLite stores in an INTEGER PRIMARY KEY
_MAX_USER_ID = 2**63 - 1


def parse_user_id(raw: str) -> Optional[int]:
    """Return the path segment as a user id, or ``None`` if it cannot be one.

    Only plain ASCII digits in SQLite's integer range are ids; signs,
    whitespace and underscores are rejected.
    """
    if not (raw.isascii() and raw.isdigit()):
        return None
    user_id = int(raw)
    if user_id > _MAX_USER_ID:
        return None
    return user_id


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Render router-level 404/405 as JSON like every other response."""
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


def create_app(store: UserStore, api_prefix: str = "/api/py") -> Starlette:
    """Build the Starlette application wired to *store*.

    Args:
        store: Storage client shared by every handler
        api_prefix: Path prefix the ``/users`` routes are mounted under
    """

    async def list_users(request: Request) -> JSONResponse:
        try:
            users = await run_in_threadpool(store.list_users)
        except StorageError as exc:
            logger.error("list_users failed: %s", exc)
            return _error("Error fetching users", 500)
        return JSONResponse([u.to_dict() for u in users])

    async def get_user(request: Request) -> JSONResponse:
        user_id = parse_user_id(request.path_params["user_id"])
        if user_id is None:
            return _error("User not found", 404)

        try:
            user = await run_in_threadpool(store.find_user, user_id)
        except StorageError as exc:
            logger.error("get_user failed: %s", exc)
            return _error("User not found", 404)
        if user is None:
            return _error("User not found", 404)
        return JSONResponse(user.to_dict())

    async def create_user(request: Request) -> JSONResponse:
        payload = parse_user_payload(await request.body())
        if payload is None:
            return _error("Invalid input", 400)

        try:
            user = await run_in_threadpool(store.create_user, payload.name, payload.email)
        except StorageError as exc:
            logger.error("create_user failed: %s", exc)
            return _error("Error creating user", 500)
        logger.debug("Created user %d", user.id)
        return JSONResponse(user.to_dict())

    async def update_user(request: Request) -> JSONResponse:
        payload = parse_user_payload(await request.body())
        if payload is None:
            return _error("Invalid input", 400)

        user_id = parse_user_id(request.path_params["user_id"])
        if user_id is None:
            return _error("User not found after update", 404)

        try:
            await run_in_threadpool(store.update_user, user_id, payload.name, payload.email)
        except StorageError as exc:
            logger.error("update_user failed: %s", exc)
            return _error("Error updating user", 500)

        # Report what was persisted, not what was sent
        try:
            user = await run_in_threadpool(store.find_user, user_id)
        except StorageError as exc:
            logger.error("update_user retrieval failed: %s", exc)
            return _error("User not found after update", 404)
        if user is None:
            return _error("User not found after update", 404)
        return JSONResponse(user.to_dict())

    async def delete_user(request: Request) -> JSONResponse:
        user_id = parse_user_id(request.path_params["user_id"])
        if user_id is None:
            return _error("User not found", 404)

        # Check-then-act: a concurrent delete in between leaves a no-op DELETE
        try:
            existing = await run_in_threadpool(store.find_user, user_id)
        except StorageError as exc:
            logger.error("delete_user select failed: %s", exc)
            return _error("User not found", 404)
        if existing is None:
            return _error("User not found", 404)

        try:
            await run_in_threadpool(store.delete_user, user_id)
        except StorageError as exc:
            logger.error("delete_user failed: %s", exc)
            return _error("Error deleting user", 500)
        logger.debug("Deleted user %d", user_id)
        return JSONResponse({"message": "User deleted"})

    routes = [
        Route(f"{api_prefix}/users", list_users, methods=["GET"]),
        Route(f"{api_prefix}/users", create_user, methods=["POST"]),
        Route(f"{api_prefix}/users/{{user_id}}", get_user, methods=["GET"]),
        Route(f"{api_prefix}/users/{{user_id}}", update_user, methods=["PUT"]),
        Route(f"{api_prefix}/users/{{user_id}}", delete_user, methods=["DELETE"]),
    ]

    middleware = [
        Middleware(CORSHeadersMiddleware),
        Middleware(JSONContentTypeMiddleware),
    ]

    app = Starlette(
        routes=routes,
        middleware=middleware,
        exception_handlers={HTTPException: _http_exception},
    )
    # `/users/` is not a route; answer 404 instead of a 307 to `/users`
    app.router.redirect_slashes = False
    return app
