"""HTTP surface of users-api: Starlette app, middleware and request schemas."""

from .app import create_app, parse_user_id
from .schemas import UserPayload

__all__ = ["create_app", "parse_user_id", "UserPayload"]
