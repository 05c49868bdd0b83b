"""Storage exceptions raised by the users table store."""

from typing import Optional

from .base import UsersApiError


class StorageError(UsersApiError):
    """A statement against the users database failed.

    Always raised ``from`` the underlying driver error so the original
    traceback survives in the logs.
    """

    def __init__(self, operation: str, cause: BaseException, user_id: Optional[int] = None):
        super().__init__(
            f"Storage operation failed: {operation}",
            operation=operation,
            cause=cause,
            user_id=user_id,
        )
        self.operation = operation
        self.cause = cause
        self.user_id = user_id
