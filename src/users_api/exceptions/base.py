"""Base exception for users-api."""

from typing import Dict


class UsersApiError(Exception):
    """Base exception for all users-api errors.

    Keyword arguments are the error's context. They are kept in
    :attr:`details` as strings, with ``None`` values omitted, and rendered
    after the message as ``key=value`` pairs so a single log line names
    the operation and the row involved.
    """

    def __init__(self, message: str, **context: object):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = {
            key: str(value) for key, value in context.items() if value is not None
        }

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
