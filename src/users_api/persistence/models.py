"""Data models for rows of the users table."""

import sqlite3
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    """One persisted user. ``id`` is assigned by storage and never changes."""

    id: int
    name: str
    email: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "User":
        return cls(id=row["id"], name=row["name"], email=row["email"])

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
