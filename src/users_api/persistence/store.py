"""Parameterized SQL statements against the users table."""

import sqlite3
from typing import Optional

from ..exceptions import StorageError
from .database import UserDB
from .models import User


class UserStore:
    """Reads and writes users through a shared :class:`UserDB`.

    Each method issues exactly one statement. Driver errors are re-raised as
    :class:`~users_api.exceptions.StorageError` so callers never depend on
    ``sqlite3`` directly.
    """

    def __init__(self, db: UserDB) -> None:
        self._db = db

    def list_users(self) -> list[User]:
        """Return every user in whatever order the engine yields them."""
        with self._db.lock:
            try:
                rows = self._db.conn.execute("SELECT id, name, email FROM users").fetchall()
            except sqlite3.Error as exc:
                raise StorageError("list_users", exc) from exc
        return [User.from_row(row) for row in rows]

    def find_user(self, user_id: int) -> Optional[User]:
        """Return the user with ``user_id``, or ``None`` if there is none."""
        with self._db.lock:
            try:
                row = self._db.conn.execute(
                    "SELECT id, name, email FROM users WHERE id = ?", (user_id,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError("find_user", exc, user_id=user_id) from exc

        if row is None:
            return None
        return User.from_row(row)

    def create_user(self, name: str, email: str) -> User:
        """Insert a user and return it with the id storage generated."""
        conn = self._db.conn
        with self._db.lock:
            try:
                cursor = conn.execute(
                    "INSERT INTO users (name, email) VALUES (?, ?)", (name, email)
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError("create_user", exc) from exc
        return User(id=cursor.lastrowid, name=name, email=email)

    def update_user(self, user_id: int, name: str, email: str) -> int:
        """Replace name and email of ``user_id`` unconditionally.

        Returns:
            Number of rows changed (0 when the id does not exist)
        """
        conn = self._db.conn
        with self._db.lock:
            try:
                cursor = conn.execute(
                    "UPDATE users SET name = ?, email = ? WHERE id = ?",
                    (name, email, user_id),
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError("update_user", exc, user_id=user_id) from exc
        return cursor.rowcount

    def delete_user(self, user_id: int) -> int:
        """Delete ``user_id``. Returns the number of rows removed."""
        conn = self._db.conn
        with self._db.lock:
            try:
                cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                raise StorageError("delete_user", exc, user_id=user_id) from exc
        return cursor.rowcount
