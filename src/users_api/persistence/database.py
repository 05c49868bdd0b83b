"""SQLite-backed users database, opened once per process."""

import sqlite3
import threading
from pathlib import Path
from typing import Optional

from ..exceptions import StorageError, UnsupportedDatabaseError
from ..logging_config import get_logger

logger = get_logger(__name__)

MEMORY = ":memory:"


def resolve_database_path(database_url: str) -> str:
    """Turn a connection string into something ``sqlite3.connect`` accepts.

    Accepted forms::

        sqlite:///relative/users.db    -> relative/users.db
        sqlite:////var/lib/users.db    -> /var/lib/users.db
        sqlite:// or sqlite:///:memory: -> :memory:
        /var/lib/users.db              -> unchanged (bare path)

    Raises:
        UnsupportedDatabaseError: For any other ``scheme://`` URL
    """
    if "://" not in database_url:
        return database_url

    scheme, _, rest = database_url.partition("://")
    if scheme != "sqlite":
        raise UnsupportedDatabaseError(database_url)

    if rest in ("", "/", f"/{MEMORY}"):
        return MEMORY
    # sqlite:/// + path; a fourth slash makes it absolute
    if not rest.startswith("/"):
        raise UnsupportedDatabaseError(database_url)
    return rest[1:]


class UserDB:
    """Owns the single connection to the users database.

    The connection is shared by every request handler. Handlers reach it from
    Starlette's worker threads, so it is opened with
    ``check_same_thread=False`` and callers serialize statements through
    :attr:`lock`.

    Usage::

        with UserDB("sqlite:///users.db") as db:
            store = UserStore(db)
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.path: str = resolve_database_path(database_url)
        self.lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("UserDB is not connected. Use as context manager or call connect().")
        return self._conn

    @property
    def in_memory(self) -> bool:
        return self.path == MEMORY

    # ── lifecycle ─────────────────────────────────────────────────

    def connect(self) -> sqlite3.Connection:
        """Open (or create) the database and ensure the schema.

        Raises:
            StorageError: If the database cannot be opened or the schema
                cannot be created
        """
        try:
            if not self.in_memory:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if not self.in_memory:
                self._conn.execute("PRAGMA journal_mode=WAL")
        except (sqlite3.Error, OSError) as exc:
            self.close()
            raise StorageError("connect", exc) from exc

        try:
            self._migrate()
        except sqlite3.Error as exc:
            self.close()
            raise StorageError("create_schema", exc) from exc

        logger.debug("Users DB connected at %s", self.path)
        return self._conn

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "UserDB":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── schema ────────────────────────────────────────────────────

    def _migrate(self) -> None:
        """Idempotently create the users table."""
        c = self.conn

        # AUTOINCREMENT keeps ids of deleted rows from being handed out again
        c.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id    INTEGER PRIMARY KEY AUTOINCREMENT,
                name  TEXT,
                email TEXT
            )
            """
        )
        c.commit()
