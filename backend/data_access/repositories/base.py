"""
Shared SQLite plumbing for the repositories.

Each operation opens its own short-lived connection; the schema is created
lazily the first time a repository touches the database.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator, Optional, Tuple

from database import get_connection, init_database

ConnectionAndCursor = Tuple[sqlite3.Connection, sqlite3.Cursor]


class BaseRepository:
    """
    Base class for repositories over the snake database.

    Subclasses run their queries inside ``self.connection()`` (writes) or
    ``self.read_connection()`` (reads).
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            init_database(self.db_path)
            self._schema_ready = True

    def _open(self) -> ConnectionAndCursor:
        self._ensure_schema()
        conn = get_connection(self.db_path)
        return conn, conn.cursor()

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[ConnectionAndCursor, None, None]:
        """
        Yield ``(conn, cursor)`` for a write.

        The transaction is committed when the block exits cleanly (unless
        ``auto_commit`` is False) and rolled back if it raises.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        """
        conn, cursor = self._open()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[ConnectionAndCursor, None, None]:
        """Yield ``(conn, cursor)`` for a query; nothing is committed."""
        conn, cursor = self._open()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()
