"""
Key/value repository backing small serialized records.
"""

from typing import Optional

from .base import BaseRepository


class KeyValueRepository(BaseRepository):
    """
    Repository for the kv_store table.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the raw stored value for ``key``, or None if absent."""
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row['value'] if row else None

    def set(self, key: str, value: str) -> None:
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """, (key, value))
