"""
Database configuration and schema management for Retro Snake.

Scores live in a small SQLite key/value table so the browser's
"one JSON record under a fixed key" model carries over unchanged.
"""

import os
import sqlite3
from pathlib import Path
from typing import Optional


def get_database_path(db_path: Optional[str] = None) -> str:
    """
    Determine the SQLite database path.

    Returns:
        Path to the SQLite database file.
        - explicit ``db_path`` argument if given
        - SNAKE_DB_PATH environment variable if set
        - backend/snake.db otherwise
    """
    if db_path:
        return db_path

    env_path = os.getenv('SNAKE_DB_PATH')
    if env_path:
        return env_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'snake.db')


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Open a connection to the snake database, creating its directory if
    needed. Rows come back as sqlite3.Row so columns can be read by name.
    """
    path = get_database_path(db_path)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: Optional[str] = None) -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection(db_path)
    try:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    init_database()
    print(f"Leaderboard database initialized at {get_database_path()}")
