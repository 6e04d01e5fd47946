"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  Every table is keyed by ``identity``: no row refers to
another identity's data.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS profiles (
            identity TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS user_settings (
            identity TEXT PRIMARY KEY,
            focus_duration INTEGER NOT NULL,
            short_break_duration INTEGER NOT NULL,
            long_break_duration INTEGER NOT NULL,
            long_break_interval INTEGER NOT NULL
        );

        CREATE TABLE IF NOT EXISTS streaks (
            identity TEXT PRIMARY KEY,
            current_streak INTEGER NOT NULL DEFAULT 0,
            longest_streak INTEGER NOT NULL DEFAULT 0,
            last_active_date TEXT NOT NULL DEFAULT '',
            freeze_balance INTEGER NOT NULL DEFAULT 0,
            freeze_used_today INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            identity TEXT NOT NULL,
            duration INTEGER NOT NULL,
            session_type TEXT NOT NULL,
            date_string TEXT NOT NULL,
            timestamp INTEGER NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_sessions_identity_date ON sessions (identity, date_string);

        CREATE TABLE IF NOT EXISTS goals (
            identity TEXT NOT NULL,
            id TEXT NOT NULL,
            name TEXT NOT NULL,
            daily_target_sessions INTEGER NOT NULL,
            active INTEGER NOT NULL DEFAULT 1,
            position INTEGER NOT NULL,
            PRIMARY KEY (identity, id)
        );

        CREATE TABLE IF NOT EXISTS user_roles (
            identity TEXT PRIMARY KEY,
            role TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: lifetime freeze counter maintained by earnFreeze.  The
    # date column makes repeated calls on one day a no-op.
    (
        2,
        """
        ALTER TABLE streaks ADD COLUMN freezes_earned INTEGER NOT NULL DEFAULT 0;
        ALTER TABLE streaks ADD COLUMN last_freeze_earned_date TEXT NOT NULL DEFAULT '';
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # focus_orbit_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with name-addressable rows."""
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits and closes the connection on exit.

    On error the transaction is rolled back so a failed mutation leaves
    no partial write behind.
    """
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS`` in order.  If you add a migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
