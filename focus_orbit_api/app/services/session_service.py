"""
Service layer for the session log.

Completed timer sessions are appended to the ``sessions`` table and
never modified.  The autoincrement row id serves as the monotonic
session id; ``timestamp`` is taken from ``time.time_ns()`` at write
time.  Date strings are caller-local ``YYYY-MM-DD`` values, so range
queries compare them lexically.
"""

import logging
import time
from typing import List, Optional

from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.errors import ValidationError
from focus_orbit_api.app.core.validation import require_date, require_identity, require_positive_int
from focus_orbit_api.app.schemas.session import SessionCompleted, SessionRecord, SessionType
from focus_orbit_api.app.services.streak_service import StreakService


def _session_type(value) -> SessionType:
    try:
        return SessionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in SessionType)
        raise ValidationError(f"sessionType must be one of: {allowed}")


class SessionService:
    """Service for logging and querying timer sessions."""

    @classmethod
    async def log_session(cls, identity: str, duration: int, session_type, date_string: str) -> int:
        """Append a session record and return its id."""
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        require_positive_int(duration, "duration")
        kind = _session_type(session_type)
        require_date(date_string, "dateString")
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO sessions (identity, duration, session_type, date_string, timestamp)"
                " VALUES (?, ?, ?, ?, ?)",
                (identity, duration, kind.value, date_string, time.time_ns()),
            )
            session_id = cursor.lastrowid
        logger.info("Session %s (%s, %ss) logged for %s on %s", session_id, kind.value, duration, identity, date_string)
        return session_id

    @classmethod
    async def get_sessions_by_date_range(
        cls, identity: Optional[str], start_date: str, end_date: str
    ) -> List[SessionRecord]:
        """Return the caller's sessions with ``start_date <= dateString <= end_date``.

        Records come back in the order they were logged.  An inverted
        range simply matches nothing.
        """
        if not identity:
            return []
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, duration, session_type, date_string, timestamp FROM sessions"
                " WHERE identity = ? AND date_string >= ? AND date_string <= ?"
                " ORDER BY id ASC",
                (identity, start_date, end_date),
            ).fetchall()
            return [
                SessionRecord(
                    id=row["id"],
                    duration=row["duration"],
                    session_type=row["session_type"],
                    date_string=row["date_string"],
                    timestamp=row["timestamp"],
                )
                for row in rows
            ]
        finally:
            conn.close()

    @classmethod
    async def clear_all_sessions(cls, identity: str) -> int:
        """Delete every session of the caller.  Returns the number removed."""
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        with get_cursor() as cursor:
            removed = cursor.execute("DELETE FROM sessions WHERE identity = ?", (identity,)).rowcount
        logger.info("Cleared %s sessions for %s", removed, identity)
        return removed

    @classmethod
    async def complete_session(
        cls, identity: str, duration: int, session_type, date_string: str
    ) -> SessionCompleted:
        """Log a session and, for focus sessions, advance the streak.

        ``date_string`` doubles as the caller's "today" for the streak
        transition.  Break sessions leave the streak untouched.
        """
        session_id = await cls.log_session(identity, duration, session_type, date_string)
        if _session_type(session_type) is not SessionType.focus:
            return SessionCompleted(id=session_id)
        transition = await StreakService.record_focus_session(identity, date_string)
        return SessionCompleted(
            id=session_id,
            streak=transition.streak,
            earned_freeze=transition.earned_freeze,
        )
