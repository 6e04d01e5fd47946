"""
Service layer for per-user timer settings.

Settings are read with a get-or-default lookup: an identity that never
saved settings (or an anonymous caller) gets ``DEFAULT_SETTINGS``.  The
defaults are never written to the table.
"""

import logging
from typing import Optional

from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.validation import require_identity, require_positive_int
from focus_orbit_api.app.schemas.settings import UserSettings


DEFAULT_SETTINGS = UserSettings(
    focus_duration=25,
    short_break_duration=5,
    long_break_duration=15,
    long_break_interval=4,
)


class SettingsService:
    """Service for managing timer settings."""

    @classmethod
    async def get_settings(cls, identity: Optional[str]) -> UserSettings:
        """Return stored settings or the defaults; never fails."""
        if not identity:
            return DEFAULT_SETTINGS.model_copy()
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT focus_duration, short_break_duration, long_break_duration, long_break_interval"
                " FROM user_settings WHERE identity = ?",
                (identity,),
            ).fetchone()
            if not row:
                return DEFAULT_SETTINGS.model_copy()
            return UserSettings(
                focus_duration=row["focus_duration"],
                short_break_duration=row["short_break_duration"],
                long_break_duration=row["long_break_duration"],
                long_break_interval=row["long_break_interval"],
            )
        finally:
            conn.close()

    @classmethod
    async def set_settings(
        cls,
        identity: str,
        focus_duration: int,
        short_break_duration: int,
        long_break_duration: int,
        long_break_interval: int,
    ) -> UserSettings:
        """Replace the caller's settings.

        All four values must be positive integers; otherwise
        ``ValidationError`` is raised and the stored record is left as
        it was.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        values = (
            require_positive_int(focus_duration, "focusDuration"),
            require_positive_int(short_break_duration, "shortBreakDuration"),
            require_positive_int(long_break_duration, "longBreakDuration"),
            require_positive_int(long_break_interval, "longBreakInterval"),
        )
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO user_settings"
                " (identity, focus_duration, short_break_duration, long_break_duration, long_break_interval)"
                " VALUES (?, ?, ?, ?, ?)"
                " ON CONFLICT(identity) DO UPDATE SET"
                " focus_duration = excluded.focus_duration,"
                " short_break_duration = excluded.short_break_duration,"
                " long_break_duration = excluded.long_break_duration,"
                " long_break_interval = excluded.long_break_interval",
                (identity, *values),
            )
        logger.info("Settings for %s updated: %s", identity, values)
        return UserSettings(
            focus_duration=values[0],
            short_break_duration=values[1],
            long_break_duration=values[2],
            long_break_interval=values[3],
        )
