"""
Service layer for user profiles.

A profile is created on first save and overwritten wholesale on every
later save.  Any caller may read any profile (the web client shows
other users' names), but only the owner writes it.
"""

import logging
from typing import Optional

from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.validation import require_identity, require_name
from focus_orbit_api.app.schemas.user import UserProfile


class ProfileService:
    """Service for reading and saving user profiles."""

    @classmethod
    async def get_profile(cls, identity: Optional[str]) -> Optional[UserProfile]:
        """Return the profile of ``identity`` or ``None`` if none was saved."""
        if not identity:
            return None
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT name, email FROM profiles WHERE identity = ?", (identity,)
            ).fetchone()
            if not row:
                return None
            return UserProfile(name=row["name"], email=row["email"])
        finally:
            conn.close()

    @classmethod
    async def save_profile(cls, identity: str, profile: UserProfile) -> UserProfile:
        """Insert or replace the caller's profile.

        The name is stored trimmed; an empty name raises
        ``ValidationError``.  An empty email is stored as absent.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        name = require_name(profile.name)
        email = profile.email.strip() if profile.email and profile.email.strip() else None
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO profiles (identity, name, email) VALUES (?, ?, ?)"
                " ON CONFLICT(identity) DO UPDATE SET name = excluded.name, email = excluded.email,"
                " updated_at = CURRENT_TIMESTAMP",
                (identity, name, email),
            )
        logger.info("Profile saved for %s", identity)
        return UserProfile(name=name, email=email)
