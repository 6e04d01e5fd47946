"""
Service layer for daily goals.

Goal ids are chosen by the client and are unique per identity; two
identities may use the same id.  Goals are listed in the order they
were added (the ``position`` column), which stays stable across
updates.  Deleting an id that does not exist is a silent no-op.
"""

import logging
from typing import List, Optional

from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.errors import DuplicateError, NotFoundError, ValidationError
from focus_orbit_api.app.core.validation import require_identity, require_name, require_positive_int
from focus_orbit_api.app.schemas.goal import Goal


def _require_goal_id(goal_id) -> str:
    if not isinstance(goal_id, str) or not goal_id.strip():
        raise ValidationError("Goal id must not be empty")
    return goal_id


class GoalService:
    """Service for managing the caller's goals."""

    @classmethod
    async def list_goals(cls, identity: Optional[str]) -> List[Goal]:
        if not identity:
            return []
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT id, name, daily_target_sessions, active FROM goals"
                " WHERE identity = ? ORDER BY position ASC",
                (identity,),
            ).fetchall()
            return [
                Goal(
                    id=row["id"],
                    name=row["name"],
                    daily_target_sessions=row["daily_target_sessions"],
                    active=bool(row["active"]),
                )
                for row in rows
            ]
        finally:
            conn.close()

    @classmethod
    async def add_goal(cls, identity: str, goal_id: str, name: str, daily_target_sessions: int) -> Goal:
        """Create an active goal.

        Raises ``DuplicateError`` if the caller already has a goal with
        this id; the existing goal is not modified.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        goal_id = _require_goal_id(goal_id)
        name = require_name(name)
        require_positive_int(daily_target_sessions, "dailyTargetSessions")
        with get_cursor() as cursor:
            exists = cursor.execute(
                "SELECT 1 FROM goals WHERE identity = ? AND id = ?", (identity, goal_id)
            ).fetchone()
            if exists:
                raise DuplicateError(f"Goal {goal_id} already exists")
            position = cursor.execute(
                "SELECT COALESCE(MAX(position), 0) + 1 FROM goals WHERE identity = ?", (identity,)
            ).fetchone()[0]
            cursor.execute(
                "INSERT INTO goals (identity, id, name, daily_target_sessions, active, position)"
                " VALUES (?, ?, ?, ?, 1, ?)",
                (identity, goal_id, name, daily_target_sessions, position),
            )
        logger.info("Goal %s added for %s", goal_id, identity)
        return Goal(id=goal_id, name=name, daily_target_sessions=daily_target_sessions, active=True)

    @classmethod
    async def update_goal(
        cls,
        identity: str,
        goal_id: str,
        name: str,
        daily_target_sessions: int,
        active: bool,
    ) -> Goal:
        """Replace name, target and active flag of an existing goal.

        Raises ``NotFoundError`` if the caller has no goal with this id.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        name = require_name(name)
        require_positive_int(daily_target_sessions, "dailyTargetSessions")
        if not isinstance(active, bool):
            raise ValidationError("active must be a boolean")
        with get_cursor() as cursor:
            updated = cursor.execute(
                "UPDATE goals SET name = ?, daily_target_sessions = ?, active = ?"
                " WHERE identity = ? AND id = ?",
                (name, daily_target_sessions, int(active), identity, goal_id),
            ).rowcount
            if not updated:
                raise NotFoundError(f"Goal {goal_id} not found")
        logger.info("Goal %s updated for %s", goal_id, identity)
        return Goal(id=goal_id, name=name, daily_target_sessions=daily_target_sessions, active=active)

    @classmethod
    async def delete_goal(cls, identity: str, goal_id: str) -> bool:
        """Delete a goal.  Returns whether a goal was actually removed."""
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        with get_cursor() as cursor:
            removed = cursor.execute(
                "DELETE FROM goals WHERE identity = ? AND id = ?", (identity, goal_id)
            ).rowcount
        if removed:
            logger.info("Goal %s deleted for %s", goal_id, identity)
        else:
            logger.debug("Goal %s not present for %s, nothing deleted", goal_id, identity)
        return bool(removed)
