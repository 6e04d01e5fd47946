"""
Service layer for streak and freeze bookkeeping.

The stored streak record is a plain last-write-wins row: ``update_streak``
overwrites it with whatever the caller supplies.  The day-to-day
transition (continue, reset, milestone freeze grant) is computed by
:func:`advance_streak`, which callers apply before writing.
``record_focus_session`` is the server-side caller that does exactly
that for one completed focus session.

Freezes are recorded (balance, ``freeze_used_today``) but a lapsed
streak is reset to 1 regardless of them; nothing here spends a freeze
automatically.
"""

import logging
from datetime import date, timedelta
from typing import Optional, Tuple

from focus_orbit_api.app.core.config import settings
from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.errors import ConflictError, ValidationError
from focus_orbit_api.app.core.validation import (
    require_date,
    require_identity,
    require_non_negative_int,
    require_optional_date,
)
from focus_orbit_api.app.schemas.streak import FreezeBalance, StreakData, StreakTransition


def advance_streak(
    streak: StreakData,
    today: str,
    welcome_freezes: Optional[int] = None,
    milestone_days: Optional[int] = None,
    max_freezes: Optional[int] = None,
) -> Tuple[StreakData, bool]:
    """Apply one completed focus session on ``today`` to ``streak``.

    Returns the new record (with ``last_active_date`` set to ``today``)
    and whether a milestone freeze was earned.  The input is not
    modified.

    * A brand-new record (no last active date, zero balance) receives
      the one-time welcome freezes.
    * A second session on the same day changes no counters.
    * Activity yesterday (or never) continues the streak; any older
      date resets it to 1.
    * Each streak length divisible by ``milestone_days`` grants one
      freeze, with the balance capped at ``max_freezes``.
    """
    welcome_freezes = settings.welcome_freezes if welcome_freezes is None else welcome_freezes
    milestone_days = settings.freeze_milestone_days if milestone_days is None else milestone_days
    max_freezes = settings.max_freeze_balance if max_freezes is None else max_freezes

    today = require_date(today, "today")
    yesterday = (date.fromisoformat(today) - timedelta(days=1)).isoformat()
    last_active = streak.last_active_date
    current = streak.current_streak
    longest = streak.longest_streak
    balance = streak.freeze_balance

    if last_active == "" and balance == 0:
        balance = welcome_freezes

    earned_freeze = False
    if last_active != today:
        if last_active == yesterday or last_active == "":
            current = 1 if last_active == "" else current + 1
        else:
            current = 1
        longest = max(longest, current)
        if current > 0 and current % milestone_days == 0:
            earned_freeze = True
            balance = min(balance + 1, max_freezes)

    new_streak = StreakData(
        current_streak=current,
        longest_streak=longest,
        last_active_date=today,
        freeze_balance=balance,
        freeze_used_today=streak.freeze_used_today,
    )
    return new_streak, earned_freeze


class StreakService:
    """Service for streak records and freeze credits."""

    @staticmethod
    def _read(conn, identity: str):
        return conn.execute(
            "SELECT current_streak, longest_streak, last_active_date, freeze_balance,"
            " freeze_used_today, freezes_earned, last_freeze_earned_date"
            " FROM streaks WHERE identity = ?",
            (identity,),
        ).fetchone()

    @staticmethod
    def _to_schema(row) -> StreakData:
        if not row:
            return StreakData()
        return StreakData(
            current_streak=row["current_streak"],
            longest_streak=row["longest_streak"],
            last_active_date=row["last_active_date"],
            freeze_balance=row["freeze_balance"],
            freeze_used_today=bool(row["freeze_used_today"]),
        )

    @classmethod
    async def get_streak(cls, identity: Optional[str]) -> StreakData:
        """Return the streak record, or the all-zero default when absent."""
        if not identity:
            return StreakData()
        conn = get_connection()
        try:
            return cls._to_schema(cls._read(conn, identity))
        finally:
            conn.close()

    @classmethod
    async def update_streak(
        cls,
        identity: str,
        current_streak: int,
        longest_streak: int,
        last_active_date: str,
        freeze_balance: int,
        freeze_used_today: bool,
        expected_last_active_date: Optional[str] = None,
    ) -> StreakData:
        """Overwrite the streak record with the supplied values.

        No merging takes place and ``longest >= current`` is left to the
        caller.  When ``expected_last_active_date`` is given, the write
        is rejected with ``ConflictError`` unless the stored
        ``last_active_date`` (``""`` when absent) equals it.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        require_non_negative_int(current_streak, "currentStreak")
        require_non_negative_int(longest_streak, "longestStreak")
        require_non_negative_int(freeze_balance, "freezeBalance")
        require_optional_date(last_active_date, "lastActiveDate")
        if not isinstance(freeze_used_today, bool):
            raise ValidationError("freezeUsedToday must be a boolean")

        with get_cursor() as cursor:
            if expected_last_active_date is not None:
                row = cls._read(cursor, identity)
                stored = row["last_active_date"] if row else ""
                if stored != expected_last_active_date:
                    raise ConflictError(
                        f"Streak was modified concurrently (lastActiveDate is {stored!r})"
                    )
            cursor.execute(
                "INSERT INTO streaks"
                " (identity, current_streak, longest_streak, last_active_date, freeze_balance, freeze_used_today)"
                " VALUES (?, ?, ?, ?, ?, ?)"
                " ON CONFLICT(identity) DO UPDATE SET"
                " current_streak = excluded.current_streak,"
                " longest_streak = excluded.longest_streak,"
                " last_active_date = excluded.last_active_date,"
                " freeze_balance = excluded.freeze_balance,"
                " freeze_used_today = excluded.freeze_used_today",
                (
                    identity,
                    current_streak,
                    longest_streak,
                    last_active_date,
                    freeze_balance,
                    int(freeze_used_today),
                ),
            )
        logger.info(
            "Streak for %s set to current=%s longest=%s last=%s freezes=%s",
            identity,
            current_streak,
            longest_streak,
            last_active_date,
            freeze_balance,
        )
        return StreakData(
            current_streak=current_streak,
            longest_streak=longest_streak,
            last_active_date=last_active_date,
            freeze_balance=freeze_balance,
            freeze_used_today=freeze_used_today,
        )

    @classmethod
    async def use_freeze(cls, identity: str) -> StreakData:
        """Spend one freeze and mark ``freeze_used_today``.

        Raises ``ValidationError`` when the balance is zero.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        with get_cursor() as cursor:
            row = cls._read(cursor, identity)
            balance = row["freeze_balance"] if row else 0
            if balance <= 0:
                raise ValidationError("No freezes available")
            cursor.execute(
                "UPDATE streaks SET freeze_balance = freeze_balance - 1, freeze_used_today = 1"
                " WHERE identity = ?",
                (identity,),
            )
            streak = cls._to_schema(cls._read(cursor, identity))
        logger.info("Freeze used by %s, %s left", identity, streak.freeze_balance)
        return streak

    @classmethod
    async def earn_freeze(cls, identity: str, today: str) -> FreezeBalance:
        """Record that a milestone freeze was earned.

        Increments the lifetime ``freezes_earned`` counter at most once per
        calendar day; the balance itself is granted by
        :func:`advance_streak`.  ``today`` is the caller-local date; the
        server clock is never consulted.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        today = require_date(today, "today")
        with get_cursor() as cursor:
            cursor.execute("INSERT OR IGNORE INTO streaks (identity) VALUES (?)", (identity,))
            updated = cursor.execute(
                "UPDATE streaks SET freezes_earned = freezes_earned + 1, last_freeze_earned_date = ?"
                " WHERE identity = ? AND last_freeze_earned_date != ?",
                (today, identity, today),
            ).rowcount
            row = cls._read(cursor, identity)
        if updated:
            logger.info("Freeze earned by %s on %s", identity, today)
        return FreezeBalance(freeze_balance=row["freeze_balance"], freezes_earned=row["freezes_earned"])

    @classmethod
    async def get_freeze_balance(cls, identity: Optional[str]) -> int:
        """Return the number of freezes available, 0 when no record exists."""
        if not identity:
            return 0
        conn = get_connection()
        try:
            row = cls._read(conn, identity)
            return row["freeze_balance"] if row else 0
        finally:
            conn.close()

    @classmethod
    async def record_focus_session(cls, identity: str, today: str) -> StreakTransition:
        """Advance the caller's streak for a focus session completed on ``today``.

        Reads the current record, applies :func:`advance_streak`, writes
        the result with ``update_streak`` and, if a milestone was reached,
        calls ``earn_freeze``.  A failing ``earn_freeze`` is logged and
        ignored; the streak write stands.
        """
        logger = logging.getLogger(__name__)
        identity = require_identity(identity)
        current = await cls.get_streak(identity)
        new_streak, earned_freeze = advance_streak(current, today)
        await cls.update_streak(
            identity,
            new_streak.current_streak,
            new_streak.longest_streak,
            new_streak.last_active_date,
            new_streak.freeze_balance,
            new_streak.freeze_used_today,
        )
        if earned_freeze:
            try:
                await cls.earn_freeze(identity, today)
            except Exception:
                logger.warning("earn_freeze failed for %s after milestone", identity, exc_info=True)
        return StreakTransition(streak=new_streak, earned_freeze=earned_freeze)
