"""
Pydantic models for streak and freeze bookkeeping.
"""

from typing import Optional

from pydantic import Field, StrictBool, StrictInt

from .base import CamelModel


class StreakData(CamelModel):
    """Consecutive-day activity record of one identity.

    ``last_active_date`` is a ``YYYY-MM-DD`` string, or empty when the
    identity has never completed a focus session.
    """

    current_streak: StrictInt = 0
    longest_streak: StrictInt = 0
    last_active_date: str = ""
    freeze_balance: StrictInt = 0
    freeze_used_today: StrictBool = False


class StreakUpdate(StreakData):
    """Full replacement of a streak record.

    When ``expected_last_active_date`` is supplied the write only
    happens if the stored ``last_active_date`` still equals it.
    """

    expected_last_active_date: Optional[str] = Field(
        None,
        description="Optional guard: reject the write if the stored lastActiveDate differs",
    )


class FreezeBalance(CamelModel):
    freeze_balance: int
    freezes_earned: int = 0


class StreakTransition(CamelModel):
    """Result of applying one completed focus session to a streak."""

    streak: StreakData
    earned_freeze: bool = False


class FocusDay(CamelModel):
    today: str = Field(..., examples=["2026-10-18"], description="Caller-local date of the completed session")
