"""
Pydantic models for the session log.

A session record is appended once per completed timer interval and is
never modified afterwards.  ``duration`` is in seconds; ``timestamp``
is nanoseconds since the epoch, assigned by the server.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, StrictInt

from .base import CamelModel
from .streak import StreakData


class SessionType(str, Enum):
    focus = "focus"
    short_break = "short_break"
    long_break = "long_break"


class SessionCreate(CamelModel):
    duration: StrictInt = Field(..., examples=[1500])
    session_type: SessionType = Field(..., examples=["focus"])
    date_string: str = Field(..., examples=["2026-10-18"])


class SessionRecord(CamelModel):
    id: int
    duration: int
    session_type: SessionType
    date_string: str
    timestamp: int


class SessionLogged(CamelModel):
    id: int


class SessionCompleted(CamelModel):
    """Outcome of logging a session together with its streak effect.

    ``streak`` is ``None`` for break sessions, which never touch the
    streak record.
    """

    id: int
    streak: Optional[StreakData] = None
    earned_freeze: bool = False
