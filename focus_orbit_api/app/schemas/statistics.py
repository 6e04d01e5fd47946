"""
Pydantic models for per-user activity statistics.
"""

from .base import CamelModel
from .streak import StreakData


class DaySummary(CamelModel):
    date: str
    focus_sessions: int = 0
    focus_minutes: int = 0
    break_sessions: int = 0


class Overview(CamelModel):
    start_date: str
    end_date: str
    focus_sessions: int = 0
    focus_minutes: int = 0
    break_sessions: int = 0
    active_days: int = 0
    streak: StreakData


class GoalProgress(CamelModel):
    id: str
    name: str
    daily_target_sessions: int
    completed_sessions: int
    achieved: bool
