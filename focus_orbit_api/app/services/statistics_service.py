"""
Service layer for per-user statistics.

Aggregates are computed from the session log in Python: the day list is
built first (so days without sessions appear with zeros) and the
caller's sessions in the range are folded into it.  All queries are
read-only and scoped to one identity.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

from focus_orbit_api.app.core.errors import ValidationError
from focus_orbit_api.app.core.validation import require_date
from focus_orbit_api.app.schemas.session import SessionType
from focus_orbit_api.app.schemas.statistics import DaySummary, GoalProgress, Overview
from focus_orbit_api.app.services.goal_service import GoalService
from focus_orbit_api.app.services.session_service import SessionService
from focus_orbit_api.app.services.streak_service import StreakService


MAX_RANGE_DAYS = 366


def _minutes(seconds: int) -> int:
    # Half a minute rounds up.
    return (seconds + 30) // 60


def _days(start_date: str, end_date: str) -> List[str]:
    start = date.fromisoformat(require_date(start_date, "start"))
    end = date.fromisoformat(require_date(end_date, "end"))
    if start > end:
        return []
    span = (end - start).days + 1
    if span > MAX_RANGE_DAYS:
        raise ValidationError(f"Date range must not exceed {MAX_RANGE_DAYS} days")
    return [(start + timedelta(days=i)).isoformat() for i in range(span)]


class StatisticsService:
    """Service providing activity aggregates for one identity."""

    @classmethod
    async def daily_summary(cls, identity: Optional[str], start_date: str, end_date: str) -> List[DaySummary]:
        """Return one summary per day of the inclusive range, oldest first."""
        days = _days(start_date, end_date)
        if not days:
            return []
        summaries: Dict[str, DaySummary] = {d: DaySummary(date=d) for d in days}
        sessions = await SessionService.get_sessions_by_date_range(identity, days[0], days[-1])
        for record in sessions:
            summary = summaries.get(record.date_string)
            if summary is None:
                continue
            if record.session_type is SessionType.focus:
                summary.focus_sessions += 1
                summary.focus_minutes += _minutes(record.duration)
            else:
                summary.break_sessions += 1
        return list(summaries.values())

    @classmethod
    async def overview(cls, identity: Optional[str], start_date: str, end_date: str) -> Overview:
        """Totals over the range plus the current streak record."""
        days = await cls.daily_summary(identity, start_date, end_date)
        streak = await StreakService.get_streak(identity)
        return Overview(
            start_date=start_date,
            end_date=end_date,
            focus_sessions=sum(d.focus_sessions for d in days),
            focus_minutes=sum(d.focus_minutes for d in days),
            break_sessions=sum(d.break_sessions for d in days),
            active_days=sum(1 for d in days if d.focus_sessions > 0),
            streak=streak,
        )

    @classmethod
    async def goal_progress(cls, identity: Optional[str], on_date: str) -> List[GoalProgress]:
        """Compare focus sessions on ``on_date`` with each active goal's target."""
        require_date(on_date, "date")
        goals = [g for g in await GoalService.list_goals(identity) if g.active]
        if not goals:
            return []
        sessions = await SessionService.get_sessions_by_date_range(identity, on_date, on_date)
        completed = sum(1 for s in sessions if s.session_type is SessionType.focus)
        return [
            GoalProgress(
                id=goal.id,
                name=goal.name,
                daily_target_sessions=goal.daily_target_sessions,
                completed_sessions=completed,
                achieved=completed >= goal.daily_target_sessions,
            )
            for goal in goals
        ]
