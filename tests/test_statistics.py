import asyncio

import pytest

from focus_orbit_api.app.core.errors import ValidationError
from focus_orbit_api.app.services.goal_service import GoalService
from focus_orbit_api.app.services.session_service import SessionService
from focus_orbit_api.app.services.statistics_service import StatisticsService


def _log(duration: int, kind: str, day: str, identity: str = "alice") -> None:
    asyncio.run(SessionService.log_session(identity, duration, kind, day))


def test_daily_summary_fills_empty_days() -> None:
    _log(1500, "focus", "2026-03-10")
    _log(1530, "focus", "2026-03-10")
    _log(300, "short_break", "2026-03-10")
    _log(1500, "focus", "2026-03-12")
    days = asyncio.run(StatisticsService.daily_summary("alice", "2026-03-10", "2026-03-12"))
    assert [d.date for d in days] == ["2026-03-10", "2026-03-11", "2026-03-12"]
    assert (days[0].focus_sessions, days[0].focus_minutes, days[0].break_sessions) == (2, 51, 1)
    assert (days[1].focus_sessions, days[1].focus_minutes, days[1].break_sessions) == (0, 0, 0)
    assert days[2].focus_minutes == 25


def test_daily_summary_ignores_other_identities() -> None:
    _log(1500, "focus", "2026-03-10", identity="bob")
    days = asyncio.run(StatisticsService.daily_summary("alice", "2026-03-10", "2026-03-10"))
    assert days[0].focus_sessions == 0


def test_daily_summary_range_limits() -> None:
    assert asyncio.run(StatisticsService.daily_summary("alice", "2026-03-12", "2026-03-10")) == []
    with pytest.raises(ValidationError):
        asyncio.run(StatisticsService.daily_summary("alice", "2024-01-01", "2026-01-01"))
    with pytest.raises(ValidationError):
        asyncio.run(StatisticsService.daily_summary("alice", "2026-02-30", "2026-03-01"))


def test_overview_totals() -> None:
    _log(1500, "focus", "2026-03-10")
    _log(900, "long_break", "2026-03-11")
    _log(3000, "focus", "2026-03-12")
    overview = asyncio.run(StatisticsService.overview("alice", "2026-03-01", "2026-03-31"))
    assert overview.focus_sessions == 2
    assert overview.focus_minutes == 75
    assert overview.break_sessions == 1
    assert overview.active_days == 2
    assert overview.streak.current_streak == 0


def test_goal_progress_counts_focus_sessions_for_active_goals() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 2))
    asyncio.run(GoalService.add_goal("alice", "g-2", "Marathon", 5))
    asyncio.run(GoalService.add_goal("alice", "g-3", "Paused", 1))
    asyncio.run(GoalService.update_goal("alice", "g-3", "Paused", 1, False))
    _log(1500, "focus", "2026-03-10")
    _log(1500, "focus", "2026-03-10")
    _log(300, "short_break", "2026-03-10")
    _log(1500, "focus", "2026-03-11")
    progress = asyncio.run(StatisticsService.goal_progress("alice", "2026-03-10"))
    assert [(p.id, p.completed_sessions, p.achieved) for p in progress] == [
        ("g-1", 2, True),
        ("g-2", 2, False),
    ]
