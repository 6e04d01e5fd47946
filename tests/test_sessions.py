import asyncio

import pytest

from focus_orbit_api.app.core.errors import NoIdentityError, ValidationError
from focus_orbit_api.app.schemas.session import SessionType
from focus_orbit_api.app.services.session_service import SessionService
from focus_orbit_api.app.services.streak_service import StreakService


def _log(identity: str, duration: int, kind: str, day: str) -> int:
    return asyncio.run(SessionService.log_session(identity, duration, kind, day))


def test_log_session_assigns_increasing_ids_and_timestamp() -> None:
    first = _log("alice", 1500, "focus", "2026-03-10")
    second = _log("alice", 300, "short_break", "2026-03-10")
    assert second > first
    records = asyncio.run(SessionService.get_sessions_by_date_range("alice", "2026-03-10", "2026-03-10"))
    assert [r.id for r in records] == [first, second]
    assert records[0].session_type is SessionType.focus
    assert records[0].timestamp > 0
    assert records[0].timestamp <= records[1].timestamp


def test_range_is_inclusive_and_preserves_logging_order() -> None:
    _log("alice", 1500, "focus", "2026-03-12")
    _log("alice", 1500, "focus", "2026-03-09")
    _log("alice", 900, "long_break", "2026-03-10")
    _log("alice", 1500, "focus", "2026-03-13")
    records = asyncio.run(SessionService.get_sessions_by_date_range("alice", "2026-03-10", "2026-03-12"))
    assert [r.date_string for r in records] == ["2026-03-12", "2026-03-10"]


def test_inverted_or_empty_range_returns_nothing() -> None:
    _log("alice", 1500, "focus", "2026-03-10")
    assert asyncio.run(SessionService.get_sessions_by_date_range("alice", "2026-03-12", "2026-03-01")) == []
    assert asyncio.run(SessionService.get_sessions_by_date_range("alice", "2026-04-01", "2026-04-30")) == []
    assert asyncio.run(SessionService.get_sessions_by_date_range(None, "2026-03-01", "2026-03-31")) == []


@pytest.mark.parametrize(
    "duration, kind, day",
    [(0, "focus", "2026-03-10"), (-5, "focus", "2026-03-10"), (60, "nap", "2026-03-10"), (60, "focus", "2026-3-10")],
)
def test_invalid_sessions_rejected(duration, kind, day) -> None:
    with pytest.raises(ValidationError):
        _log("alice", duration, kind, day)
    assert asyncio.run(SessionService.get_sessions_by_date_range("alice", "2000-01-01", "2099-12-31")) == []


def test_log_session_requires_identity() -> None:
    with pytest.raises(NoIdentityError):
        _log(None, 1500, "focus", "2026-03-10")


def test_clear_all_sessions_only_touches_caller() -> None:
    _log("alice", 1500, "focus", "2026-03-10")
    _log("alice", 1500, "focus", "2026-03-11")
    _log("bob", 1500, "focus", "2026-03-10")
    assert asyncio.run(SessionService.clear_all_sessions("alice")) == 2
    assert asyncio.run(SessionService.get_sessions_by_date_range("alice", "2026-03-01", "2026-03-31")) == []
    assert len(asyncio.run(SessionService.get_sessions_by_date_range("bob", "2026-03-01", "2026-03-31"))) == 1


def test_complete_focus_session_advances_streak() -> None:
    result = asyncio.run(SessionService.complete_session("alice", 1500, "focus", "2026-03-10"))
    assert result.streak.current_streak == 1
    assert result.streak.freeze_balance == 2
    assert asyncio.run(StreakService.get_streak("alice")).last_active_date == "2026-03-10"


def test_complete_break_session_leaves_streak() -> None:
    result = asyncio.run(SessionService.complete_session("alice", 300, "short_break", "2026-03-10"))
    assert result.streak is None
    assert asyncio.run(StreakService.get_streak("alice")).current_streak == 0
