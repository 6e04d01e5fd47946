import asyncio

import pytest

from focus_orbit_api.app.core.errors import ConflictError, NoIdentityError, ValidationError
from focus_orbit_api.app.schemas.streak import StreakData
from focus_orbit_api.app.services.streak_service import StreakService


def test_default_streak_when_absent() -> None:
    assert asyncio.run(StreakService.get_streak("alice")) == StreakData()
    assert asyncio.run(StreakService.get_streak(None)) == StreakData()


def test_update_streak_is_last_write_wins() -> None:
    asyncio.run(StreakService.update_streak("alice", 5, 9, "2026-03-10", 3, False))
    asyncio.run(StreakService.update_streak("alice", 1, 2, "2026-03-11", 0, True))
    streak = asyncio.run(StreakService.get_streak("alice"))
    assert streak == StreakData(
        current_streak=1,
        longest_streak=2,
        last_active_date="2026-03-11",
        freeze_balance=0,
        freeze_used_today=True,
    )


def test_update_streak_rejects_bad_values_without_writing() -> None:
    asyncio.run(StreakService.update_streak("alice", 2, 2, "2026-03-10", 1, False))
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.update_streak("alice", -1, 2, "2026-03-10", 1, False))
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.update_streak("alice", 1, 2, "yesterday", 1, False))
    assert asyncio.run(StreakService.get_streak("alice")).current_streak == 2


def test_update_streak_requires_identity() -> None:
    with pytest.raises(NoIdentityError):
        asyncio.run(StreakService.update_streak(None, 1, 1, "2026-03-10", 0, False))


def test_expected_last_active_date_guard() -> None:
    asyncio.run(
        StreakService.update_streak("alice", 1, 1, "2026-03-10", 2, False, expected_last_active_date="")
    )
    with pytest.raises(ConflictError):
        asyncio.run(
            StreakService.update_streak("alice", 9, 9, "2026-03-11", 2, False, expected_last_active_date="")
        )
    asyncio.run(
        StreakService.update_streak("alice", 2, 2, "2026-03-11", 2, False, expected_last_active_date="2026-03-10")
    )
    assert asyncio.run(StreakService.get_streak("alice")).current_streak == 2


def test_use_freeze_fails_on_zero_balance() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.use_freeze("alice"))
    asyncio.run(StreakService.update_streak("alice", 3, 3, "2026-03-10", 0, False))
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.use_freeze("alice"))


def test_use_freeze_decrements_and_flags() -> None:
    asyncio.run(StreakService.update_streak("alice", 3, 3, "2026-03-10", 2, False))
    streak = asyncio.run(StreakService.use_freeze("alice"))
    assert streak.freeze_balance == 1
    assert streak.freeze_used_today is True
    assert asyncio.run(StreakService.get_freeze_balance("alice")) == 1


def test_earn_freeze_counts_once_per_day_and_leaves_balance() -> None:
    asyncio.run(StreakService.update_streak("alice", 21, 21, "2026-03-10", 3, False))
    first = asyncio.run(StreakService.earn_freeze("alice", "2026-03-10"))
    second = asyncio.run(StreakService.earn_freeze("alice", "2026-03-10"))
    third = asyncio.run(StreakService.earn_freeze("alice", "2026-03-11"))
    assert first.freezes_earned == 1
    assert second.freezes_earned == 1
    assert third.freezes_earned == 2
    assert third.freeze_balance == 3


def test_earn_freeze_requires_caller_date() -> None:
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.earn_freeze("alice", None))
    with pytest.raises(ValidationError):
        asyncio.run(StreakService.earn_freeze("alice", ""))
    assert asyncio.run(StreakService.get_streak("alice")) == StreakData()


def test_earn_freeze_does_not_disturb_streak_defaults() -> None:
    asyncio.run(StreakService.earn_freeze("bob", "2026-03-10"))
    assert asyncio.run(StreakService.get_streak("bob")) == StreakData()


def test_record_focus_session_runs_transition() -> None:
    first = asyncio.run(StreakService.record_focus_session("alice", "2026-03-10"))
    again = asyncio.run(StreakService.record_focus_session("alice", "2026-03-10"))
    next_day = asyncio.run(StreakService.record_focus_session("alice", "2026-03-11"))
    assert first.streak.current_streak == 1
    assert first.streak.freeze_balance == 2
    assert again.streak.current_streak == 1
    assert next_day.streak.current_streak == 2
    assert asyncio.run(StreakService.get_streak("alice")).last_active_date == "2026-03-11"


def test_lapsed_streak_resets_but_keeps_longest() -> None:
    asyncio.run(StreakService.update_streak("alice", 5, 5, "2026-03-10", 2, False))
    result = asyncio.run(StreakService.record_focus_session("alice", "2026-03-14"))
    assert result.streak.current_streak == 1
    assert result.streak.longest_streak == 5


def test_milestone_records_earned_freeze() -> None:
    asyncio.run(StreakService.update_streak("alice", 20, 20, "2026-03-09", 2, False))
    result = asyncio.run(StreakService.record_focus_session("alice", "2026-03-10"))
    assert result.earned_freeze is True
    assert asyncio.run(StreakService.get_freeze_balance("alice")) == 3
    repeat = asyncio.run(StreakService.earn_freeze("alice", "2026-03-10"))
    assert repeat.freezes_earned == 1
    assert repeat.freeze_balance == 3


def test_failing_earn_freeze_does_not_roll_back(monkeypatch: pytest.MonkeyPatch) -> None:
    async def broken(cls, identity, today=None):
        raise RuntimeError("counter unavailable")

    monkeypatch.setattr(StreakService, "earn_freeze", classmethod(broken))
    asyncio.run(StreakService.update_streak("alice", 20, 20, "2026-03-09", 2, False))
    result = asyncio.run(StreakService.record_focus_session("alice", "2026-03-10"))
    assert result.earned_freeze is True
    stored = asyncio.run(StreakService.get_streak("alice"))
    assert stored.current_streak == 21
    assert stored.freeze_balance == 3


def test_streaks_are_partitioned_by_identity() -> None:
    asyncio.run(StreakService.record_focus_session("alice", "2026-03-10"))
    assert asyncio.run(StreakService.get_streak("bob")) == StreakData()
