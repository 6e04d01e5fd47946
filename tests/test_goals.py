import asyncio

import pytest

from focus_orbit_api.app.core.errors import DuplicateError, NotFoundError, ValidationError
from focus_orbit_api.app.schemas.goal import Goal
from focus_orbit_api.app.services.goal_service import GoalService


def _goals(identity: str) -> list[Goal]:
    return asyncio.run(GoalService.list_goals(identity))


def test_add_and_list_in_insertion_order() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-2", "Reading", 2))
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    goals = _goals("alice")
    assert [g.id for g in goals] == ["g-2", "g-1"]
    assert all(g.active for g in goals)


def test_duplicate_id_fails_without_mutation() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    with pytest.raises(DuplicateError):
        asyncio.run(GoalService.add_goal("alice", "g-1", "Something else", 9))
    assert _goals("alice") == [Goal(id="g-1", name="Deep work", daily_target_sessions=4, active=True)]


def test_same_id_allowed_for_other_identity() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    asyncio.run(GoalService.add_goal("bob", "g-1", "Guitar", 1))
    assert _goals("bob")[0].name == "Guitar"


def test_update_replaces_fields_and_keeps_position() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    asyncio.run(GoalService.add_goal("alice", "g-2", "Reading", 2))
    asyncio.run(GoalService.update_goal("alice", "g-1", "Deep work (am)", 3, False))
    goals = _goals("alice")
    assert goals[0] == Goal(id="g-1", name="Deep work (am)", daily_target_sessions=3, active=False)
    assert goals[1].id == "g-2"


def test_update_missing_goal_fails() -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(GoalService.update_goal("alice", "nope", "X", 1, True))


def test_update_cannot_reach_other_identity() -> None:
    asyncio.run(GoalService.add_goal("bob", "g-1", "Guitar", 1))
    with pytest.raises(NotFoundError):
        asyncio.run(GoalService.update_goal("alice", "g-1", "Hijack", 1, True))
    assert _goals("bob")[0].name == "Guitar"


@pytest.mark.parametrize("name, target", [("", 3), ("  ", 3), ("Ok", 0), ("Ok", -2)])
def test_invalid_goal_rejected(name, target) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(GoalService.add_goal("alice", "g-1", name, target))
    assert _goals("alice") == []


def test_delete_then_list_excludes_goal() -> None:
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    asyncio.run(GoalService.add_goal("alice", "g-2", "Reading", 2))
    assert asyncio.run(GoalService.delete_goal("alice", "g-1")) is True
    assert [g.id for g in _goals("alice")] == ["g-2"]


def test_delete_missing_goal_is_silent() -> None:
    assert asyncio.run(GoalService.delete_goal("alice", "never-existed")) is False
    asyncio.run(GoalService.add_goal("alice", "g-1", "Deep work", 4))
    asyncio.run(GoalService.delete_goal("alice", "g-1"))
    assert asyncio.run(GoalService.delete_goal("alice", "g-1")) is False
    assert _goals("alice") == []
