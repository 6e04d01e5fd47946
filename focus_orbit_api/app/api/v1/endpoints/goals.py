"""
Goal endpoints for API v1.

Goal ids are generated by the client.  ``DELETE`` on an unknown id
returns 204 like a successful delete.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.goal import Goal, GoalCreate, GoalUpdate
from focus_orbit_api.app.services.goal_service import GoalService


router = APIRouter()


@router.get("/", response_model=List[Goal])
async def list_goals(identity: Optional[str] = Depends(get_optional_identity)) -> List[Goal]:
    return await GoalService.list_goals(identity)


@router.post("/", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def add_goal(body: GoalCreate, identity: str = Depends(get_current_identity)) -> Goal:
    """Create a goal.  A duplicate id yields 409 and leaves the existing goal unchanged."""
    try:
        return await GoalService.add_goal(identity, body.id, body.name, body.daily_target_sessions)
    except ServiceError as e:
        raise to_http_exception(e)


@router.put("/{goal_id}", response_model=Goal)
async def update_goal(goal_id: str, body: GoalUpdate, identity: str = Depends(get_current_identity)) -> Goal:
    try:
        return await GoalService.update_goal(
            identity, goal_id, body.name, body.daily_target_sessions, body.active
        )
    except ServiceError as e:
        raise to_http_exception(e)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: str, identity: str = Depends(get_current_identity)) -> None:
    try:
        await GoalService.delete_goal(identity, goal_id)
    except ServiceError as e:
        raise to_http_exception(e)
