"""
Streak and freeze endpoints for API v1.

``PUT /streak/`` stores a record computed by the client.  Clients that
prefer the server to run the day transition call ``POST /streak/record``
(or log the session through ``POST /sessions/complete``).
"""

from typing import Optional

from fastapi import APIRouter, Depends

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.streak import (
    FocusDay,
    FreezeBalance,
    StreakData,
    StreakTransition,
    StreakUpdate,
)
from focus_orbit_api.app.services.streak_service import StreakService


router = APIRouter()


@router.get("/", response_model=StreakData)
async def get_streak(identity: Optional[str] = Depends(get_optional_identity)) -> StreakData:
    return await StreakService.get_streak(identity)


@router.put("/", response_model=StreakData)
async def update_streak(body: StreakUpdate, identity: str = Depends(get_current_identity)) -> StreakData:
    """Overwrite the caller's streak record (last write wins).

    Supply ``expectedLastActiveDate`` to have the write rejected with 409
    when another client changed the record in between.
    """
    try:
        return await StreakService.update_streak(
            identity,
            body.current_streak,
            body.longest_streak,
            body.last_active_date,
            body.freeze_balance,
            body.freeze_used_today,
            expected_last_active_date=body.expected_last_active_date,
        )
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("/record", response_model=StreakTransition)
async def record_focus_session(body: FocusDay, identity: str = Depends(get_current_identity)) -> StreakTransition:
    """Apply one completed focus session on the caller-local ``today``."""
    try:
        return await StreakService.record_focus_session(identity, body.today)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/freeze", response_model=int)
async def get_freeze_balance(identity: Optional[str] = Depends(get_optional_identity)) -> int:
    """Number of freezes the caller can spend."""
    return await StreakService.get_freeze_balance(identity)


@router.post("/freeze/use", response_model=StreakData)
async def use_freeze(identity: str = Depends(get_current_identity)) -> StreakData:
    """Spend one freeze.  Fails with 422 when the balance is zero."""
    try:
        return await StreakService.use_freeze(identity)
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("/freeze/earn", response_model=FreezeBalance)
async def earn_freeze(
    body: FocusDay,
    identity: str = Depends(get_current_identity),
) -> FreezeBalance:
    """Record an earned freeze for the caller-local ``today``.

    Repeated calls with the same ``today`` count once.
    """
    try:
        return await StreakService.earn_freeze(identity, body.today)
    except ServiceError as e:
        raise to_http_exception(e)
