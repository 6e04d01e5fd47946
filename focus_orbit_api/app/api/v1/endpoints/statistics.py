"""
Statistics endpoints for API v1.

Aggregates over the caller's own session log, used by the analytics and
consistency views.  Dates are caller-local ``YYYY-MM-DD`` strings.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_optional_identity
from focus_orbit_api.app.schemas.statistics import DaySummary, GoalProgress, Overview
from focus_orbit_api.app.services.statistics_service import StatisticsService


router = APIRouter()


@router.get("/daily", response_model=List[DaySummary])
async def daily_summary(
    start: str = Query(..., description="First date included, YYYY-MM-DD"),
    end: str = Query(..., description="Last date included, YYYY-MM-DD"),
    identity: Optional[str] = Depends(get_optional_identity),
) -> List[DaySummary]:
    """Per-day focus and break counts; days without sessions are included."""
    try:
        return await StatisticsService.daily_summary(identity, start, end)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/overview", response_model=Overview)
async def overview(
    start: str = Query(...),
    end: str = Query(...),
    identity: Optional[str] = Depends(get_optional_identity),
) -> Overview:
    try:
        return await StatisticsService.overview(identity, start, end)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/goals", response_model=List[GoalProgress])
async def goal_progress(
    date: str = Query(..., description="Day to evaluate, YYYY-MM-DD"),
    identity: Optional[str] = Depends(get_optional_identity),
) -> List[GoalProgress]:
    """Progress of each active goal on the given day."""
    try:
        return await StatisticsService.goal_progress(identity, date)
    except ServiceError as e:
        raise to_http_exception(e)
