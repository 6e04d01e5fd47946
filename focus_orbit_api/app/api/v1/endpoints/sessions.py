"""
Session log endpoints for API v1.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.session import SessionCompleted, SessionCreate, SessionLogged, SessionRecord
from focus_orbit_api.app.services.session_service import SessionService


router = APIRouter()


@router.post("/", response_model=SessionLogged, status_code=status.HTTP_201_CREATED)
async def log_session(body: SessionCreate, identity: str = Depends(get_current_identity)) -> SessionLogged:
    """Append a completed session and return its server-assigned id."""
    try:
        session_id = await SessionService.log_session(identity, body.duration, body.session_type, body.date_string)
    except ServiceError as e:
        raise to_http_exception(e)
    return SessionLogged(id=session_id)


@router.post("/complete", response_model=SessionCompleted, status_code=status.HTTP_201_CREATED)
async def complete_session(body: SessionCreate, identity: str = Depends(get_current_identity)) -> SessionCompleted:
    """Log a session and, if it was a focus session, advance the streak."""
    try:
        return await SessionService.complete_session(identity, body.duration, body.session_type, body.date_string)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/", response_model=List[SessionRecord])
async def get_sessions_by_date_range(
    start: str = Query(..., description="First date included, YYYY-MM-DD"),
    end: str = Query(..., description="Last date included, YYYY-MM-DD"),
    identity: Optional[str] = Depends(get_optional_identity),
) -> List[SessionRecord]:
    """List the caller's sessions whose date falls within ``[start, end]``, in logging order."""
    return await SessionService.get_sessions_by_date_range(identity, start, end)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_all_sessions(identity: str = Depends(get_current_identity)) -> None:
    """Delete all of the caller's sessions.  This cannot be undone."""
    try:
        await SessionService.clear_all_sessions(identity)
    except ServiceError as e:
        raise to_http_exception(e)
