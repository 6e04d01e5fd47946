"""
Timer settings endpoints for API v1.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.settings import UserSettings
from focus_orbit_api.app.services.settings_service import SettingsService


router = APIRouter()


@router.get("/", response_model=UserSettings)
async def get_settings(identity: Optional[str] = Depends(get_optional_identity)) -> UserSettings:
    """Return the caller's settings, falling back to 25/5/15/4."""
    return await SettingsService.get_settings(identity)


@router.put("/", response_model=UserSettings)
async def set_settings(body: UserSettings, identity: str = Depends(get_current_identity)) -> UserSettings:
    """Replace the caller's settings.  Every value must be a positive integer."""
    try:
        return await SettingsService.set_settings(
            identity,
            body.focus_duration,
            body.short_break_duration,
            body.long_break_duration,
            body.long_break_interval,
        )
    except ServiceError as e:
        raise to_http_exception(e)
