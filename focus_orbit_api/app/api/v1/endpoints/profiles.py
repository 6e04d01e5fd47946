"""
Profile endpoints for API v1.

The caller reads and saves its own profile under ``/profile/``; any
caller may look up another identity's profile to display its name.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.user import UserProfile
from focus_orbit_api.app.services.profile_service import ProfileService


router = APIRouter()


@router.get("/", response_model=Optional[UserProfile])
async def get_caller_profile(identity: Optional[str] = Depends(get_optional_identity)) -> Optional[UserProfile]:
    """Return the caller's profile, or ``null`` if none was saved yet."""
    return await ProfileService.get_profile(identity)


@router.put("/", response_model=UserProfile)
async def save_caller_profile(profile: UserProfile, identity: str = Depends(get_current_identity)) -> UserProfile:
    """Create or overwrite the caller's profile.  The name must not be blank."""
    try:
        return await ProfileService.save_profile(identity, profile)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/{target}", response_model=Optional[UserProfile])
async def get_user_profile(target: str, identity: Optional[str] = Depends(get_optional_identity)) -> Optional[UserProfile]:
    """Return the profile of another identity, or ``null``."""
    return await ProfileService.get_profile(target)
