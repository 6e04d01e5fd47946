"""
Role endpoints for API v1.

Any caller may ask for its own role; anonymous callers are guests.
Only administrators may assign roles to other identities.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from focus_orbit_api.app.core.errors import ServiceError, to_http_exception
from focus_orbit_api.app.core.security import get_current_identity, get_optional_identity
from focus_orbit_api.app.schemas.user import AdminCheck, RoleAssign, RoleRead
from focus_orbit_api.app.services.role_service import RoleService


router = APIRouter()


@router.get("/me", response_model=RoleRead)
async def get_caller_role(identity: Optional[str] = Depends(get_optional_identity)) -> RoleRead:
    return RoleRead(role=await RoleService.get_role(identity))


@router.get("/me/admin", response_model=AdminCheck)
async def is_caller_admin(identity: Optional[str] = Depends(get_optional_identity)) -> AdminCheck:
    return AdminCheck(is_admin=await RoleService.is_admin(identity))


@router.post("/assign", response_model=RoleRead)
async def assign_role(body: RoleAssign, identity: str = Depends(get_current_identity)) -> RoleRead:
    """Assign a role to another identity.  Non-admin callers get 403."""
    try:
        role = await RoleService.assign_role(identity, body.identity, body.role)
    except ServiceError as e:
        raise to_http_exception(e)
    return RoleRead(role=role)
