"""
Pydantic models for user profiles and roles.

A profile is a display record (``name`` and optional ``email``) keyed by
the caller identity.  Roles gate the single administrative operation,
role assignment.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class UserProfile(CamelModel):
    name: str = Field(..., examples=["Ada Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.com"])


class UserRole(str, Enum):
    admin = "admin"
    user = "user"
    guest = "guest"


class RoleRead(CamelModel):
    role: UserRole


class AdminCheck(CamelModel):
    is_admin: bool


class RoleAssign(CamelModel):
    """Payload for assigning a role to another identity."""

    identity: str = Field(..., examples=["2vxsx-fae"], description="Identity receiving the role")
    role: UserRole
