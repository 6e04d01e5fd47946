"""
Service layer for role management.

Every identity has exactly one role: ``admin``, ``user`` or ``guest``.
Identities without a stored assignment are ``user``; anonymous callers
are ``guest``.  Only admins may assign roles.  The first admins come
from the ``ADMIN_IDENTITIES`` setting and are written at startup by
``bootstrap_admins``.
"""

import logging
from typing import Iterable, Optional

from focus_orbit_api.app.core.db import get_connection, get_cursor
from focus_orbit_api.app.core.errors import PermissionDeniedError, ValidationError
from focus_orbit_api.app.core.validation import require_identity
from focus_orbit_api.app.schemas.user import UserRole


class RoleService:
    """Service for role lookups and assignments."""

    @classmethod
    async def get_role(cls, identity: Optional[str]) -> UserRole:
        if not identity:
            return UserRole.guest
        conn = get_connection()
        try:
            row = conn.execute("SELECT role FROM user_roles WHERE identity = ?", (identity,)).fetchone()
            return UserRole(row["role"]) if row else UserRole.user
        finally:
            conn.close()

    @classmethod
    async def is_admin(cls, identity: Optional[str]) -> bool:
        return await cls.get_role(identity) is UserRole.admin

    @classmethod
    async def assign_role(cls, acting_identity: str, target_identity: str, role) -> UserRole:
        """Assign ``role`` to ``target_identity``.

        Raises ``PermissionDeniedError`` unless ``acting_identity`` is an
        admin, and ``ValidationError`` for an unknown role or empty
        target.
        """
        logger = logging.getLogger(__name__)
        acting_identity = require_identity(acting_identity)
        if not isinstance(target_identity, str) or not target_identity.strip():
            raise ValidationError("Target identity must not be empty")
        try:
            new_role = UserRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")
        if not await cls.is_admin(acting_identity):
            logger.warning("%s attempted to assign role %s to %s", acting_identity, new_role.value, target_identity)
            raise PermissionDeniedError("Only administrators can assign roles")
        cls._store(target_identity, new_role)
        logger.info("Assigned role %s to %s (by %s)", new_role.value, target_identity, acting_identity)
        return new_role

    @classmethod
    def bootstrap_admins(cls, identities: Iterable[str]) -> None:
        """Grant ``admin`` to each identity; used once at startup."""
        logger = logging.getLogger(__name__)
        for identity in identities:
            cls._store(identity, UserRole.admin)
            logger.info("Bootstrapped admin %s", identity)

    @staticmethod
    def _store(identity: str, role: UserRole) -> None:
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO user_roles (identity, role) VALUES (?, ?)"
                " ON CONFLICT(identity) DO UPDATE SET role = excluded.role",
                (identity, role.value),
            )
