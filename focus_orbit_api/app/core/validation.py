"""
Input checks shared by the services.

Each helper returns the normalised value or raises
:class:`~focus_orbit_api.app.core.errors.ValidationError`.
"""

import re
from datetime import date

from .errors import NoIdentityError, ValidationError


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def require_date(value: str, field: str = "date") -> str:
    """Ensure ``value`` is a real calendar date in ``YYYY-MM-DD`` form."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"{field} must be a YYYY-MM-DD string")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"{field} is not a valid calendar date: {value}")
    return value


def require_optional_date(value: str, field: str = "date") -> str:
    if value == "":
        return value
    return require_date(value, field)


def _require_int(value, field: str) -> int:
    # bool is a subclass of int; True must not pass as a duration.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer")
    return value


def require_positive_int(value, field: str) -> int:
    if _require_int(value, field) <= 0:
        raise ValidationError(f"{field} must be positive")
    return value


def require_non_negative_int(value, field: str) -> int:
    if _require_int(value, field) < 0:
        raise ValidationError(f"{field} must not be negative")
    return value


def require_name(value, field: str = "name") -> str:
    """Return the trimmed name; empty or whitespace-only names are rejected."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()


def require_identity(identity) -> str:
    """Mutations need an authenticated caller; anonymous (``None``) is refused."""
    if not isinstance(identity, str) or not identity:
        raise NoIdentityError("Not authenticated")
    return identity
