"""
Error types raised by the service layer.

Services never raise ``HTTPException`` directly; endpoint handlers
translate these errors with :func:`to_http_exception`.  Read operations
do not raise on missing data, they return defaults instead.
"""

from fastapi import HTTPException, status


class ServiceError(Exception):
    """Base class for all service errors."""

    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(ServiceError, ValueError):
    """Malformed or out-of-range input (empty name, non-positive duration...)."""

    status_code = 422


class NotFoundError(ServiceError, LookupError):
    """The operation targets a record that does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(ServiceError):
    """The acting identity lacks the role required for the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NoIdentityError(ServiceError):
    """A mutation was attempted without an authenticated caller."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(ServiceError):
    """The stored record does not match the caller's expectation."""

    status_code = status.HTTP_409_CONFLICT


class DuplicateError(ConflictError):
    """A record with the same id already exists for this identity."""


def to_http_exception(exc: ServiceError) -> HTTPException:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NoIdentityError) else None
    return HTTPException(status_code=exc.status_code, detail=str(exc), headers=headers)
