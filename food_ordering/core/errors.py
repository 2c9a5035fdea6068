"""
Domain Error Taxonomy

Every failure a service method reports to its caller is one of the
``ServiceError`` subclasses below. The HTTP layer turns them into JSON
error responses using ``status_code``; services never build responses.

    ValidationError  -> 400  missing or unacceptable input
    NotFoundError    -> 404  lookup miss
    ConflictError    -> 409  unique constraint violation
    InternalError    -> 500  anything unexpected (logged server-side)
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    """Base class for errors raised by domain operations."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Resource already exists"


class InternalError(ServiceError):
    status_code = 500


# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError, field: str) -> bool:
    """
    Check whether an integrity error is a unique-constraint failure on ``field``.

    The decision is made from what the driver reports, not from a prior
    lookup: psycopg exposes a SQLSTATE and the constraint name, SQLite
    only a message such as ``UNIQUE constraint failed: customers.email``.

    Args:
        exc: The IntegrityError raised by SQLAlchemy on flush/commit
        field: Column name that must appear in the violated constraint

    Returns:
        True if the failure is a uniqueness violation involving ``field``
    """
    orig = exc.orig
    message = str(orig).lower()

    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        if sqlstate != UNIQUE_VIOLATION_SQLSTATE:
            return False
        diag = getattr(orig, "diag", None)
        constraint = getattr(diag, "constraint_name", None) or ""
        return field in constraint.lower() or field in message

    return "unique" in message and field in message
