"""
Service-level errors raised by the registration use case and its adapters.

Each rejection carries a stable ``code`` that survives all the way to the
HTTP problem body and the CLI. Nothing here knows about Flask; the mapping to
status codes lives in ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError

_UNIQUE_PREFIX = "uq_"


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Tell whether ``exc`` comes from the unique constraint or index ``constraint_name``.

    PostgreSQL reports the constraint or index name, and so does SQLite for
    expression indexes (``UNIQUE constraint failed: index 'uq_users_email'``).
    For plain column constraints SQLite only reports ``table.column``, which is
    derived here from the ``uq_<table>_<column>`` naming convention.

    Parameters
    ----------
    exc : IntegrityError
        Error raised by SQLAlchemy on flush/commit.
    constraint_name : str
        Constraint to look for, e.g. ``"uq_users_email"``.

    Returns
    -------
    bool
        True if the error names that constraint (or its column).
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    if not constraint_name.startswith(_UNIQUE_PREFIX):
        return False
    table, _, column = constraint_name[len(_UNIQUE_PREFIX) :].partition("_")
    return f"{table}.{column}".lower() in message


class ServiceError(Exception):
    """Base of every error a service may raise on purpose."""

    code = "service_error"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    code = "conflict"

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class UsernameTakenError(ConflictError):
    """
    Raised when an existing user already holds the requested username.

    :param username: The conflicting username.
    :type username: str
    """

    code = "username_taken"

    def __init__(self, username: str) -> None:
        ConflictError.__init__(self, "User", f"username '{username}' is already taken")
        self.username = username


class EmailTakenError(ConflictError):
    """
    Raised when an existing user already holds the requested email.

    :param email: The conflicting email address.
    :type email: str
    """

    code = "email_taken"

    def __init__(self, email: str) -> None:
        ConflictError.__init__(self, "User", f"email '{email}' is already taken")
        self.email = email


class RegistrationValidationError(ServiceError):
    """
    Raised when a registration request breaks structural or business rules.

    :param errors: Field name to list of messages, as produced by the validator.
    :type errors: dict[str, Any]
    """

    code = "validation_error"

    def __init__(self, errors: dict[str, Any], message: str = "Registration is not valid") -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors
