"""SQLAlchemy adapter implementing the ``UserLookup`` and ``UserStore`` ports."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import IntegrityError

from accounts.models.user import User
from accounts.services._shared.errors import EmailTakenError, UsernameTakenError, violates
from accounts.services._shared.ports import UserLookup, UserStore
from accounts.services.registration.dto import UserAccount
from accounts.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork, UnitOfWork

log = logging.getLogger(__name__)

USERNAME_CONSTRAINT = "uq_users_username"
EMAIL_CONSTRAINT = "uq_users_email"


def to_account(row: User) -> UserAccount:
    """Map an ORM ``User`` row to the immutable :class:`UserAccount`."""
    return UserAccount(
        id=row.id,
        username=row.username,
        email=row.email,
        password=row.password_hash,
    )


class SQLAlchemyUserDirectory(UserLookup, UserStore):
    """
    User lookup + store backed by the ``users`` table.

    Lookups run in a read-only Unit of Work; inserts run in a read-write one
    and commit on success. The table's unique constraints are the backstop for
    registrations racing on the same username/email: a violation is reported
    with the same conflict errors the service raises itself.
    """

    def __init__(
        self,
        *,
        rw_uow: Callable[[], UnitOfWork] = SQLAlchemyUnitOfWork,
        ro_uow: Callable[[], UnitOfWork] = SQLAlchemyReadOnlyUnitOfWork,
    ) -> None:
        self._rw_uow = rw_uow
        self._ro_uow = ro_uow

    # ------------------------------ Lookup ------------------------------

    def get_by_username(self, username: str) -> UserAccount | None:
        with self._ro_uow() as uow:
            row = uow.users.get_by_username(username)
            return to_account(row) if row is not None else None

    def get_by_email(self, email: str) -> UserAccount | None:
        with self._ro_uow() as uow:
            row = uow.users.get_by_email(email)
            return to_account(row) if row is not None else None

    # ------------------------------ Store -------------------------------

    def save(self, user: UserAccount) -> UserAccount:
        """
        Insert ``user`` and return it with the database-assigned identity.

        :param user: User without identity, carrying the encrypted credential.
        :type user: :class:`UserAccount`
        :returns: Persisted user.
        :rtype: :class:`UserAccount`
        :raises ValueError: If ``user`` already has an identity.
        :raises UsernameTakenError: On a ``uq_users_username`` violation.
        :raises EmailTakenError: On a ``uq_users_email`` violation.
        """
        if user.is_persisted:
            raise ValueError("User already has an identity; refusing to insert it again.")
        try:
            with self._rw_uow() as uow:
                row = uow.users.add(
                    User(
                        username=user.username,
                        email=user.email,
                        password_hash=user.password,
                    )
                )
                stored = to_account(row)
        except IntegrityError as exc:
            if violates(exc, USERNAME_CONSTRAINT):
                log.warning("user_directory.username_race", extra={"code": "username_taken"})
                raise UsernameTakenError(user.username) from exc
            if violates(exc, EMAIL_CONSTRAINT):
                log.warning("user_directory.email_race", extra={"code": "email_taken"})
                raise EmailTakenError(user.email) from exc
            raise
        return stored
