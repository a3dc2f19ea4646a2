from __future__ import annotations

import threading
from typing import Protocol

from accounts.services._shared.errors import EmailTakenError, UsernameTakenError
from accounts.services.registration.dto import UserAccount


class UserLookup(Protocol):
    """
    Read-side port for finding existing users.

    Absence is a normal result (``None``), never an error.
    """

    def get_by_username(self, username: str) -> UserAccount | None: ...

    def get_by_email(self, email: str) -> UserAccount | None: ...


class UserStore(Protocol):
    """
    Write-side port persisting new users.

    Implementations MUST assign the identity and SHOULD enforce uniqueness of
    username and email as a backstop for concurrent registrations.
    """

    def save(self, user: UserAccount) -> UserAccount:
        """
        Persist ``user`` (which has no identity yet).

        :returns: The same user with ``id`` populated.
        """
        ...


def _norm(email: str) -> str:
    """Comparison key for emails: surrounding blanks and case are ignored."""
    return email.strip().lower()


class InMemoryUserDirectory(UserLookup, UserStore):
    """
    In-memory lookup + store with sequential identities.

    Emails are compared through one normalisation (:func:`_norm`) for both the
    lookups and the uniqueness backstop in :meth:`save`.

    .. note::
       Uses a threading lock so the uniqueness backstop holds under concurrent use.
    """

    def __init__(self, *, start_id: int = 1) -> None:
        self._by_id: dict[int, UserAccount] = {}
        self._next_id = start_id
        self._lock = threading.Lock()

    def get_by_username(self, username: str) -> UserAccount | None:
        with self._lock:
            return next((u for u in self._by_id.values() if u.username == username), None)

    def get_by_email(self, email: str) -> UserAccount | None:
        wanted = _norm(email)
        with self._lock:
            return next((u for u in self._by_id.values() if _norm(u.email) == wanted), None)

    def save(self, user: UserAccount) -> UserAccount:
        if user.is_persisted:
            raise ValueError("User already has an identity; refusing to insert it again.")
        email = _norm(user.email)
        with self._lock:
            for existing in self._by_id.values():
                if existing.username == user.username:
                    raise UsernameTakenError(user.username)
                if _norm(existing.email) == email:
                    raise EmailTakenError(user.email)
            stored = user.with_identity(self._next_id)
            self._by_id[stored.id] = stored  # type: ignore[index]
            self._next_id += 1
            return stored

    def __len__(self) -> int:
        return len(self._by_id)
