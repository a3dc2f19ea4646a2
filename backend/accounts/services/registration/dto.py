"""
DTOs for UserRegistrationService.

Contracts for the self-registration flow: the caller-built request and the
user value that moves through validation, persistence and token issuance.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegistrationRequest:
    """
    Input payload for the registration process.

    :param username: Requested public handle (must be unique).
    :type username: str
    :param email: Login email (must be unique).
    :type email: str
    :param password: Raw password; encrypted before anything is persisted.
    :type password: str
    """

    username: str
    email: str
    password: str = field(repr=False)


# --------------------------------------------------------------------------- #
# Entity value
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserAccount:
    """
    Immutable user value exchanged with the lookup, store and credential ports.

    The same shape is used before persistence (no ``id``), after persistence
    (``id`` assigned by the store) and once a token has been minted.

    :param username: Public handle.
    :type username: str
    :param email: Login email.
    :type email: str
    :param password: Credential; always the encrypted form once built by the service.
    :type password: str
    :param id: Identity assigned by the store, ``None`` until persisted.
    :type id: int | None
    :param token: Authentication token, ``None`` until minted.
    :type token: str | None
    """

    username: str
    email: str
    password: str = field(repr=False)
    id: int | None = None
    token: str | None = field(default=None, repr=False)

    @property
    def is_persisted(self) -> bool:
        """Return ``True`` once the store assigned an identity."""
        return self.id is not None

    def with_identity(self, id: int) -> UserAccount:
        """Return a copy carrying the store-assigned identity."""
        return replace(self, id=id)

    def with_token(self, token: str) -> UserAccount:
        """Return a copy carrying the minted token."""
        return replace(self, token=token)
