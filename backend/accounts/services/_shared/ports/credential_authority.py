from __future__ import annotations

from typing import Protocol

from accounts.services.registration.dto import UserAccount


class CredentialAuthority(Protocol):
    """Port for encrypting passwords and issuing tokens for persisted users."""

    def encrypt(self, password: str) -> str:
        """Return the encrypted form of a plaintext password."""
        ...

    def mint_token(self, user: UserAccount) -> str:
        """Issue a token for an identity-bearing user."""
        ...


class StubCredentialAuthority(CredentialAuthority):
    """Deterministic, reversible credential authority used in unit tests."""

    PREFIX = "enc$"

    def __init__(self) -> None:
        self._seq = 0

    def encrypt(self, password: str) -> str:
        return f"{self.PREFIX}{password[::-1]}"

    def mint_token(self, user: UserAccount) -> str:
        if user.id is None:
            raise ValueError("Cannot mint a token for a user without identity.")
        self._seq += 1
        return f"token.{user.id}.{self._seq}"
