"""Credential authority backed by ``werkzeug.security`` and a token provider."""

from __future__ import annotations

from datetime import timedelta

from werkzeug.security import check_password_hash, generate_password_hash

from accounts.services._shared.ports import CredentialAuthority, TokenProvider
from accounts.services.registration.dto import UserAccount

DEFAULT_HASH_METHOD = "scrypt"


class WerkzeugCredentialAuthority(CredentialAuthority):
    """
    Encrypt passwords with werkzeug and mint access tokens for persisted users.

    :param tokens: Token provider (JWT in production, stub in unit tests).
    :param hash_method: ``generate_password_hash`` method string.
    :param token_expires: Token lifetime; ``None`` defers to the provider default.
    """

    def __init__(
        self,
        *,
        tokens: TokenProvider,
        hash_method: str = DEFAULT_HASH_METHOD,
        token_expires: timedelta | None = None,
    ) -> None:
        self.tokens = tokens
        self.hash_method = hash_method
        self.token_expires = token_expires

    def encrypt(self, password: str) -> str:
        """
        Hash ``password`` with a random salt.

        :param password: Plaintext password.
        :type password: str
        :returns: Self-describing hash (``method$salt$hash``).
        :rtype: str
        """
        return generate_password_hash(password, method=self.hash_method)

    def verify(self, password: str, credential: str) -> bool:
        """Return ``True`` when ``password`` matches the stored ``credential``."""
        if not credential:
            return False
        return bool(check_password_hash(credential, password))

    def mint_token(self, user: UserAccount) -> str:
        """
        Issue an access token whose subject is the persisted identity.

        :param user: Identity-bearing user.
        :type user: :class:`UserAccount`
        :returns: Encoded token.
        :rtype: str
        :raises ValueError: If the user has not been persisted yet.
        """
        if user.id is None:
            raise ValueError("Cannot mint a token for a user without identity.")
        return self.tokens.create_access_token(
            identity=user.id,
            additional_claims={"username": user.username},
            expires_delta=self.token_expires,
        )
