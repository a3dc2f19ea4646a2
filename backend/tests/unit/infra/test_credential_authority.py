"""Tests for the werkzeug credential authority and the token providers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from accounts.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from accounts.infra.security.credential_authority import WerkzeugCredentialAuthority
from accounts.services._shared.ports import StubTokenProvider
from accounts.services.registration.dto import UserAccount

FAST_HASH = "pbkdf2:sha256:1000"


@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def authority(tokens) -> WerkzeugCredentialAuthority:
    return WerkzeugCredentialAuthority(tokens=tokens, hash_method=FAST_HASH)


def _persisted(id_: int = 1234) -> UserAccount:
    return UserAccount(id=id_, username="bob", email="hello@world.com", password="enc")


class TestEncrypt:
    def test_hash_differs_from_plaintext_and_verifies(self, authority):
        credential = authority.encrypt("password")

        assert credential != "password"
        assert credential.startswith("pbkdf2:sha256:1000$")
        assert authority.verify("password", credential)
        assert not authority.verify("Password", credential)

    def test_hashes_are_salted(self, authority):
        assert authority.encrypt("password") != authority.encrypt("password")

    def test_verify_rejects_empty_credential(self, authority):
        assert authority.verify("password", "") is False


class TestMintToken:
    def test_requires_identity(self, authority, tokens):
        with pytest.raises(ValueError):
            authority.mint_token(UserAccount(username="bob", email="hello@world.com", password="x"))

    def test_subject_is_the_user_id(self, authority, tokens):
        token = authority.mint_token(_persisted(1234))

        assert tokens.get_subject(token) == 1234
        assert tokens.decode(token)["username"] == "bob"
        assert tokens.decode(token)["type"] == "access"

    def test_passes_configured_lifetime(self, tokens):
        authority = WerkzeugCredentialAuthority(
            tokens=tokens, hash_method=FAST_HASH, token_expires=timedelta(minutes=5)
        )
        short = authority.mint_token(_persisted())
        default = WerkzeugCredentialAuthority(tokens=tokens, hash_method=FAST_HASH).mint_token(
            _persisted()
        )

        assert tokens.decode(short)["exp"] < tokens.decode(default)["exp"]


class TestJWTTokenProvider:
    def test_round_trips_identity_inside_app_context(self, app):
        provider = JWTTokenProvider()
        with app.app_context():
            token = provider.create_access_token(identity=42, additional_claims={"username": "bob"})
            claims = provider.decode(token)

            assert claims["sub"] == "42"
            assert claims["username"] == "bob"
            assert claims["type"] == "access"
            assert provider.get_subject(token) == 42

    def test_credential_authority_mints_decodable_jwt(self, app):
        authority = WerkzeugCredentialAuthority(tokens=JWTTokenProvider(), hash_method=FAST_HASH)
        with app.app_context():
            token = authority.mint_token(_persisted(7))

            assert JWTTokenProvider().get_subject(token) == 7
