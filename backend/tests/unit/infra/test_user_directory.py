"""Tests for the SQLAlchemy user directory adapter."""

from __future__ import annotations

import pytest

from accounts.infra.sqlalchemy.user_directory import SQLAlchemyUserDirectory
from accounts.models.user import User
from accounts.services._shared.errors import EmailTakenError, UsernameTakenError
from accounts.services.registration.dto import UserAccount
from tests.factories.user import UserFactory


@pytest.fixture()
def directory(db) -> SQLAlchemyUserDirectory:
    return SQLAlchemyUserDirectory()


def _account(username="bob", email="hello@world.com") -> UserAccount:
    return UserAccount(username=username, email=email, password="pbkdf2:sha256:1000$salt$hash")


class TestLookups:
    def test_absent_user_is_none(self, directory):
        assert directory.get_by_username("ghost") is None
        assert directory.get_by_email("ghost@example.com") is None

    def test_finds_seeded_user(self, directory, session):
        row = UserFactory(username="carol", email="carol@example.com")

        found = directory.get_by_username("carol")

        assert found == UserAccount(
            id=row.id,
            username="carol",
            email="carol@example.com",
            password=row.password_hash,
        )

    def test_username_lookup_is_exact(self, directory, session):
        UserFactory(username="carol")

        assert directory.get_by_username("Carol") is None

    def test_email_lookup_ignores_case(self, directory, session):
        row = UserFactory(email="Carol@Example.com")

        found = directory.get_by_email("carol@example.COM")

        assert found is not None
        assert found.id == row.id


class TestSave:
    def test_assigns_identity_and_commits(self, directory, db):
        stored = directory.save(_account())

        assert stored.id is not None
        assert stored.token is None
        db.session.expunge_all()
        row = db.session.get(User, stored.id)
        assert row is not None
        assert row.email == "hello@world.com"
        assert row.password_hash == "pbkdf2:sha256:1000$salt$hash"

    def test_stores_email_verbatim(self, directory):
        stored = directory.save(_account(email="Hello@World.com"))

        assert directory.get_by_username("bob").email == "Hello@World.com"
        assert stored.email == "Hello@World.com"

    def test_rejects_already_persisted_user(self, directory):
        with pytest.raises(ValueError):
            directory.save(_account().with_identity(9))

    def test_duplicate_username_is_translated(self, directory, db):
        directory.save(_account("bob", "bob@example.com"))

        with pytest.raises(UsernameTakenError) as exc_info:
            directory.save(_account("bob", "other@example.com"))

        assert exc_info.value.username == "bob"
        assert db.session.query(User).count() == 1

    def test_duplicate_email_is_translated(self, directory, db):
        directory.save(_account("bob", "bob@example.com"))

        with pytest.raises(EmailTakenError) as exc_info:
            directory.save(_account("alice", "bob@example.com"))

        assert exc_info.value.email == "bob@example.com"
        assert db.session.query(User).count() == 1

    def test_duplicate_email_differing_in_case_is_translated(self, directory, db):
        directory.save(_account("bob", "Bob@Example.com"))

        with pytest.raises(EmailTakenError):
            directory.save(_account("alice", "bob@example.COM"))

        assert db.session.query(User).count() == 1

    def test_session_is_usable_after_a_conflict(self, directory):
        directory.save(_account("bob", "bob@example.com"))
        with pytest.raises(UsernameTakenError):
            directory.save(_account("bob", "other@example.com"))

        stored = directory.save(_account("alice", "alice@example.com"))

        assert directory.get_by_username("alice") == stored
