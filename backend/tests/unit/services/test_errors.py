"""Tests for domain errors and their translation to API errors."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from accounts.core.errors import APIError, Conflict, UnprocessableEntity
from accounts.services._shared.base import BaseService, ServiceContext
from accounts.services._shared.errors import (
    ConflictError,
    EmailTakenError,
    RegistrationValidationError,
    ServiceError,
    UsernameTakenError,
    violates,
)


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, sqlite3.IntegrityError(message))


class TestDomainErrors:
    def test_username_taken_is_a_conflict(self):
        exc = UsernameTakenError("bob")

        assert isinstance(exc, ConflictError)
        assert exc.username == "bob"
        assert exc.code == "username_taken"
        assert str(exc) == "Conflict on User: username 'bob' is already taken"

    def test_email_taken_is_a_conflict(self):
        exc = EmailTakenError("hello@world.com")

        assert isinstance(exc, ConflictError)
        assert exc.email == "hello@world.com"
        assert exc.code == "email_taken"

    def test_validation_error_keeps_reasons(self):
        exc = RegistrationValidationError({"email": ["bad"]})

        assert exc.errors == {"email": ["bad"]}
        assert exc.message == "Registration is not valid"
        assert str(exc) == "Registration is not valid"


class TestTranslateExceptions:
    @pytest.fixture()
    def service(self) -> BaseService:
        return BaseService(ctx=ServiceContext(request_id="req-1"))

    def test_default_context(self):
        assert BaseService().ctx == ServiceContext()

    def test_validation_maps_to_422(self, service):
        api_exc = service.translate_exceptions(
            RegistrationValidationError({"username": ["Too short."]})
        )

        assert isinstance(api_exc, UnprocessableEntity)
        assert api_exc.status_code == 422
        assert api_exc.code == "validation_error"
        assert api_exc.details == {"errors": {"username": ["Too short."]}}

    @pytest.mark.parametrize(
        "exc, code",
        [
            (UsernameTakenError("bob"), "username_taken"),
            (EmailTakenError("hello@world.com"), "email_taken"),
            (ConflictError("User", "duplicate"), "conflict"),
        ],
    )
    def test_conflicts_map_to_409_keeping_code(self, service, exc, code):
        api_exc = service.translate_exceptions(exc)

        assert isinstance(api_exc, Conflict)
        assert api_exc.status_code == 409
        assert api_exc.code == code

    def test_generic_service_error_maps_to_400(self, service):
        api_exc = service.translate_exceptions(ServiceError("nope"))

        assert isinstance(api_exc, APIError)
        assert api_exc.status_code == 400
        assert api_exc.code == "bad_request"

    def test_foreign_exception_is_returned_untouched(self, service):
        boom = RuntimeError("boom")

        assert service.translate_exceptions(boom) is boom


class TestViolates:
    def test_matches_constraint_name(self):
        exc = _integrity_error(
            'duplicate key value violates unique constraint "uq_users_email"'
        )

        assert violates(exc, "uq_users_email")
        assert not violates(exc, "uq_users_username")

    def test_matches_sqlite_table_column(self):
        exc = _integrity_error("UNIQUE constraint failed: users.username")

        assert violates(exc, "uq_users_username")
        assert not violates(exc, "uq_users_email")

    def test_unrelated_constraint(self):
        exc = _integrity_error("NOT NULL constraint failed: users.password_hash")

        assert not violates(exc, "uq_users_email")

    def test_matches_sqlite_expression_index(self):
        exc = _integrity_error("UNIQUE constraint failed: index 'uq_users_email'")

        assert violates(exc, "uq_users_email")
        assert not violates(exc, "uq_users_username")
