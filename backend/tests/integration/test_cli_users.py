"""Tests for the ``flask users`` command group."""

from __future__ import annotations

from flask_jwt_extended import decode_token
from sqlalchemy import select

from accounts.models.user import User
from tests.factories.user import UserFactory

ARGS = ["users", "register", "--username", "bob", "--email", "hello@world.com"]


def test_init_db(runner):
    result = runner.invoke(args=["users", "init-db"])

    assert result.exit_code == 0, result.output
    assert "Database schema is ready." in result.output


def test_register_prints_identity_and_token(runner, db):
    result = runner.invoke(args=[*ARGS, "--password", "Passw0rd!"])

    assert result.exit_code == 0, result.output
    assert "Registered user id=1 username=bob" in result.output
    token = result.output.split("token=", 1)[1].strip()
    assert decode_token(token)["sub"] == "1"

    db.session.expire_all()
    user = db.session.execute(select(User)).scalar_one()
    assert user.password_hash != "Passw0rd!"


def test_register_prompts_for_password(runner, db):
    result = runner.invoke(args=ARGS, input="Passw0rd!\nPassw0rd!\n")

    assert result.exit_code == 0, result.output
    assert "Registered user id=1" in result.output


def test_register_reports_conflict(runner, session):
    UserFactory(username="bob")

    result = runner.invoke(args=[*ARGS, "--password", "Passw0rd!"])

    assert result.exit_code == 1
    assert "username 'bob' is already taken" in result.output


def test_register_reports_validation_errors(runner, db):
    result = runner.invoke(
        args=["users", "register", "--username", "bob", "--email", "nope", "--password", "x"]
    )

    assert result.exit_code == 1
    assert "Registration is not valid" in result.output
    assert "email:" in result.output
    assert "password:" in result.output
