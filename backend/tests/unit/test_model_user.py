from __future__ import annotations

import pytest

from accounts.models.user import User


def test_repr_never_shows_column_values():
    user = User(id=3, username="bob", email="hello@world.com", password_hash="secret-hash")

    assert repr(user) == "<User id=3>"


@pytest.mark.parametrize("field", ["username", "email"])
@pytest.mark.parametrize("value", ["", "   "])
def test_blank_identifiers_are_rejected(field, value):
    values = {"username": "bob", "email": "hello@world.com", "password_hash": "h"}
    values[field] = value

    with pytest.raises(ValueError, match="is required"):
        User(**values)


def test_empty_credential_is_rejected():
    with pytest.raises(ValueError):
        User(username="bob", email="hello@world.com", password_hash="")


def test_username_unique_constraint_is_named():
    names = {c.name for c in User.__table__.constraints if c.name}

    assert "uq_users_username" in names


def test_email_uniqueness_ignores_case():
    (index,) = [i for i in User.__table__.indexes if i.name == "uq_users_email"]

    assert index.unique
    assert "lower" in str(index.expressions[0]).lower()
