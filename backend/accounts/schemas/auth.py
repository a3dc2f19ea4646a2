"""Registration-related Marshmallow schemas."""

from __future__ import annotations

import re

from marshmallow import Schema, ValidationError, fields, validate, validates

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"

_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")


class RegisterSchema(Schema):
    """Input payload for account registration."""

    username = fields.String(
        required=True,
        validate=[
            validate.Length(min=3, max=50),
            validate.Regexp(
                USERNAME_PATTERN,
                error="Username may only contain letters, digits, '.', '_' and '-'.",
            ),
        ],
    )
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))

    @validates("password")
    def _password_strength(self, value: str, **kwargs) -> None:
        """Require at least one letter and one digit."""
        if not _LETTER.search(value) or not _DIGIT.search(value):
            raise ValidationError("Password must contain at least one letter and one digit.")


class RegisteredUserSchema(Schema):
    """Response payload for a freshly registered user (never the credential)."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.Email(required=True)
    token = fields.String(required=True)
