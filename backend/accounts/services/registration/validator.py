"""Marshmallow-backed implementation of the registration validator port."""

from __future__ import annotations

from dataclasses import asdict

from accounts.schemas.auth import RegisterSchema
from accounts.services._shared.errors import RegistrationValidationError
from accounts.services._shared.ports import RegistrationValidator
from accounts.services.registration.dto import RegistrationRequest


class SchemaRegistrationValidator(RegistrationValidator):
    """
    Validate registration requests against :class:`RegisterSchema`.

    The schema owns the rules (email format, username charset/length, password
    strength); this adapter only turns marshmallow's error mapping into a
    :class:`RegistrationValidationError`.
    """

    def __init__(self, schema: RegisterSchema | None = None) -> None:
        self.schema = schema or RegisterSchema()

    def validate(self, request: RegistrationRequest) -> None:
        """
        Check ``request`` without side effects.

        :param request: Registration input.
        :type request: :class:`RegistrationRequest`
        :raises RegistrationValidationError: With ``{field: [messages]}`` reasons.
        """
        errors = self.schema.validate(asdict(request))
        if errors:
            raise RegistrationValidationError(errors)
