from __future__ import annotations

from typing import Protocol

from accounts.services.registration.dto import RegistrationRequest


class RegistrationValidator(Protocol):
    """
    Port checking a registration request before any side effect happens.

    Implementations return ``None`` on success and raise
    :class:`~accounts.services._shared.errors.RegistrationValidationError`
    carrying the structured reasons otherwise.
    """

    def validate(self, request: RegistrationRequest) -> None: ...


class AcceptAllValidator(RegistrationValidator):
    """Validator that accepts every request (unit tests, trusted imports)."""

    def validate(self, request: RegistrationRequest) -> None:
        return None
