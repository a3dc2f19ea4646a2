# accounts/services/_shared/base.py
from __future__ import annotations

from dataclasses import dataclass

from accounts.core import errors as api_errors
from accounts.services._shared.errors import (
    ConflictError,
    RegistrationValidationError,
    ServiceError,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data carried alongside a service call.

    :param actor_id: Authenticated caller, if any (self-registration has none).
    :param request_id: Correlation id shared with the logs.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Common ground for application services.

    Services orchestrate ports and raise :class:`ServiceError` subclasses;
    they never build HTTP responses. Delivery code turns those errors into
    API errors through :meth:`translate_exceptions`.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map a service-level error to the API error rendered for it.

        ===============================  ======  ==========================
        Service error                    Status  Problem ``code``
        ===============================  ======  ==========================
        RegistrationValidationError      422     ``validation_error``
        UsernameTakenError               409     ``username_taken``
        EmailTakenError                  409     ``email_taken``
        other ConflictError              409     ``conflict``
        other ServiceError               400     ``bad_request``
        ===============================  ======  ==========================

        :param exc: Exception raised by the service.
        :type exc: Exception
        :returns: The API error, or ``exc`` itself when it is not a service error.
        :rtype: Exception
        """
        if isinstance(exc, RegistrationValidationError):
            return api_errors.UnprocessableEntity(exc.message, exc.errors, code=exc.code)
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc), code=exc.code)
        if isinstance(exc, ServiceError):
            return api_errors.APIError(str(exc), status_code=400, code="bad_request")
        return exc
