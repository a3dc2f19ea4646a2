"""
UserRegistrationService
=======================

Process-level service that registers a new user:

- Validates the request before any collaborator with side effects is touched.
- Checks username, then email, uniqueness through the lookup port.
- Encrypts the password, persists the user and mints a token for the
  persisted identity.

Every step is fail-fast and runs strictly in that order. Domain rejections
raise typed :mod:`~accounts.services._shared.errors`; failures raised by the
credential authority or the store propagate unchanged.
"""

from __future__ import annotations

import logging

from accounts.services._shared.base import BaseService, ServiceContext
from accounts.services._shared.errors import (
    EmailTakenError,
    RegistrationValidationError,
    UsernameTakenError,
)
from accounts.services._shared.ports import (
    CredentialAuthority,
    RegistrationValidator,
    UserLookup,
    UserStore,
)
from accounts.services.registration.dto import RegistrationRequest, UserAccount

log = logging.getLogger(__name__)


class UserRegistrationService(BaseService):
    """
    Orchestrates the user registration use case.

    The service is stateless: collaborators are injected once and every call to
    :meth:`register_user` is independent, so a single instance can be shared
    between concurrent callers. Uniqueness is check-then-act here; the store is
    expected to enforce it as well.
    """

    def __init__(
        self,
        *,
        validator: RegistrationValidator,
        lookup: UserLookup,
        store: UserStore,
        credentials: CredentialAuthority,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its collaborators.

        :param validator: Side-effect-free request checks.
        :param lookup: Read-side user queries (by username / email).
        :param store: Write-side persistence assigning identities.
        :param credentials: Password encryption and token issuance.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.validator = validator
        self.lookup = lookup
        self.store = store
        self.credentials = credentials

    def register_user(self, request: RegistrationRequest) -> UserAccount:
        """
        Register a user and return it with identity and token attached.

        :param request: Registration input.
        :type request: :class:`RegistrationRequest`
        :returns: Persisted user carrying the encrypted credential and a token.
        :rtype: :class:`UserAccount`
        :raises RegistrationValidationError: When the validator rejects the request.
        :raises UsernameTakenError: When the username already belongs to a user.
        :raises EmailTakenError: When the email already belongs to a user.
        """
        try:
            self._ensure_registrable(request)
        except (RegistrationValidationError, UsernameTakenError, EmailTakenError) as exc:
            log.info("registration.rejected", extra={"code": exc.code})
            raise

        log.debug("registration.encrypting")
        credential = self.credentials.encrypt(request.password)
        pending = UserAccount(
            username=request.username,
            email=request.email,
            password=credential,
        )

        log.debug("registration.persisting")
        persisted = self.store.save(pending)

        log.debug("registration.minting", extra={"user_id": persisted.id})
        token = self.credentials.mint_token(persisted)

        log.info("registration.completed", extra={"user_id": persisted.id})
        return persisted.with_token(token)

    # ------------------------------------------------------------------ #
    # Gates
    # ------------------------------------------------------------------ #

    def _ensure_registrable(self, request: RegistrationRequest) -> None:
        """Run the validation and uniqueness gates, in order."""
        log.debug("registration.validating")
        self.validator.validate(request)

        log.debug("registration.checking_username")
        if self.lookup.get_by_username(request.username) is not None:
            raise UsernameTakenError(request.username)

        log.debug("registration.checking_email")
        if self.lookup.get_by_email(request.email) is not None:
            raise EmailTakenError(request.email)
