"""Compose the registration service from the default adapters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from accounts.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from accounts.infra.security.credential_authority import (
    DEFAULT_HASH_METHOD,
    WerkzeugCredentialAuthority,
)
from accounts.infra.sqlalchemy.user_directory import SQLAlchemyUserDirectory
from accounts.services._shared.base import ServiceContext
from accounts.services.registration.service import UserRegistrationService
from accounts.services.registration.validator import SchemaRegistrationValidator


def build_registration_service(
    config: Mapping[str, Any],
    *,
    ctx: ServiceContext | None = None,
) -> UserRegistrationService:
    """
    Build a :class:`UserRegistrationService` wired to SQLAlchemy, werkzeug and JWT.

    :param config: Flask config (or any mapping) providing ``PASSWORD_HASH_METHOD``.
    :param ctx: Optional request-scoped context.
    :returns: Ready-to-use service; token lifetime follows ``JWT_ACCESS_TOKEN_EXPIRES``.
    :rtype: :class:`UserRegistrationService`
    """
    directory = SQLAlchemyUserDirectory()
    credentials = WerkzeugCredentialAuthority(
        tokens=JWTTokenProvider(),
        hash_method=config.get("PASSWORD_HASH_METHOD", DEFAULT_HASH_METHOD),
    )
    return UserRegistrationService(
        validator=SchemaRegistrationValidator(),
        lookup=directory,
        store=directory,
        credentials=credentials,
        ctx=ctx,
    )
