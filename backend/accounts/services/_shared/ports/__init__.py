"""
accounts.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts the
registration use case depends on.

These ports decouple the service layer from concrete implementations of user
storage, password hashing, token signing and request validation.

Modules
-------
- :mod:`user_directory`:
    Defines :class:`~.UserLookup` and :class:`~.UserStore`, the read and write
    sides of user persistence, plus :class:`~.InMemoryUserDirectory`.

- :mod:`credential_authority`:
    Defines :class:`~.CredentialAuthority`: password encryption and token
    issuance for persisted users.

- :mod:`registration_validator`:
    Defines :class:`~.RegistrationValidator`: side-effect-free request checks.

- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for JWT creation and decoding.

Design Notes
------------
Concrete adapters (SQLAlchemy, werkzeug, Flask-JWT-Extended, marshmallow)
implement these interfaces under ``accounts.infra`` and
``accounts.services.registration.validator``.
"""

from __future__ import annotations

from .credential_authority import CredentialAuthority, StubCredentialAuthority
from .registration_validator import AcceptAllValidator, RegistrationValidator
from .token_provider import StubTokenProvider, TokenProvider
from .user_directory import InMemoryUserDirectory, UserLookup, UserStore

__all__ = [
    "UserLookup",
    "UserStore",
    "InMemoryUserDirectory",
    "CredentialAuthority",
    "StubCredentialAuthority",
    "RegistrationValidator",
    "AcceptAllValidator",
    "TokenProvider",
    "StubTokenProvider",
]
