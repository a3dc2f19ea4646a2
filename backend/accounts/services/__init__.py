"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`accounts.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``accounts.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Registration (from ``accounts.services.registration``)
    * :class:`UserRegistrationService`
    * DTOs: :class:`RegistrationRequest`, :class:`UserAccount`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .registration.dto import RegistrationRequest, UserAccount
from .registration.service import UserRegistrationService

__all__ = [
    "BaseService",
    "ServiceContext",
    "UserRegistrationService",
    "RegistrationRequest",
    "UserAccount",
]
