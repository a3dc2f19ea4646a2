"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import RegisteredUserSchema, RegisterSchema

__all__ = [
    "RegisterSchema",
    "RegisteredUserSchema",
]
