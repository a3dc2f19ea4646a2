"""Repository package exposing persistence-layer access for the models."""

from __future__ import annotations

from accounts.repositories.base import BaseRepository
from accounts.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
