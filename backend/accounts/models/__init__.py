"""SQLAlchemy models registered on the shared metadata."""

from accounts.models.user import User

__all__ = ["User"]
