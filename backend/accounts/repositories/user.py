"""User repository: persistence-only lookups for registration."""

from __future__ import annotations

from sqlalchemy import func

from accounts.models.user import User
from accounts.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER hashes passwords or issues tokens; those belong to the
    credential authority.
    """

    model = User

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact username.

        :param username: Username to search.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return self.first_where(User.username == username)

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive, surrounding blanks ignored).

        :param email: Email address to search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return self.first_where(func.lower(User.email) == email.strip().lower())
