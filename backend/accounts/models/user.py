"""User model backing the registration user directory."""

from __future__ import annotations

from sqlalchemy import Index, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from accounts.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Fields
    ------
    username : str
        Public handle. Unique per system.
    email : str
        Login email, stored as submitted. Unique per system ignoring case.
    password_hash : str
        Encrypted credential produced by the credential authority; the model
        never sees the plaintext password.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Storage-level uniqueness backstop for concurrent registrations
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
    )

    # -------------------- Validators --------------------
    @validates("username", "email")
    def _require_text(self, key: str, value: str) -> str:
        """
        Reject missing or blank identifiers.

        :param key: Field name (``username`` or ``email``).
        :type key: str
        :param value: Submitted value.
        :type value: str
        :returns: The value unchanged.
        :rtype: str
        :raises ValueError: If the value is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key.capitalize()} is required.")
        return value

    @validates("password_hash")
    def _require_hash(self, key: str, value: str) -> str:
        """Reject empty credentials."""
        if not isinstance(value, str) or not value:
            raise ValueError("Password hash must be a non-empty string.")
        return value


# Emails are unique case-insensitively, matching ``UserRepository.get_by_email``;
# the same index serves those ``lower(email)`` lookups.
Index("uq_users_email", func.lower(User.email), unique=True)
