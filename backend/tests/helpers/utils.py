"""Tiny helpers shared across test modules."""

from __future__ import annotations

from accounts.services.registration.dto import RegistrationRequest


def make_request(
    username: str = "bob",
    email: str = "hello@world.com",
    password: str = "password",
) -> RegistrationRequest:
    """Build a :class:`RegistrationRequest` with sensible defaults."""
    return RegistrationRequest(username=username, email=email, password=password)


def problem_code(response) -> str | None:
    """Return the ``code`` member of a problem+json response."""
    return (response.get_json() or {}).get("code")
