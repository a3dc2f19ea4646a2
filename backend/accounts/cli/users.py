"""Flask CLI commands for managing registered users."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from accounts.core.extensions import db
from accounts.services._shared.errors import (
    ConflictError,
    RegistrationValidationError,
)
from accounts.services.registration.dto import RegistrationRequest
from accounts.services.registration.wiring import build_registration_service

LOGGER = logging.getLogger(__name__)


def _format_validation_errors(errors: dict) -> str:
    """Flatten ``{field: [messages]}`` into one line per field."""
    lines = []
    for field, messages in sorted(errors.items()):
        text = "; ".join(messages) if isinstance(messages, list) else str(messages)
        lines.append(f"  {field}: {text}")
    return "\n".join(lines)


@click.group("users")
def users_cli() -> None:
    """Manage registered users."""


@users_cli.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create the ``users`` table when it does not exist yet."""
    db.create_all()
    LOGGER.info("users.init_db")
    click.echo("Database schema is ready.")


@users_cli.command("register")
@click.option("--username", required=True, help="Public handle of the new user.")
@click.option("--email", required=True, help="Login email of the new user.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Plaintext password (prompted when omitted).",
)
@with_appcontext
def register_command(username: str, email: str, password: str) -> None:
    """Register a user and print its id and token."""
    service = build_registration_service(current_app.config)
    request = RegistrationRequest(username=username, email=email, password=password)
    try:
        user = service.register_user(request)
    except RegistrationValidationError as exc:
        raise click.ClickException(
            f"{exc.message}:\n{_format_validation_errors(exc.errors)}"
        ) from exc
    except ConflictError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Registered user id={user.id} username={user.username}")
    click.echo(f"token={user.token}")
