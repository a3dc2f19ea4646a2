"""Application factory for the registration service."""

from __future__ import annotations

from flask import Flask

from accounts import cli
from accounts.api import init_app as init_api
from accounts.core import errors, extensions
from accounts.core.config import BaseConfig, ensure_secrets, get_config
from accounts.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Build the Flask application.

    :param config: Config object or import path; defaults to the class
        selected by ``APP_ENV``.
    :param instance_relative_config: Also read ``instance_config_filename``
        from the instance folder when present.
    :param instance_config_filename: Instance-local overrides file.
    :returns: App exposing ``/api/v1/auth/register``, ``/api/v1/health`` and
        the ``flask users`` commands.
    :raises RuntimeError: When production secrets are still placeholders.
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)
    ensure_secrets(app.config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    init_logging(app)

    extensions.init_app(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)

    return app
