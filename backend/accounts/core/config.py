"""Configuration classes for the registration service, selected by ``APP_ENV``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production
PLACEHOLDER_SECRETS: Final[frozenset[str]] = frozenset({"CHANGE_ME", "CHANGE_ME_JWT"})

load_dotenv()

_TRUTHY = {"1", "true", "yes", "y", "on"}


def env_bool(name: str, default: bool = False) -> bool:
    """Return the environment flag ``name``, or ``default`` when unset."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_seconds(name: str, default: int) -> timedelta:
    """Read a lifetime in whole seconds; unset or malformed values use ``default``."""
    raw = os.getenv(name)
    try:
        seconds = int(raw) if raw is not None else default
    except ValueError:
        seconds = default
    return timedelta(seconds=seconds)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    APP_VERSION: str
        Version string reported by the health endpoint.
    SECRET_KEY: str
        Flask secret. Defaults to a development placeholder.
    JWT_SECRET_KEY: str
        Key used by ``flask-jwt-extended`` for signing registration tokens.
    JWT_ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Lifetime of tokens minted at registration (``JWT_ACCESS_TOKEN_EXPIRES``
        env var, in seconds; 900 by default).
    PASSWORD_HASH_METHOD: str
        ``werkzeug.security`` hashing method used to encrypt credentials.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    SQLALCHEMY_TRACK_MODIFICATIONS: bool
        Disabled to avoid extra overhead from the event system.
    SQLALCHEMY_ECHO: bool
        When ``True`` SQLAlchemy logs SQL statements for debugging.
    DB_CREATE_ALL: bool
        Create missing tables on startup (handy for SQLite deployments).
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    DEBUG: bool
        Toggles Flask debug mode.
    REQUIRE_SECRETS: bool
        Fail at startup when the signing keys are placeholders.
    TESTING: bool
        Enables Flask testing mode when ``True``.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Credentials and tokens
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ACCESS_TOKEN_EXPIRES = env_seconds("JWT_ACCESS_TOKEN_EXPIRES", 900)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Persistence
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    DB_CREATE_ALL = env_bool("DB_CREATE_ALL", False)

    PROPAGATE_EXCEPTIONS = False
    REQUIRE_SECRETS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode and table auto-creation by default.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    DB_CREATE_ALL = env_bool("DB_CREATE_ALL", True)


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Uses the cheap ``pbkdf2:sha256:1000`` hashing method to keep tests fast.
    - Propagates exceptions so pytest can surface tracebacks directly.
    """

    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Production defaults: no debug, no SQL echo, real secrets required."""

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    REQUIRE_SECRETS = True


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV`` (development when unset or unknown)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def ensure_secrets(config: Mapping[str, object]) -> None:
    """
    Refuse to start with placeholder signing keys when secrets are required.

    :param config: Loaded Flask configuration.
    :raises RuntimeError: If ``REQUIRE_SECRETS`` is set and ``SECRET_KEY`` or
        ``JWT_SECRET_KEY`` is missing or still a placeholder.
    """
    if not config.get("REQUIRE_SECRETS", False):
        return
    missing = [
        key
        for key in ("SECRET_KEY", "JWT_SECRET_KEY")
        if not config.get(key) or config.get(key) in PLACEHOLDER_SECRETS
    ]
    if missing:
        raise RuntimeError(f"Refusing to start without real secrets: {', '.join(missing)}")
