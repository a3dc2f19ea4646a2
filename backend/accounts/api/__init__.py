"""HTTP API: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """
    Mount each ``(blueprint, relative_prefix)`` pair under ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself,
    so ``("/api/v1", [(auth_bp, "/auth")])`` serves ``/api/v1/auth/...``.
    """
    for bp, rel_prefix in entries:
        parts = (base_prefix.strip("/"), rel_prefix.strip("/"))
        app.register_blueprint(bp, url_prefix="/" + "/".join(p for p in parts if p))


def init_app(app: Flask) -> None:
    """Mount API v1 (health and auth)."""
    from accounts.api.v1 import API_VERSION, REGISTRY

    api_base = app.config.get("API_BASE_PREFIX", "/api")
    register_blueprint_group(app, base_prefix=f"{api_base}/{API_VERSION}", entries=REGISTRY)


__all__ = ["init_app", "register_blueprint_group"]
