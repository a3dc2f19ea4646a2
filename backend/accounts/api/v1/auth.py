"""Registration endpoint delegating to the registration service."""

from __future__ import annotations

from flask import Blueprint

from accounts.api.deps import json_body, json_response, registration_service, timing
from accounts.schemas import RegisteredUserSchema
from accounts.services._shared.errors import ServiceError
from accounts.services.registration.dto import RegistrationRequest

bp = Blueprint("auth", __name__)

registered_user_schema = RegisteredUserSchema()


@bp.post("/register")
@timing
def register():
    """Register a new user and return its identity and token."""

    payload = json_body()
    registrant = RegistrationRequest(
        username=payload.get("username", ""),
        email=payload.get("email", ""),
        password=payload.get("password", ""),
    )
    service = registration_service()
    try:
        user = service.register_user(registrant)
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
    body = {"data": registered_user_schema.dump(user)}
    return json_response(body, status=201)
