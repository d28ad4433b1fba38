"""Reference endpoints that exercise the error responder."""

from __future__ import annotations

from typing import NoReturn

from flask import Blueprint, Response, request
from pydantic import Field

from httperr.errors import DEFAULT_ERRORS, NOT_FOUND, new_high_level_error
from httperr.middleware import abort_and_error
from httperr.responses import ok
from httperr.schemas import SchemaModel, ValidationError, parse_model


class RaisePayload(SchemaModel):
    code: int = Field(ge=400, le=599)
    message: str = Field(min_length=1)


health_bp = Blueprint("health", __name__)
errors_bp = Blueprint("errors_api", __name__, url_prefix="/api/errors")


@health_bp.get("/health")
def health() -> Response:
    return ok({"status": "ok"})


@errors_bp.get("")
def catalog() -> Response:
    data = {name: error.to_dict() for name, error in DEFAULT_ERRORS.items()}
    return ok({"errors": data})


@errors_bp.get("/<name>")
def raise_named(name: str) -> NoReturn:
    error = DEFAULT_ERRORS.get(name)
    if error is None:
        abort_and_error(NOT_FOUND)
    abort_and_error(error)


@errors_bp.post("")
def raise_custom() -> NoReturn:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(RaisePayload, raw_payload)
    except ValidationError as exc:
        abort_and_error(exc)
    abort_and_error(new_high_level_error(payload.code, payload.message))


blueprints = [health_bp, errors_bp]


__all__ = ["blueprints", "health", "catalog", "raise_named", "raise_custom"]
