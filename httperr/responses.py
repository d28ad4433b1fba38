"""JSON response helpers."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from .errors import HighLevelError
from .schemas import ErrorBody


def ok(data: Any, *, status: int = 200) -> Response:
    """Return a success envelope."""

    payload = {"success": True, "data": data}
    response = jsonify(payload)
    response.status_code = status
    return response


def error_response(error: HighLevelError) -> Response:
    """Write ``error`` as ``{"status": ..., "error": ...}`` with a matching status code."""

    body = ErrorBody(status=error.code, error=error.message)
    response = jsonify(body.model_dump())
    response.status_code = error.code
    return response


__all__ = ["ok", "error_response"]
