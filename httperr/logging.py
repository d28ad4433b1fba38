"""Logging helpers with request correlation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from flask import Flask, g, has_request_context, request

from .context import request_errors
from .errors import extract_error

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str = "httperr") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def request_context() -> dict[str, Any]:
    if not has_request_context():
        return {"request_id": "-", "path": "-", "method": "-"}
    return {
        "request_id": getattr(g, "request_id", "-"),
        "path": request.path,
        "method": request.method,
    }


def error_context() -> dict[str, Any]:
    """Describe the error the responder answered this request with, if any."""

    errors = request_errors()
    if not errors:
        return {"error_status": None, "error": None, "error_count": 0}
    high_level = extract_error(errors[-1])
    return {
        "error_status": high_level.code,
        "error": high_level.message,
        "error_count": len(errors),
    }


def install_request_logging(app: Flask) -> None:
    """Log one "handled request" line per request, tagged with its request id
    and, when one was recorded, the classified error.
    """

    logger = get_logger()

    @app.before_request
    def _begin_request() -> None:
        g.request_id = uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):
        duration_ms = 0.0
        if hasattr(g, "request_started"):
            duration_ms = (time.perf_counter() - g.request_started) * 1000
        logger.info(
            "handled request",
            extra={
                **request_context(),
                **error_context(),
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response


__all__ = ["get_logger", "request_context", "error_context", "install_request_logging"]
