"""Per-request error accumulator and the end-of-chain JSON responder.

Views and ``before_request`` hooks record errors on the request instead of
building error responses themselves::

    @bp.get("/items/<item_id>")
    def get_item(item_id):
        item = repo.find(item_id)
        if item is None:
            abort_and_error(NOT_FOUND)
        return ok(item)

Once the chain finishes (or is halted), the responder installed by
:func:`install_error_responder` classifies the most recent recorded error
with :func:`~httperr.errors.extract_error` and writes it as JSON. A request
that recorded nothing keeps whatever response it produced.

Prefer ``abort_and_error(NOT_FOUND)`` over ``raise NOT_FOUND``: raising a
shared constant attaches the request's traceback to it. The responder
detaches those again when the request is torn down.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from flask import Flask, Response, current_app
from werkzeug.exceptions import HTTPException

from .context import last_error, record_error, request_errors
from .errors import DEFAULT_ERRORS, extract_error, find_high_level, iter_error_chain
from .logging import get_logger, request_context
from .responses import error_response

logger = get_logger().getChild("middleware")

CAPTURE_EXCEPTIONS_KEY = "HTTPERR_CAPTURE_EXCEPTIONS"
LOG_UNCLASSIFIED_KEY = "HTTPERR_LOG_UNCLASSIFIED"


class RequestHalted(Exception):
    """Stops the remaining handler chain for the current request."""


def halt() -> NoReturn:
    """Stop the chain without recording anything."""

    raise RequestHalted()


def abort_and_error(error: BaseException) -> NoReturn:
    """Record ``error`` and hand the request over to the responder."""

    record_error(error)
    raise RequestHalted()


def _halted_response() -> Response:
    return current_app.response_class(status=200)


def _release_shared(errors: list[BaseException]) -> None:
    shared = {id(error) for error in DEFAULT_ERRORS.values()}
    chained = [item for error in errors for item in iter_error_chain(error)]
    for item in chained:
        if id(item) in shared:
            item.__traceback__ = None
            item.__cause__ = None
            item.__context__ = None
            item.__suppress_context__ = False


def _log_error(error: BaseException) -> None:
    high_level = find_high_level(error)
    if high_level is None:
        with_trace = current_app.config.get(LOG_UNCLASSIFIED_KEY, True)
        logger.error(
            "unclassified error: %s",
            type(error).__name__,
            exc_info=error if with_trace else None,
            extra=request_context(),
        )
        return
    level = logging.WARNING if high_level.code < 500 else logging.ERROR
    logger.log(level, "request failed: %s %s", high_level.code, high_level.message, extra=request_context())


def install_error_responder(app: Flask) -> None:
    """Register the termination hook and halt handling on ``app``."""

    app.config.setdefault(CAPTURE_EXCEPTIONS_KEY, True)
    app.config.setdefault(LOG_UNCLASSIFIED_KEY, True)

    @app.errorhandler(RequestHalted)
    def _on_halt(exc: RequestHalted):
        return _halted_response()

    @app.errorhandler(Exception)
    def _on_exception(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        if not app.config.get(CAPTURE_EXCEPTIONS_KEY, True):
            raise exc
        record_error(exc)
        return _halted_response()

    @app.after_request
    def _respond_with_error(response: Response) -> Response:
        error = last_error()
        if error is None:
            return response
        _log_error(error)
        return error_response(extract_error(error))

    @app.teardown_request
    def _detach_shared_errors(exc: BaseException | None) -> None:
        _release_shared(request_errors())


__all__ = [
    "RequestHalted",
    "request_errors",
    "record_error",
    "last_error",
    "halt",
    "abort_and_error",
    "install_error_responder",
]
