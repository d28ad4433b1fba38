"""Map internal errors to JSON HTTP error responses for Flask apps."""

from .errors import (
    BAD_GATEWAY,
    BAD_REQUEST,
    CONFLICT,
    DEFAULT_ERRORS,
    DEFAULT_INTERNAL_ERROR,
    FORBIDDEN,
    GATEWAY_TIMEOUT,
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    NOT_IMPLEMENTED,
    PROXY_ERROR,
    SERVICE_UNAVAILABLE,
    TOO_MANY_REQUESTS,
    UNAUTHORIZED,
    UNKNOWN_ERROR,
    HasHighLevelForm,
    HighLevelError,
    extract_error,
    find_high_level,
    iter_error_chain,
    new_high_level_error,
)
from .context import last_error, record_error, request_errors
from .middleware import RequestHalted, abort_and_error, halt, install_error_responder

__all__ = [
    "BAD_GATEWAY",
    "BAD_REQUEST",
    "CONFLICT",
    "DEFAULT_ERRORS",
    "DEFAULT_INTERNAL_ERROR",
    "FORBIDDEN",
    "GATEWAY_TIMEOUT",
    "INTERNAL_SERVER_ERROR",
    "NOT_FOUND",
    "NOT_IMPLEMENTED",
    "PROXY_ERROR",
    "SERVICE_UNAVAILABLE",
    "TOO_MANY_REQUESTS",
    "UNAUTHORIZED",
    "UNKNOWN_ERROR",
    "HasHighLevelForm",
    "HighLevelError",
    "extract_error",
    "find_high_level",
    "iter_error_chain",
    "new_high_level_error",
    "RequestHalted",
    "abort_and_error",
    "halt",
    "install_error_responder",
    "last_error",
    "record_error",
    "request_errors",
]
