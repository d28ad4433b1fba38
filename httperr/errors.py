"""High-level HTTP error values and the classifier that extracts them."""

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType
from typing import Iterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class HasHighLevelForm(Protocol):
    """Anything that can describe itself as a :class:`HighLevelError`."""

    def as_high_level(self) -> "HighLevelError | None":
        ...


class HighLevelError(Exception):
    """An HTTP status code paired with a user facing message.

    Compared and hashed by value. ``code`` and ``message`` live in ``args``
    so instances pickle and chain like any other exception.
    """

    def __init__(self, code: int, message: str):
        super().__init__(code, message)

    @property
    def code(self) -> int:
        return self.args[0]

    @property
    def message(self) -> str:
        return self.args[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HighLevelError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))

    def __repr__(self) -> str:
        return f"HighLevelError(code={self.code!r}, message={self.message!r})"

    def __str__(self) -> str:
        return self.message

    def as_high_level(self) -> "HighLevelError":
        return self

    def to_dict(self) -> dict[str, int | str]:
        return {"status": self.code, "error": self.message}


def new_high_level_error(code: int, message: str) -> HighLevelError:
    """Build a :class:`HighLevelError`. The code is not validated."""

    return HighLevelError(code=code, message=message)


DEFAULT_INTERNAL_ERROR = new_high_level_error(HTTPStatus.INTERNAL_SERVER_ERROR.value, "internal server error")
BAD_REQUEST = new_high_level_error(HTTPStatus.BAD_REQUEST.value, "missed parameter, incorrect or malformed data")
NOT_FOUND = new_high_level_error(HTTPStatus.NOT_FOUND.value, "not found")
UNAUTHORIZED = new_high_level_error(HTTPStatus.UNAUTHORIZED.value, "unauthorized")
FORBIDDEN = new_high_level_error(HTTPStatus.FORBIDDEN.value, "forbidden")
CONFLICT = new_high_level_error(HTTPStatus.CONFLICT.value, "conflict")
TOO_MANY_REQUESTS = new_high_level_error(HTTPStatus.TOO_MANY_REQUESTS.value, "too many requests")
INTERNAL_SERVER_ERROR = new_high_level_error(HTTPStatus.INTERNAL_SERVER_ERROR.value, "internal server error")
NOT_IMPLEMENTED = new_high_level_error(HTTPStatus.NOT_IMPLEMENTED.value, "not implemented")
SERVICE_UNAVAILABLE = new_high_level_error(HTTPStatus.SERVICE_UNAVAILABLE.value, "service unavailable")
GATEWAY_TIMEOUT = new_high_level_error(HTTPStatus.GATEWAY_TIMEOUT.value, "gateway timeout")
BAD_GATEWAY = new_high_level_error(HTTPStatus.BAD_GATEWAY.value, "bad gateway")
PROXY_ERROR = new_high_level_error(HTTPStatus.BAD_GATEWAY.value, "proxy error")
UNKNOWN_ERROR = new_high_level_error(HTTPStatus.INTERNAL_SERVER_ERROR.value, "unknown error")

DEFAULT_ERRORS: Mapping[str, HighLevelError] = MappingProxyType(
    {
        "default_internal_error": DEFAULT_INTERNAL_ERROR,
        "bad_request": BAD_REQUEST,
        "not_found": NOT_FOUND,
        "unauthorized": UNAUTHORIZED,
        "forbidden": FORBIDDEN,
        "conflict": CONFLICT,
        "too_many_requests": TOO_MANY_REQUESTS,
        "internal_server_error": INTERNAL_SERVER_ERROR,
        "not_implemented": NOT_IMPLEMENTED,
        "service_unavailable": SERVICE_UNAVAILABLE,
        "gateway_timeout": GATEWAY_TIMEOUT,
        "bad_gateway": BAD_GATEWAY,
        "proxy_error": PROXY_ERROR,
        "unknown_error": UNKNOWN_ERROR,
    }
)


def iter_error_chain(error: BaseException | None) -> Iterator[BaseException]:
    """Yield ``error`` and everything it wraps, outermost first.

    Explicit causes take precedence over implicit context. Exception groups
    are walked depth-first through their members.
    """

    seen: set[int] = set()
    stack: list[BaseException] = [error] if error is not None else []
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        wrapped: list[BaseException] = []
        if isinstance(current, BaseExceptionGroup):
            wrapped.extend(current.exceptions)
        if current.__cause__ is not None:
            wrapped.append(current.__cause__)
        elif current.__context__ is not None and not current.__suppress_context__:
            wrapped.append(current.__context__)
        stack.extend(reversed(wrapped))


def _high_level_form(candidate: object) -> HighLevelError | None:
    if not isinstance(candidate, HasHighLevelForm):
        return None
    try:
        form = candidate.as_high_level()
    except Exception:
        return None
    return form if isinstance(form, HighLevelError) else None


def find_high_level(error: BaseException | None) -> HighLevelError | None:
    """Return the first high-level form in ``error``'s chain, or ``None``."""

    for candidate in iter_error_chain(error):
        form = _high_level_form(candidate)
        if form is not None:
            return form
    return None


def extract_error(error: BaseException | None) -> HighLevelError:
    """Classify ``error``, falling back to :data:`DEFAULT_INTERNAL_ERROR`.

    Never raises.
    """

    form = find_high_level(error)
    return DEFAULT_INTERNAL_ERROR if form is None else form


__all__ = [
    "HasHighLevelForm",
    "HighLevelError",
    "new_high_level_error",
    "DEFAULT_INTERNAL_ERROR",
    "BAD_REQUEST",
    "NOT_FOUND",
    "UNAUTHORIZED",
    "FORBIDDEN",
    "CONFLICT",
    "TOO_MANY_REQUESTS",
    "INTERNAL_SERVER_ERROR",
    "NOT_IMPLEMENTED",
    "SERVICE_UNAVAILABLE",
    "GATEWAY_TIMEOUT",
    "BAD_GATEWAY",
    "PROXY_ERROR",
    "UNKNOWN_ERROR",
    "DEFAULT_ERRORS",
    "iter_error_chain",
    "find_high_level",
    "extract_error",
]
