"""Per-request error accumulator kept on :data:`flask.g`."""

from __future__ import annotations

from flask import g


def request_errors() -> list[BaseException]:
    """Return the ordered error list of the current request."""

    return g.setdefault("httperr_errors", [])


def record_error(error: BaseException) -> None:
    request_errors().append(error)


def last_error() -> BaseException | None:
    errors = request_errors()
    return errors[-1] if errors else None


__all__ = ["request_errors", "record_error", "last_error"]
