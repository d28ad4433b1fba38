"""Wire schemas for error bodies and request payloads."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel

from .errors import BAD_REQUEST, HighLevelError


class ValidationError(ValueError):
    """Raised when a payload does not match its schema.

    Classifies as :data:`~httperr.errors.BAD_REQUEST`; ``details`` stays
    server side.
    """

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details

    def as_high_level(self) -> HighLevelError:
        return BAD_REQUEST


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


class ErrorBody(SchemaModel):
    """JSON body written for every classified error."""

    model_config = pydantic.ConfigDict(extra="forbid")

    status: int
    error: str


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid request payload", details=exc.errors()) from exc


__all__ = ["ValidationError", "SchemaModel", "ErrorBody", "parse_model"]
