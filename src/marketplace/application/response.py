"""Uniform result envelope returned by every application handler.

Handlers never let domain errors escape: they come back as a failed
``ServiceResponse`` carrying a human-readable message and an ``ErrorKind``.
``to_dict()`` produces the ``{success, message, data}`` JSON shape.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar

from marketplace.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)

T = TypeVar("T")


class ErrorKind(Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    INVALID_STATE = "INVALID_STATE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    UNEXPECTED = "UNEXPECTED"


_KIND_BY_EXCEPTION: list[tuple[type[DomainException], ErrorKind]] = [
    (EntityNotFoundError, ErrorKind.NOT_FOUND),
    (InvalidStateError, ErrorKind.INVALID_STATE),
    (InvalidTransitionError, ErrorKind.INVALID_TRANSITION),
    (ValidationError, ErrorKind.VALIDATION),
]


@dataclass(frozen=True)
class ServiceResponse(Generic[T]):
    success: bool
    message: str
    data: T | None = None
    error: ErrorKind | None = None

    @staticmethod
    def ok(message: str, data: Any = None) -> ServiceResponse[Any]:
        return ServiceResponse(success=True, message=message, data=data)

    @staticmethod
    def fail(kind: ErrorKind, message: str) -> ServiceResponse[Any]:
        return ServiceResponse(success=False, message=message, error=kind)

    @staticmethod
    def from_exception(exc: DomainException) -> ServiceResponse[Any]:
        for exc_type, kind in _KIND_BY_EXCEPTION:
            if isinstance(exc, exc_type):
                return ServiceResponse.fail(kind, str(exc))
        return ServiceResponse.fail(ErrorKind.VALIDATION, str(exc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": to_jsonable(self.data),
        }


def to_jsonable(value: Any) -> Any:
    """Convert DTO trees into plain JSON-compatible values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value
