"""Tagged results returned to collaborators (controllers, scripts).

Services raise domain exceptions; the engine facade turns them into either an
``Ok`` carrying the payload or a ``Failure`` carrying an ``ErrorKind`` and a
user-visible message, so callers branch on the type instead of on ad-hoc
``success``/``message`` fields.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, TypeVar, Union

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORAGE = "STORAGE"
    AUTHORIZATION = "AUTHORIZATION"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Failure]

_KIND_BY_ERROR: tuple[tuple[type[DomainError], ErrorKind], ...] = (
    (NotFoundError, ErrorKind.NOT_FOUND),
    (ConflictError, ErrorKind.CONFLICT),
    (StorageError, ErrorKind.STORAGE),
    (AuthenticationError, ErrorKind.AUTHORIZATION),
    (AuthorizationError, ErrorKind.AUTHORIZATION),
    (ValidationError, ErrorKind.VALIDATION),
)


def kind_of(error: DomainError) -> ErrorKind:
    for error_type, kind in _KIND_BY_ERROR:
        if isinstance(error, error_type):
            return kind
    return ErrorKind.VALIDATION


def capture(fn: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Run ``fn`` and wrap its outcome; only domain errors become failures."""
    try:
        return Ok(fn(*args, **kwargs))
    except DomainError as e:
        kind = kind_of(e)
        if kind is ErrorKind.STORAGE:
            logger.exception("Storage failure in %s", getattr(fn, "__qualname__", fn))
        else:
            logger.info("%s failure in %s: %s", kind.value, getattr(fn, "__qualname__", fn), e)
        return Failure(kind=kind, message=str(e))
