# tradecore/services/results.py

"""Result wrapper for callers that prefer values over exceptions.

Service operations raise :class:`~tradecore.errors.TransactionError`.
:func:`attempt` runs one and folds an expected failure into a
:class:`ServiceResult`, keeping the error kind so a handler can branch
on it without ``try``/``except``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tradecore.errors import (
    ErrorKind,
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    TransactionError,
)

T = TypeVar("T")

_ERROR_TYPES: dict[ErrorKind, type[TransactionError]] = {
    ErrorKind.PERMISSION_DENIED: PermissionDeniedError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_OPERATION: InvalidOperationError,
    ErrorKind.INVALID_STATE: InvalidStateError,
}


@dataclass
class ServiceResult(Generic[T]):
    """Standard wrapper for service outcomes.

    - value: payload on success (``None`` for void operations)
    - error: the failure category, when the call failed
    - detail: human-readable failure message
    """

    value: T | None = None
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the value, or re-raise the failure as an exception."""
        if self.error is not None:
            raise _ERROR_TYPES[self.error](self.detail or "")
        return self.value


def service_ok(value: T | None = None) -> ServiceResult[T]:
    return ServiceResult(value=value)


def service_err(kind: ErrorKind, detail: str) -> ServiceResult[Any]:
    return ServiceResult(error=kind, detail=detail)


def attempt(
    fn: Callable[..., T], *args: Any, **kwargs: Any,
) -> ServiceResult[T]:
    """Call ``fn(*args, **kwargs)`` and wrap the outcome.

    Only :class:`TransactionError` is folded into the result; anything
    else is a bug and propagates.
    """
    try:
        return service_ok(fn(*args, **kwargs))
    except TransactionError as exc:
        return service_err(exc.kind, exc.message)
