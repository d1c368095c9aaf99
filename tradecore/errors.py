# tradecore/errors.py

"""Error taxonomy for the transaction core.

Every failure raised by a lifecycle transition or a service operation is
a :class:`TransactionError` tagged with one of four :class:`ErrorKind`
values.  Errors carry a human-readable message and are never retried by
the core; the caller decides what to do next.
"""

from enum import Enum


class ErrorKind(Enum):
    """The four failure categories a caller can branch on."""

    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    INVALID_OPERATION = "invalid_operation"
    INVALID_STATE = "invalid_state"


class TransactionError(Exception):
    """Base class for transaction core failures."""

    kind: ErrorKind = ErrorKind.INVALID_OPERATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PermissionDeniedError(TransactionError):
    """Wrong role, wrong ownership, or a banned/deleted account."""

    kind = ErrorKind.PERMISSION_DENIED


class NotFoundError(TransactionError):
    """A referenced user, product, order, review or appeal is missing."""

    kind = ErrorKind.NOT_FOUND


class InvalidOperationError(TransactionError):
    """A business rule forbids the request."""

    kind = ErrorKind.INVALID_OPERATION


class InvalidStateError(TransactionError):
    """A lifecycle transition was attempted from a forbidden state."""

    kind = ErrorKind.INVALID_STATE
