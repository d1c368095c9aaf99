# tradecore/services/guards.py

"""Permission checks and rejection logging shared by the services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from tradecore.errors import PermissionDeniedError, TransactionError
from tradecore.models.enums import UserRole, UserStatus
from tradecore.models.user import User


def require_active(user: User, action: str) -> None:
    """Banned and deleted accounts cannot perform *action*."""
    if user.status == UserStatus.BANNED:
        raise PermissionDeniedError(
            f"Account {user.username} is banned and cannot {action}"
        )
    if user.status == UserStatus.DELETED:
        raise PermissionDeniedError(
            f"Account {user.username} has been deleted"
        )


def require_role(user: User, role: UserRole, action: str) -> None:
    if not user.has_role(role):
        raise PermissionDeniedError(
            f"Only {role.label.lower()}s can {action}"
        )


def require_admin(user: User) -> None:
    if not user.is_admin:
        raise PermissionDeniedError("Administrator privileges required")


@contextmanager
def log_rejections(
    logger: logging.Logger, action: str, **context: object,
) -> Iterator[None]:
    """Log a :class:`TransactionError` raised in the block, then re-raise."""
    try:
        yield
    except TransactionError as exc:
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.warning(
            "%s rejected (%s): [%s] %s",
            action,
            details,
            exc.kind.value,
            exc.message,
        )
        raise
