# tradecore/services/user_service.py

"""Account registration, credential checks and reputation lookups.

Session handling (who is "logged in") belongs to the caller; this
service only creates accounts and verifies credentials.
"""

import hashlib
import hmac
import logging
from collections.abc import Iterable

from tradecore.errors import InvalidOperationError, PermissionDeniedError
from tradecore.filters.validation import (
    validate_password,
    validate_username,
)
from tradecore.models.enums import UserRole, UserStatus
from tradecore.models.user import User
from tradecore.services import reputation
from tradecore.services.guards import log_rejections
from tradecore.services.notifier import Notifier
from tradecore.storage.ids import USER_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.users")


def hash_password(raw_password: str) -> str:
    """SHA-256 hex digest of *raw_password*."""
    return hashlib.sha256(raw_password.encode("utf-8")).hexdigest()


def password_matches(raw_password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(raw_password), password_hash)


class UserService:
    """Creates and looks up marketplace accounts."""

    def __init__(self, store: Store, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    def register(
        self,
        username: str,
        password: str,
        roles: Iterable[UserRole],
    ) -> User:
        """Create an ACTIVE account with the initial reputation."""
        with log_rejections(logger, "Register", username=username):
            validate_username(username)
            validate_password(password)
            role_set = set(roles)
            if not role_set:
                raise InvalidOperationError(
                    "At least one role is required"
                )

            user = User(
                user_id=generate_id(USER_PREFIX),
                username=username.strip(),
                password_hash=hash_password(password),
                roles=role_set,
            )
            if not self._store.add_user_if_absent(user):
                raise InvalidOperationError(
                    f"Username {user.username} is already taken"
                )
        logger.info(
            "User registered: user=%s username=%s roles=%s",
            user.user_id,
            user.username,
            sorted(r.name for r in role_set),
        )
        return user

    def authenticate(self, username: str, password: str) -> User:
        """Return the account for valid credentials.

        Banned users may still sign in (to file an appeal); deleted
        accounts may not.
        """
        with log_rejections(logger, "Authenticate", username=username):
            user = self._store.find_user_by_username(username)
            if user is None or not password_matches(
                password, user.password_hash,
            ):
                raise PermissionDeniedError(
                    "Invalid username or password"
                )
            if user.status == UserStatus.DELETED:
                raise PermissionDeniedError("Account has been deleted")

        user.touch_login()
        self._notifier.publish(
            user.user_id, f"Welcome back, {user.username}!",
        )
        logger.info("User authenticated: user=%s", user.user_id)
        return user

    def get(self, user_id: str) -> User:
        return self._store.users.require(user_id)

    def sellers(self) -> list[User]:
        return self._store.users.filter(lambda u: u.is_seller)

    def adjust_reputation(self, user_id: str, delta: int) -> int:
        """Apply a signed reputation change. Returns the new score."""
        return reputation.apply_delta(self.get(user_id), delta)
