# tradecore/services/admin_service.py

"""Administrator actions that change account status."""

import logging
from dataclasses import dataclass

from tradecore.config.settings import Settings
from tradecore.errors import InvalidOperationError
from tradecore.filters.validation import validate_appeal_reason
from tradecore.models.appeal import Appeal
from tradecore.models.enums import UserStatus
from tradecore.models.user import User
from tradecore.services import reputation
from tradecore.services.guards import log_rejections, require_admin
from tradecore.services.notifier import Notifier
from tradecore.storage.ids import APPEAL_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.admin")


@dataclass
class SystemStats:
    """Entity counts for the admin dashboard."""

    user_count: int
    product_count: int
    order_count: int
    review_count: int


class AdminService:
    """Ban/unban accounts and resolve ban appeals."""

    def __init__(self, store: Store, notifier: Notifier) -> None:
        self._store = store
        self._notifier = notifier

    def ban(self, admin: User, user_id: str) -> User:
        """Ban *user_id* and apply the ban penalty."""
        with log_rejections(logger, "Ban", admin=admin.user_id, user=user_id):
            require_admin(admin)
            user = self._store.users.require(user_id)
            if user.status == UserStatus.BANNED:
                raise InvalidOperationError(
                    f"User {user.username} is already banned"
                )
            user.status = UserStatus.BANNED
            reputation.apply_delta(user, -Settings.BAN_PENALTY)
        logger.info(
            "User banned: user=%s by=%s reputation=%d",
            user_id, admin.user_id, user.reputation,
        )
        self._notifier.publish(
            user_id,
            f"Your account has been banned. "
            f"Reputation -{Settings.BAN_PENALTY}.",
        )
        return user

    def unban(self, admin: User, user_id: str) -> User:
        """Restore *user_id* to ACTIVE and apply the unban reward."""
        with log_rejections(
            logger, "Unban", admin=admin.user_id, user=user_id,
        ):
            require_admin(admin)
            user = self._store.users.require(user_id)
            if user.status != UserStatus.BANNED:
                raise InvalidOperationError(
                    f"User {user.username} is not banned"
                )
            user.status = UserStatus.ACTIVE
            reputation.apply_delta(user, Settings.UNBAN_REWARD)
        logger.info(
            "User unbanned: user=%s by=%s reputation=%d",
            user_id, admin.user_id, user.reputation,
        )
        self._notifier.publish(
            user_id,
            f"Your account has been restored. "
            f"Reputation +{Settings.UNBAN_REWARD}.",
        )
        return user

    # ── Appeals ──────────────────────────────────────────

    def submit_appeal(self, user: User, reason: str) -> Appeal:
        """File a ban appeal; one open appeal per user."""
        with log_rejections(logger, "Submit appeal", user=user.user_id):
            if user.status != UserStatus.BANNED:
                raise InvalidOperationError(
                    "Only banned users can file an appeal"
                )
            validate_appeal_reason(reason)
            if self._store.appeals.first(
                lambda a: a.user_id == user.user_id and not a.processed
            ):
                raise InvalidOperationError(
                    "You already have an appeal awaiting review"
                )
            appeal = Appeal(
                appeal_id=generate_id(APPEAL_PREFIX),
                user_id=user.user_id,
                reason=reason.strip(),
            )
            self._store.appeals.put(appeal)
        logger.info(
            "Appeal submitted: appeal=%s user=%s",
            appeal.appeal_id, user.user_id,
        )
        return appeal

    def process_appeal(
        self,
        admin: User,
        appeal_id: str,
        approve: bool,
        result: str = "",
    ) -> Appeal:
        """Resolve an appeal; approving it also lifts the ban."""
        with log_rejections(
            logger, "Process appeal",
            admin=admin.user_id, appeal=appeal_id,
        ):
            require_admin(admin)
            appeal = self._store.appeals.require(appeal_id)
            if appeal.processed:
                raise InvalidOperationError(
                    f"Appeal {appeal_id} has already been processed"
                )
            verdict = result or ("Approved" if approve else "Rejected")
            appellant = self._store.users.require(appeal.user_id)
            if approve and appellant.status == UserStatus.BANNED:
                self.unban(admin, appeal.user_id)
            appeal.process(verdict)
        logger.info(
            "Appeal processed: appeal=%s approved=%s",
            appeal_id, approve,
        )
        self._notifier.publish(
            appeal.user_id,
            f"Your appeal {appeal_id} was processed: {verdict}",
        )
        return appeal

    def pending_appeals(self, admin: User) -> list[Appeal]:
        require_admin(admin)
        return self._store.appeals.filter(lambda a: not a.processed)

    def appeals_for(self, user_id: str) -> list[Appeal]:
        return self._store.appeals.filter(lambda a: a.user_id == user_id)

    # ── Overview ─────────────────────────────────────────

    def all_users(self, admin: User) -> list[User]:
        require_admin(admin)
        return self._store.users.all()

    def stats(self, admin: User) -> SystemStats:
        require_admin(admin)
        return SystemStats(
            user_count=self._store.users.count(),
            product_count=self._store.products.count(),
            order_count=self._store.orders.count(),
            review_count=self._store.reviews.count(),
        )
