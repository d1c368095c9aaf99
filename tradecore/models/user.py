# tradecore/models/user.py

"""User account model with clamped reputation."""

import threading
from dataclasses import dataclass, field
from datetime import datetime

from tradecore.config.settings import Settings
from tradecore.models.enums import UserRole, UserStatus


@dataclass
class User:
    """A marketplace account.

    ``reputation`` is always kept inside
    ``[Settings.MIN_REPUTATION, Settings.MAX_REPUTATION]``; every change
    goes through :meth:`increase_reputation` or
    :meth:`decrease_reputation`, which clamp under a per-user lock.
    """

    user_id: str
    username: str
    password_hash: str = ""
    roles: set[UserRole] = field(default_factory=lambda: set[UserRole]())
    status: UserStatus = UserStatus.ACTIVE
    reputation: int = Settings.INITIAL_REPUTATION
    registered_at: datetime = field(default_factory=datetime.now)
    last_login_at: datetime | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False,
    )

    # ── Roles ────────────────────────────────────────────

    def has_role(self, role: UserRole) -> bool:
        """Return whether the user holds *role*."""
        return role in self.roles

    def add_role(self, role: UserRole) -> None:
        self.roles.add(role)

    def remove_role(self, role: UserRole) -> None:
        self.roles.discard(role)

    @property
    def is_buyer(self) -> bool:
        return UserRole.BUYER in self.roles

    @property
    def is_seller(self) -> bool:
        return UserRole.SELLER in self.roles

    @property
    def is_admin(self) -> bool:
        return UserRole.ADMIN in self.roles

    @property
    def is_active(self) -> bool:
        """Banned and deleted accounts may not trade."""
        return self.status == UserStatus.ACTIVE

    # ── Reputation ───────────────────────────────────────

    def increase_reputation(self, points: int) -> int:
        """Add *points*, capped at the maximum. Returns the new score."""
        with self._lock:
            self.reputation = min(
                self.reputation + points, Settings.MAX_REPUTATION,
            )
            return self.reputation

    def decrease_reputation(self, points: int) -> int:
        """Subtract *points*, floored at the minimum. Returns the new score."""
        with self._lock:
            self.reputation = max(
                self.reputation - points, Settings.MIN_REPUTATION,
            )
            return self.reputation

    def touch_login(self) -> None:
        """Stamp the last successful authentication."""
        self.last_login_at = datetime.now()
