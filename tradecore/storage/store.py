# tradecore/storage/store.py

"""Process-local entity store shared by every service.

The store is an explicitly constructed object handed to each service;
tests build their own isolated instance.  One re-entrant lock guards all
maps so concurrent callers never observe a half-updated dictionary.
The store provides no cross-entity transactions: services keep related
entities consistent by mutating them in a fixed order under their own
per-aggregate locks.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from tradecore.errors import NotFoundError
from tradecore.models.appeal import Appeal
from tradecore.models.message import Message
from tradecore.models.order import Order
from tradecore.models.product import Product
from tradecore.models.review import Review
from tradecore.models.user import User

logger = logging.getLogger("tradecore.store")

T = TypeVar("T")


class EntityTable(Generic[T]):
    """Keyed collection of one entity type."""

    def __init__(
        self,
        name: str,
        key: Callable[[T], str],
        lock: threading.RLock,
    ) -> None:
        self.name = name
        self._key = key
        self._lock = lock
        self._rows: dict[str, T] = {}

    def put(self, entity: T) -> T:
        """Insert or replace *entity* under its identifier."""
        entity_id = self._key(entity)
        with self._lock:
            self._rows[entity_id] = entity
        logger.debug("Stored %s %s", self.name, entity_id)
        return entity

    def get(self, entity_id: str) -> T | None:
        """Return the entity or ``None`` when it does not exist."""
        with self._lock:
            return self._rows.get(entity_id)

    def require(self, entity_id: str) -> T:
        """Return the entity or raise :class:`NotFoundError`."""
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(
                f"{self.name.capitalize()} {entity_id} does not exist"
            )
        return entity

    def exists(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._rows

    def all(self) -> list[T]:
        """Snapshot of every entity, in insertion order."""
        with self._lock:
            return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        """Entities for which *predicate* is true."""
        return [e for e in self.all() if predicate(e)]

    def first(self, predicate: Callable[[T], bool]) -> T | None:
        """First entity matching *predicate*, or ``None``."""
        for entity in self.all():
            if predicate(entity):
                return entity
        return None

    def delete(self, entity_id: str) -> bool:
        """Remove an entity. Returns whether it existed."""
        with self._lock:
            removed = self._rows.pop(entity_id, None) is not None
        if removed:
            logger.debug("Deleted %s %s", self.name, entity_id)
        return removed

    def count(self) -> int:
        with self._lock:
            return len(self._rows)

    def clear(self) -> int:
        """Drop every entity. Returns how many were removed."""
        with self._lock:
            count = len(self._rows)
            self._rows.clear()
        return count


class Store:
    """All marketplace entities, keyed by generated IDs."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.users: EntityTable[User] = EntityTable(
            "user", lambda u: u.user_id, self._lock,
        )
        self.products: EntityTable[Product] = EntityTable(
            "product", lambda p: p.product_id, self._lock,
        )
        self.orders: EntityTable[Order] = EntityTable(
            "order", lambda o: o.order_id, self._lock,
        )
        self.reviews: EntityTable[Review] = EntityTable(
            "review", lambda r: r.review_id, self._lock,
        )
        self.messages: EntityTable[Message] = EntityTable(
            "message", lambda m: m.message_id, self._lock,
        )
        self.appeals: EntityTable[Appeal] = EntityTable(
            "appeal", lambda a: a.appeal_id, self._lock,
        )
        logger.debug("Store initialised")

    @property
    def tables(self) -> list[EntityTable[Any]]:
        return [
            self.users,
            self.products,
            self.orders,
            self.reviews,
            self.messages,
            self.appeals,
        ]

    # ── Unique-field lookups ─────────────────────────────

    def find_user_by_username(self, username: str) -> User | None:
        return self.users.first(lambda u: u.username == username)

    def username_exists(self, username: str) -> bool:
        return self.find_user_by_username(username) is not None

    def find_review_by_order(self, order_id: str) -> Review | None:
        return self.reviews.first(lambda r: r.order_id == order_id)

    def add_user_if_absent(self, user: User) -> bool:
        """Insert *user* unless the username is taken.

        The check and the insert happen under the store lock, so two
        concurrent registrations cannot both claim one username.
        """
        with self._lock:
            if self.username_exists(user.username):
                return False
            self.users.put(user)
            return True

    def add_review_if_absent(self, review: Review) -> bool:
        """Insert *review* unless its order already has one."""
        with self._lock:
            if self.find_review_by_order(review.order_id) is not None:
                return False
            self.reviews.put(review)
            return True

    # ── Housekeeping ─────────────────────────────────────

    def counts(self) -> dict[str, int]:
        """Entity count per table name."""
        return {t.name: t.count() for t in self.tables}

    def clear(self) -> int:
        """Purge every table. Returns the total number removed."""
        with self._lock:
            total = sum(t.clear() for t in self.tables)
        logger.info("Store cleared (%d entities removed)", total)
        return total
