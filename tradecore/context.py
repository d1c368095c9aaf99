# tradecore/context.py

"""Wires one store, one notifier and every service together."""

import logging

from tradecore.services.admin_service import AdminService
from tradecore.services.locks import KeyedLocks
from tradecore.services.notifier import Notifier
from tradecore.services.product_service import ProductService
from tradecore.services.review_service import ReviewService
from tradecore.services.transaction_service import TransactionService
from tradecore.services.user_service import UserService
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.context")


class AppContext:
    """Explicit dependency container for one marketplace instance.

    All services share the same :class:`KeyedLocks`, so catalogue edits,
    order transitions and reviews on one product are serialised.
    """

    def __init__(self, store: Store | None = None) -> None:
        self.store = store or Store()
        self.locks = KeyedLocks()
        self.notifier = Notifier(self.store)
        self.users = UserService(self.store, self.notifier)
        self.products = ProductService(self.store, self.locks)
        self.transactions = TransactionService(
            self.store, self.notifier, self.locks,
        )
        self.reviews = ReviewService(self.store, self.notifier, self.locks)
        self.admin = AdminService(self.store, self.notifier)
        logger.debug("AppContext initialised")
