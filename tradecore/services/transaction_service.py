# tradecore/services/transaction_service.py

"""Order orchestration: create, confirm, receive and cancel.

Each call runs under the lock of the product it concerns, so the order,
the product reservation and the reputation changes of one transaction
are never interleaved with another call on the same listing.

Within a call the sequence is always:

1. resolve every entity and check every precondition;
2. mutate the order and the product;
3. adjust reputation;
4. publish notifications.

Nothing is mutated before step 2, so a rejected call leaves no trace,
and a notification sink never observes uncommitted state.
"""

import logging

from tradecore.errors import (
    InvalidOperationError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
)
from tradecore.filters.validation import validate_cancel_reason
from tradecore.models.enums import OrderStatus, ProductStatus, UserRole
from tradecore.models.order import Order
from tradecore.models.user import User
from tradecore.services import reputation
from tradecore.services.guards import (
    log_rejections,
    require_active,
    require_role,
)
from tradecore.services.locks import KeyedLocks
from tradecore.services.notifier import Notifier
from tradecore.storage.ids import ORDER_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.orders")


class TransactionService:
    """Coordinates the order and product lifecycles of one transaction."""

    def __init__(
        self,
        store: Store,
        notifier: Notifier,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._locks = locks or KeyedLocks()

    # ── Create ───────────────────────────────────────────

    def create_order(self, buyer: User, product_id: str) -> Order:
        """Place an order and reserve the product for *buyer*.

        Raises:
            PermissionDeniedError: buyer is banned, deleted or not a buyer.
            NotFoundError: the product does not exist.
            InvalidOperationError: the product is not available or
                belongs to the buyer.
        """
        logger.info(
            "Create order: buyer=%s product=%s",
            buyer.user_id, product_id,
        )
        with log_rejections(
            logger, "Create order",
            buyer=buyer.user_id, product=product_id,
        ):
            require_active(buyer, "place orders")
            require_role(buyer, UserRole.BUYER, "place orders")

            # Unknown IDs are rejected before a lock is created for them
            self._store.products.require(product_id)
            with self._locks.holding(product_id):
                product = self._store.products.get(product_id)
                if product is None:
                    raise NotFoundError(
                        f"Product {product_id} does not exist"
                    )
                if not product.is_available():
                    raise InvalidOperationError(
                        f"Product {product_id} is not available "
                        f"({product.status.label})"
                    )
                if product.seller_id == buyer.user_id:
                    raise InvalidOperationError(
                        "You cannot buy your own product"
                    )

                order = Order(
                    order_id=generate_id(ORDER_PREFIX),
                    product_id=product.product_id,
                    buyer_id=buyer.user_id,
                    seller_id=product.seller_id,
                    price=product.price,
                )
                product.reserve()
                self._store.orders.put(order)

                logger.info(
                    "Order created: order=%s buyer=%s seller=%s "
                    "product=%s price=%.2f",
                    order.order_id,
                    order.buyer_id,
                    order.seller_id,
                    order.product_id,
                    order.price,
                )

                self._notifier.publish(
                    order.buyer_id,
                    f"Order {order.order_id} placed for "
                    f"'{product.title}' ({order.price:.2f}).",
                )
                self._notifier.publish(
                    order.seller_id,
                    f"New order {order.order_id} for "
                    f"'{product.title}'. Please confirm it.",
                )
        return order

    # ── Confirm (seller) ─────────────────────────────────

    def confirm_order(self, seller: User, order_id: str) -> Order:
        """Seller accepts a pending order.

        Raises:
            PermissionDeniedError: caller is not the order's seller.
            NotFoundError: the order does not exist.
            InvalidStateError: the order is not PENDING.
        """
        logger.info(
            "Confirm order: seller=%s order=%s",
            seller.user_id, order_id,
        )
        with log_rejections(
            logger, "Confirm order",
            seller=seller.user_id, order=order_id,
        ):
            require_role(seller, UserRole.SELLER, "confirm orders")
            order = self._store.orders.require(order_id)
            if order.seller_id != seller.user_id:
                raise PermissionDeniedError(
                    "You can only confirm your own orders"
                )

            with self._locks.holding(order.product_id):
                product = self._store.products.require(order.product_id)
                order.confirm()

                logger.info("Order confirmed: order=%s", order_id)

                self._notifier.publish(
                    order.buyer_id,
                    f"Seller confirmed order {order_id}; "
                    f"'{product.title}' is on its way.",
                )
                self._notifier.publish(
                    order.seller_id,
                    f"You confirmed order {order_id}. "
                    f"Please ship it soon.",
                )
        return order

    # ── Receive (buyer) ──────────────────────────────────

    def confirm_receipt(self, buyer: User, order_id: str) -> Order:
        """Buyer confirms delivery: order COMPLETED, product SOLD.

        Both parties gain the completion reputation bonus.

        Raises:
            PermissionDeniedError: caller is not the order's buyer.
            NotFoundError: the order, product or a party is missing.
            InvalidStateError: the order is not CONFIRMED, or the
                product is no longer RESERVED.
        """
        logger.info(
            "Confirm receipt: buyer=%s order=%s",
            buyer.user_id, order_id,
        )
        with log_rejections(
            logger, "Confirm receipt",
            buyer=buyer.user_id, order=order_id,
        ):
            require_role(buyer, UserRole.BUYER, "confirm receipt")
            order = self._store.orders.require(order_id)
            if order.buyer_id != buyer.user_id:
                raise PermissionDeniedError(
                    "You can only confirm receipt of your own orders"
                )

            with self._locks.holding(order.product_id):
                product = self._store.products.require(order.product_id)
                buyer_account = self._store.users.require(order.buyer_id)
                seller_account = self._store.users.require(order.seller_id)
                if (
                    order.status == OrderStatus.CONFIRMED
                    and product.status != ProductStatus.RESERVED
                ):
                    raise InvalidStateError(
                        f"Product {product.product_id} is "
                        f"{product.status.name}, expected RESERVED"
                    )

                order.complete()
                product.mark_sold()

                buyer_delta, seller_delta = reputation.completion_deltas()
                reputation.apply_delta(buyer_account, buyer_delta)
                reputation.apply_delta(seller_account, seller_delta)

                logger.info(
                    "Order completed: order=%s buyer_rep=%d seller_rep=%d",
                    order_id,
                    buyer_account.reputation,
                    seller_account.reputation,
                )

                self._notifier.publish(
                    order.seller_id,
                    f"Buyer received order {order_id}; "
                    f"'{product.title}' sold. "
                    f"Reputation {seller_delta:+d}.",
                )
                self._notifier.publish(
                    order.buyer_id,
                    f"Order {order_id} completed. "
                    f"Reputation {buyer_delta:+d}. "
                    f"You can now leave a review.",
                )
        return order

    # ── Cancel (either party) ────────────────────────────

    def cancel_order(
        self, actor: User, order_id: str, reason: str,
    ) -> Order:
        """Cancel a pending or confirmed order and release the product.

        The cancelling party is penalised and the counterparty
        compensated.

        Raises:
            InvalidOperationError: the reason is empty or out of bounds.
            PermissionDeniedError: *actor* is neither buyer nor seller.
            NotFoundError: the order, product or a party is missing.
            InvalidStateError: the order is already COMPLETED or
                CANCELLED.
        """
        logger.info(
            "Cancel order: actor=%s order=%s reason=%r",
            actor.user_id, order_id, reason,
        )
        with log_rejections(
            logger, "Cancel order",
            actor=actor.user_id, order=order_id,
        ):
            validate_cancel_reason(reason)
            order = self._store.orders.require(order_id)
            if not order.involves(actor.user_id):
                raise PermissionDeniedError(
                    "You can only cancel your own orders"
                )

            with self._locks.holding(order.product_id):
                product = self._store.products.require(order.product_id)
                buyer_account = self._store.users.require(order.buyer_id)
                seller_account = self._store.users.require(order.seller_id)

                order.cancel(reason.strip())
                product.cancel_reservation()

                by_buyer = actor.user_id == order.buyer_id
                buyer_delta, seller_delta = (
                    reputation.cancellation_deltas(by_buyer)
                )
                reputation.apply_delta(buyer_account, buyer_delta)
                reputation.apply_delta(seller_account, seller_delta)

                cancelled_by = "buyer" if by_buyer else "seller"
                logger.info(
                    "Order cancelled: order=%s by=%s "
                    "buyer_rep=%d seller_rep=%d",
                    order_id,
                    cancelled_by,
                    buyer_account.reputation,
                    seller_account.reputation,
                )

                self._notifier.publish(
                    order.buyer_id,
                    f"Order {order_id} cancelled by {cancelled_by} "
                    f"(reason: {order.cancel_reason}). "
                    f"Reputation {buyer_delta:+d}.",
                )
                self._notifier.publish(
                    order.seller_id,
                    f"Order {order_id} cancelled by {cancelled_by} "
                    f"(reason: {order.cancel_reason}). "
                    f"Reputation {seller_delta:+d}.",
                )
        return order

    # ── Queries ──────────────────────────────────────────

    def get_order(self, order_id: str) -> Order:
        return self._store.orders.require(order_id)

    def orders_for_buyer(self, buyer_id: str) -> list[Order]:
        return self._store.orders.filter(lambda o: o.buyer_id == buyer_id)

    def orders_for_seller(self, seller_id: str) -> list[Order]:
        return self._store.orders.filter(
            lambda o: o.seller_id == seller_id
        )

    def orders_for_product(self, product_id: str) -> list[Order]:
        return self._store.orders.filter(
            lambda o: o.product_id == product_id
        )

    def active_order_for_product(self, product_id: str) -> Order | None:
        """The PENDING or CONFIRMED order holding the reservation, if any."""
        return self._store.orders.first(
            lambda o: o.product_id == product_id and o.can_be_cancelled()
        )

    def can_review(self, order_id: str) -> bool:
        return self.get_order(order_id).can_be_reviewed()
