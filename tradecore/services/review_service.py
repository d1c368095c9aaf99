# tradecore/services/review_service.py

"""Buyer reviews of completed orders and their reputation effect."""

import logging

from tradecore.config.settings import Settings
from tradecore.errors import InvalidOperationError, PermissionDeniedError
from tradecore.filters.validation import (
    validate_rating,
    validate_review_content,
)
from tradecore.models.enums import UserRole
from tradecore.models.review import Review
from tradecore.models.user import User
from tradecore.services import reputation
from tradecore.services.guards import (
    log_rejections,
    require_active,
    require_role,
)
from tradecore.services.locks import KeyedLocks
from tradecore.services.notifier import Notifier
from tradecore.storage.ids import REVIEW_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.reviews")


class ReviewService:
    """Creates reviews and applies the rating to the seller's reputation."""

    def __init__(
        self,
        store: Store,
        notifier: Notifier,
        locks: KeyedLocks | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._locks = locks or KeyedLocks()

    def create_review(
        self,
        buyer: User,
        order_id: str,
        rating: int,
        content: str = "",
    ) -> Review:
        """Review the seller of a completed order.

        Raises:
            PermissionDeniedError: reviewer is inactive, not a buyer, or
                not the order's buyer.
            NotFoundError: the order or the seller is missing.
            InvalidOperationError: the order is not completed, already
                reviewed, or the rating/content is out of range.
        """
        logger.info(
            "Create review: buyer=%s order=%s rating=%s",
            buyer.user_id, order_id, rating,
        )
        with log_rejections(
            logger, "Create review",
            buyer=buyer.user_id, order=order_id,
        ):
            require_active(buyer, "write reviews")
            require_role(buyer, UserRole.BUYER, "write reviews")
            order = self._store.orders.require(order_id)
            if order.buyer_id != buyer.user_id:
                raise PermissionDeniedError(
                    "You can only review your own orders"
                )

            with self._locks.holding(order.product_id):
                if not order.can_be_reviewed():
                    raise InvalidOperationError(
                        "Only completed orders can be reviewed"
                    )
                if self._store.find_review_by_order(order_id) is not None:
                    raise InvalidOperationError(
                        f"Order {order_id} has already been reviewed"
                    )
                validate_rating(rating)
                validate_review_content(content)
                seller = self._store.users.require(order.seller_id)
                delta = reputation.review_delta(rating)

                review = Review(
                    review_id=generate_id(REVIEW_PREFIX),
                    order_id=order_id,
                    product_id=order.product_id,
                    reviewer_id=buyer.user_id,
                    reviewee_id=order.seller_id,
                    rating=rating,
                    content=content.strip() if content else "",
                )
                if not self._store.add_review_if_absent(review):
                    raise InvalidOperationError(
                        f"Order {order_id} has already been reviewed"
                    )

                reputation.apply_delta(seller, delta)
                logger.info(
                    "Review created: review=%s order=%s rating=%d "
                    "seller_rep=%d",
                    review.review_id,
                    order_id,
                    rating,
                    seller.reputation,
                )

                if rating <= Settings.LOW_RATING_THRESHOLD:
                    product = self._store.products.get(order.product_id)
                    title = product.title if product else order.product_id
                    self._notifier.publish(
                        order.seller_id,
                        f"Low rating alert: {rating}-star review on "
                        f"order {order_id} for '{title}': "
                        f"{review.content or '(no comment)'}. "
                        f"Reputation {delta:+d}.",
                    )
        return review

    # ── Queries ──────────────────────────────────────────

    def get(self, review_id: str) -> Review:
        return self._store.reviews.require(review_id)

    def for_order(self, order_id: str) -> Review | None:
        return self._store.find_review_by_order(order_id)

    def for_seller(self, seller_id: str) -> list[Review]:
        return self._store.reviews.filter(
            lambda r: r.reviewee_id == seller_id
        )

    def average_rating(self, seller_id: str) -> float:
        """Mean star rating for *seller_id*, 0.0 without reviews."""
        reviews = self.for_seller(seller_id)
        if not reviews:
            return 0.0
        return round(sum(r.rating for r in reviews) / len(reviews), 2)
