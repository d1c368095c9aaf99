# tests/test_review_service.py

"""Tests for reviews and their effect on seller reputation."""

import unittest

from tradecore.context import AppContext
from tradecore.errors import (
    InvalidOperationError,
    NotFoundError,
    PermissionDeniedError,
)
from tradecore.models.enums import UserRole, UserStatus
from tradecore.models.order import Order
from tradecore.services.notifier import MessageInbox


class TestReviewService(unittest.TestCase):
    """ReviewService.create_review and queries."""

    def setUp(self) -> None:
        self.ctx = AppContext()
        self.seller = self.ctx.users.register(
            "seller01", "password1", {UserRole.SELLER},
        )
        self.buyer = self.ctx.users.register(
            "buyer001", "password1", {UserRole.BUYER},
        )
        self.seller_inbox = MessageInbox(self.seller.user_id)
        self.ctx.notifier.subscribe(self.seller.user_id, self.seller_inbox)

    def _completed_order(self, title: str = "Used phone") -> Order:
        product = self.ctx.products.publish(self.seller, title, "", 50.0)
        order = self.ctx.transactions.create_order(
            self.buyer, product.product_id,
        )
        self.ctx.transactions.confirm_order(self.seller, order.order_id)
        self.ctx.transactions.confirm_receipt(self.buyer, order.order_id)
        return order

    def test_one_star_review_lowers_seller(self) -> None:
        """A 1-star review costs the seller 3 points."""
        order = self._completed_order()
        before = self.seller.reputation
        review = self.ctx.reviews.create_review(
            self.buyer, order.order_id, 1, "Broken on arrival",
        )
        self.assertEqual(self.seller.reputation, before - 3)
        self.assertEqual(review.reviewee_id, self.seller.user_id)
        self.assertEqual(review.reviewer_id, self.buyer.user_id)
        self.assertEqual(review.product_id, order.product_id)
        self.assertTrue(review.is_negative)

    def test_five_star_review_raises_seller(self) -> None:
        """A 5-star review earns the seller 5 points."""
        order = self._completed_order()
        before = self.seller.reputation
        review = self.ctx.reviews.create_review(
            self.buyer, order.order_id, 5, "Great",
        )
        self.assertEqual(self.seller.reputation, before + 5)
        self.assertTrue(review.is_positive)

    def test_second_review_rejected(self) -> None:
        """One review per order; the duplicate changes nothing."""
        order = self._completed_order()
        self.ctx.reviews.create_review(self.buyer, order.order_id, 5)
        after_first = self.seller.reputation
        with self.assertRaises(InvalidOperationError):
            self.ctx.reviews.create_review(self.buyer, order.order_id, 1)
        self.assertEqual(self.seller.reputation, after_first)
        self.assertEqual(self.ctx.store.reviews.count(), 1)

    def test_neutral_review_no_change(self) -> None:
        """A 3-star review leaves reputation alone."""
        order = self._completed_order()
        before = self.seller.reputation
        self.ctx.reviews.create_review(self.buyer, order.order_id, 3)
        self.assertEqual(self.seller.reputation, before)

    def test_uncompleted_order_rejected(self) -> None:
        """Pending orders cannot be reviewed."""
        product = self.ctx.products.publish(self.seller, "Lamp", "", 10.0)
        order = self.ctx.transactions.create_order(
            self.buyer, product.product_id,
        )
        with self.assertRaises(InvalidOperationError) as ctx:
            self.ctx.reviews.create_review(self.buyer, order.order_id, 5)
        self.assertIn("completed", ctx.exception.message)

    def test_out_of_range_rating_rejected(self) -> None:
        """Ratings outside 1-5 are rejected without side effects."""
        order = self._completed_order()
        before = self.seller.reputation
        for rating in (0, 6):
            with self.subTest(rating=rating):
                with self.assertRaises(InvalidOperationError):
                    self.ctx.reviews.create_review(
                        self.buyer, order.order_id, rating,
                    )
        self.assertEqual(self.seller.reputation, before)
        self.assertIsNone(self.ctx.reviews.for_order(order.order_id))

    def test_fractional_rating_leaves_order_reviewable(self) -> None:
        """A rejected non-integer rating stores nothing; a retry works."""
        order = self._completed_order()
        before = self.seller.reputation
        for rating in (4.5, True):
            with self.subTest(rating=rating):
                with self.assertRaises(InvalidOperationError):
                    self.ctx.reviews.create_review(
                        self.buyer, order.order_id, rating,
                    )
        self.assertIsNone(self.ctx.reviews.for_order(order.order_id))
        self.assertEqual(self.seller.reputation, before)

        review = self.ctx.reviews.create_review(
            self.buyer, order.order_id, 5,
        )
        self.assertIs(self.ctx.reviews.for_order(order.order_id), review)
        self.assertEqual(self.seller.reputation, before + 5)

    def test_overlong_content_rejected(self) -> None:
        """Review text over 500 characters is rejected."""
        order = self._completed_order()
        with self.assertRaises(InvalidOperationError):
            self.ctx.reviews.create_review(
                self.buyer, order.order_id, 4, "x" * 501,
            )

    def test_only_order_buyer_may_review(self) -> None:
        """Another buyer cannot review someone else's order."""
        order = self._completed_order()
        stranger = self.ctx.users.register(
            "buyer002", "password1", {UserRole.BUYER},
        )
        with self.assertRaises(PermissionDeniedError):
            self.ctx.reviews.create_review(stranger, order.order_id, 1)

    def test_banned_buyer_rejected(self) -> None:
        """Banned reviewers are refused."""
        order = self._completed_order()
        self.buyer.status = UserStatus.BANNED
        with self.assertRaises(PermissionDeniedError):
            self.ctx.reviews.create_review(self.buyer, order.order_id, 5)

    def test_missing_order(self) -> None:
        """Unknown order IDs raise NotFoundError."""
        with self.assertRaises(NotFoundError):
            self.ctx.reviews.create_review(self.buyer, "O-missing", 5)

    def test_low_rating_alerts_seller(self) -> None:
        """Ratings of 2 or less send the seller an alert."""
        order = self._completed_order()
        received_before = len(self.seller_inbox.received)
        self.ctx.reviews.create_review(
            self.buyer, order.order_id, 2, "Scratched",
        )
        self.assertEqual(
            len(self.seller_inbox.received), received_before + 1,
        )
        alert = self.seller_inbox.received[-1]
        self.assertIn("Low rating", alert)
        self.assertIn("Scratched", alert)
        self.assertIn("-2", alert)

    def test_good_rating_sends_no_alert(self) -> None:
        """Ratings above 2 do not notify the seller."""
        order = self._completed_order()
        received_before = len(self.seller_inbox.received)
        self.ctx.reviews.create_review(self.buyer, order.order_id, 4)
        self.assertEqual(len(self.seller_inbox.received), received_before)

    def test_average_rating(self) -> None:
        """Mean rating over a seller's reviews."""
        self.assertEqual(
            self.ctx.reviews.average_rating(self.seller.user_id), 0.0,
        )
        for title, rating in (("Item one", 5), ("Item two", 4)):
            order = self._completed_order(title)
            self.ctx.reviews.create_review(
                self.buyer, order.order_id, rating,
            )
        self.assertEqual(
            self.ctx.reviews.average_rating(self.seller.user_id), 4.5,
        )
        self.assertEqual(
            len(self.ctx.reviews.for_seller(self.seller.user_id)), 2,
        )


if __name__ == "__main__":
    unittest.main()
