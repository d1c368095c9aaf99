# tests/test_order_model.py

"""Tests for the Order dataclass and its progress transitions."""

import unittest

from tradecore.errors import InvalidStateError
from tradecore.models.enums import OrderStatus
from tradecore.models.order import Order


def _make_order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    return Order(
        order_id="O1",
        product_id="P1",
        buyer_id="B1",
        seller_id="S1",
        price=100.0,
        status=status,
    )


class TestOrderTransitions(unittest.TestCase):
    """PENDING -> CONFIRMED -> COMPLETED, with CANCELLED on the side."""

    def test_new_order_is_pending(self) -> None:
        """Orders start PENDING with no timestamps set."""
        order = _make_order()
        self.assertEqual(order.status, OrderStatus.PENDING)
        self.assertIsNone(order.confirmed_at)
        self.assertIsNone(order.completed_at)
        self.assertIsNone(order.cancel_reason)

    def test_happy_path(self) -> None:
        """confirm then complete stamps both timestamps."""
        order = _make_order()
        order.confirm()
        self.assertEqual(order.status, OrderStatus.CONFIRMED)
        self.assertIsNotNone(order.confirmed_at)
        order.complete()
        self.assertEqual(order.status, OrderStatus.COMPLETED)
        self.assertIsNotNone(order.completed_at)

    def test_confirm_twice_raises(self) -> None:
        """A confirmed order cannot be confirmed again."""
        order = _make_order()
        order.confirm()
        with self.assertRaises(InvalidStateError):
            order.confirm()
        self.assertEqual(order.status, OrderStatus.CONFIRMED)

    def test_complete_requires_confirmation(self) -> None:
        """PENDING cannot be completed."""
        order = _make_order()
        with self.assertRaises(InvalidStateError):
            order.complete()
        self.assertEqual(order.status, OrderStatus.PENDING)

    def test_cancel_from_pending_and_confirmed(self) -> None:
        """Both in-flight states are cancellable."""
        for status in (OrderStatus.PENDING, OrderStatus.CONFIRMED):
            with self.subTest(status=status):
                order = _make_order(status)
                self.assertTrue(order.can_be_cancelled())
                order.cancel("changed mind")
                self.assertEqual(order.status, OrderStatus.CANCELLED)
                self.assertEqual(order.cancel_reason, "changed mind")
                self.assertIsNotNone(order.completed_at)

    def test_terminal_states_reject_everything(self) -> None:
        """COMPLETED and CANCELLED accept no transition."""
        for status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
            with self.subTest(status=status):
                order = _make_order(status)
                self.assertFalse(order.can_be_cancelled())
                for step in (order.confirm, order.complete):
                    with self.assertRaises(InvalidStateError):
                        step()
                with self.assertRaises(InvalidStateError):
                    order.cancel("too late now")
                self.assertEqual(order.status, status)

    def test_only_completed_can_be_reviewed(self) -> None:
        """Reviews need a COMPLETED order."""
        for status in OrderStatus:
            with self.subTest(status=status):
                self.assertEqual(
                    _make_order(status).can_be_reviewed(),
                    status == OrderStatus.COMPLETED,
                )

    def test_involves(self) -> None:
        """Buyer and seller are parties; others are not."""
        order = _make_order()
        self.assertTrue(order.involves("B1"))
        self.assertTrue(order.involves("S1"))
        self.assertFalse(order.involves("X9"))


if __name__ == "__main__":
    unittest.main()
