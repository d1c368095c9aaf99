# tradecore/models/order.py

"""Order model and its progress lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime

from tradecore.errors import InvalidStateError
from tradecore.models.enums import OrderStatus

_CANCELLABLE: frozenset[OrderStatus] = frozenset({
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
})


@dataclass
class Order:
    """A single-item purchase between two distinct users.

    ``price`` is copied from the product when the order is created and
    never follows later edits to the listing.  COMPLETED and CANCELLED
    are terminal.
    """

    order_id: str
    product_id: str
    buyer_id: str
    seller_id: str
    price: float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=datetime.now)
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancel_reason: str | None = None

    def confirm(self) -> None:
        """PENDING -> CONFIRMED (seller accepts the order)."""
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Only pending orders can be confirmed "
                f"(order {self.order_id} is {self.status.name})"
            )
        self.status = OrderStatus.CONFIRMED
        self.confirmed_at = datetime.now()

    def complete(self) -> None:
        """CONFIRMED -> COMPLETED (buyer confirms receipt)."""
        if self.status != OrderStatus.CONFIRMED:
            raise InvalidStateError(
                f"Only confirmed orders can be completed "
                f"(order {self.order_id} is {self.status.name})"
            )
        self.status = OrderStatus.COMPLETED
        self.completed_at = datetime.now()

    def cancel(self, reason: str) -> None:
        """PENDING/CONFIRMED -> CANCELLED.

        The cancellation time is recorded in ``completed_at``.
        """
        if self.status not in _CANCELLABLE:
            raise InvalidStateError(
                f"Order {self.order_id} cannot be cancelled "
                f"while {self.status.name}"
            )
        self.status = OrderStatus.CANCELLED
        self.cancel_reason = reason
        self.completed_at = datetime.now()

    def can_be_cancelled(self) -> bool:
        return self.status in _CANCELLABLE

    def can_be_reviewed(self) -> bool:
        """Reviews are accepted for completed orders only."""
        return self.status == OrderStatus.COMPLETED

    def involves(self, user_id: str) -> bool:
        """True when *user_id* is the buyer or the seller."""
        return user_id in (self.buyer_id, self.seller_id)
