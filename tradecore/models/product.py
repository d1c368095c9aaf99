# tradecore/models/product.py

"""Product listing model and its saleability lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime

from tradecore.errors import InvalidStateError
from tradecore.models.enums import (
    ProductCategory,
    ProductCondition,
    ProductStatus,
)


@dataclass
class Product:
    """A single listing owned by its seller.

    The RESERVED state sits between AVAILABLE and SOLD so that a
    cancelled order can return the listing to sale without confusing
    "never touched" with "already sold".  SOLD is terminal.
    """

    product_id: str
    title: str
    price: float
    seller_id: str
    description: str = ""
    category: ProductCategory = ProductCategory.OTHER
    condition: ProductCondition = ProductCondition.GOOD
    status: ProductStatus = ProductStatus.AVAILABLE
    published_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def is_available(self) -> bool:
        """Only AVAILABLE listings can be ordered."""
        return self.status == ProductStatus.AVAILABLE

    def touch(self) -> None:
        """Stamp the last modification time."""
        self.updated_at = datetime.now()

    def _move_to(self, status: ProductStatus) -> None:
        self.status = status
        self.touch()

    def reserve(self) -> None:
        """AVAILABLE -> RESERVED, taken when an order is created."""
        if self.status != ProductStatus.AVAILABLE:
            raise InvalidStateError(
                f"Product {self.product_id} cannot be reserved "
                f"while {self.status.name}"
            )
        self._move_to(ProductStatus.RESERVED)

    def cancel_reservation(self) -> None:
        """RESERVED -> AVAILABLE; any other state is left untouched."""
        if self.status == ProductStatus.RESERVED:
            self._move_to(ProductStatus.AVAILABLE)

    def mark_sold(self) -> None:
        """RESERVED -> SOLD, taken when the buyer confirms receipt."""
        if self.status != ProductStatus.RESERVED:
            raise InvalidStateError(
                f"Product {self.product_id} cannot be marked sold "
                f"while {self.status.name}"
            )
        self._move_to(ProductStatus.SOLD)

    def remove(self) -> None:
        """AVAILABLE -> REMOVED (seller takes the listing down)."""
        if self.status == ProductStatus.REMOVED:
            raise InvalidStateError(
                f"Product {self.product_id} is already removed"
            )
        if self.status != ProductStatus.AVAILABLE:
            raise InvalidStateError(
                f"Only available products can be removed "
                f"(product {self.product_id} is {self.status.name})"
            )
        self._move_to(ProductStatus.REMOVED)

    def relist(self) -> None:
        """REMOVED -> AVAILABLE; any other state is left untouched."""
        if self.status == ProductStatus.REMOVED:
            self._move_to(ProductStatus.AVAILABLE)
