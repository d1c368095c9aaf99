# tradecore/models/enums.py

"""Enumerations shared by the marketplace entities."""

from enum import Enum


class _Labelled(Enum):
    """Enum whose value is a human-readable label."""

    @property
    def label(self) -> str:
        """Display label for presentation layers."""
        return str(self.value)


class UserRole(_Labelled):
    """Roles a user may hold; one user can hold several."""

    BUYER = "Buyer"
    SELLER = "Seller"
    ADMIN = "Admin"


class UserStatus(_Labelled):
    """Account status, changed only by administrators."""

    ACTIVE = "Active"
    BANNED = "Banned"
    DELETED = "Deleted"


class ProductStatus(_Labelled):
    """Saleability of a listing.

    AVAILABLE -> RESERVED -> SOLD, AVAILABLE <-> REMOVED, and
    RESERVED -> AVAILABLE when an order is cancelled.
    """

    AVAILABLE = "Available"
    RESERVED = "Reserved"
    SOLD = "Sold"
    REMOVED = "Removed"


class OrderStatus(_Labelled):
    """Progress of an order.

    PENDING -> CONFIRMED -> COMPLETED, with CANCELLED reachable from
    PENDING or CONFIRMED.
    """

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ProductCategory(_Labelled):
    """Catalogue category tag."""

    ELECTRONICS = "Electronics"
    BOOKS = "Books"
    CLOTHING = "Clothing"
    SPORTS = "Sports"
    DAILY = "Daily goods"
    OTHER = "Other"


class ProductCondition(_Labelled):
    """Physical condition tag."""

    BRAND_NEW = "Brand new"
    LIKE_NEW = "Like new"
    GOOD = "Good"
    ACCEPTABLE = "Acceptable"
