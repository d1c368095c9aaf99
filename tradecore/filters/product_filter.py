# tradecore/filters/product_filter.py

"""Catalogue search criteria, filtering and ordering."""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from tradecore.models.enums import (
    ProductCategory,
    ProductCondition,
    ProductStatus,
)
from tradecore.models.product import Product

logger = logging.getLogger("tradecore.filters")


@dataclass(frozen=True)
class SearchCriteria:
    """Optional constraints for a catalogue search.

    ``status`` defaults to AVAILABLE when left unset, so buyers only see
    listings they can order.
    """

    keyword: str | None = None
    category: ProductCategory | None = None
    condition: ProductCondition | None = None
    status: ProductStatus | None = None
    min_price: float | None = None
    max_price: float | None = None
    seller_id: str | None = None

    def __post_init__(self) -> None:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            msg = (
                f"min_price ({self.min_price}) exceeds "
                f"max_price ({self.max_price})"
            )
            raise ValueError(msg)


class SortKey(Enum):
    """Supported result orderings."""

    PRICE_ASC = auto()
    PRICE_DESC = auto()
    NEWEST = auto()
    OLDEST = auto()
    TITLE = auto()


class ProductFilter:
    """Apply :class:`SearchCriteria` and :class:`SortKey` to listings."""

    @staticmethod
    def matches(product: Product, criteria: SearchCriteria) -> bool:
        """Return whether *product* satisfies every set criterion."""
        wanted_status = criteria.status or ProductStatus.AVAILABLE
        if product.status != wanted_status:
            return False
        if criteria.keyword:
            needle = criteria.keyword.lower()
            haystack = f"{product.title}\n{product.description}".lower()
            if needle not in haystack:
                return False
        if criteria.category and product.category != criteria.category:
            return False
        if criteria.condition and product.condition != criteria.condition:
            return False
        if criteria.min_price is not None and product.price < criteria.min_price:
            return False
        if criteria.max_price is not None and product.price > criteria.max_price:
            return False
        if criteria.seller_id and product.seller_id != criteria.seller_id:
            return False
        return True

    @staticmethod
    def apply(
        products: list[Product], criteria: SearchCriteria,
    ) -> list[Product]:
        """Keep the products matching *criteria*."""
        kept = [p for p in products if ProductFilter.matches(p, criteria)]
        logger.debug(
            "Search kept %d of %d products", len(kept), len(products),
        )
        return kept

    @staticmethod
    def sort(products: list[Product], key: SortKey) -> list[Product]:
        """Return a new list ordered by *key*."""
        if key is SortKey.PRICE_ASC:
            return sorted(products, key=lambda p: p.price)
        if key is SortKey.PRICE_DESC:
            return sorted(products, key=lambda p: p.price, reverse=True)
        if key is SortKey.NEWEST:
            return sorted(
                products, key=lambda p: p.published_at, reverse=True,
            )
        if key is SortKey.OLDEST:
            return sorted(products, key=lambda p: p.published_at)
        return sorted(products, key=lambda p: p.title.lower())
