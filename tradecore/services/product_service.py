# tradecore/services/product_service.py

"""Seller-side catalogue management and buyer-side search."""

import logging

from tradecore.errors import InvalidOperationError, PermissionDeniedError
from tradecore.filters.product_filter import (
    ProductFilter,
    SearchCriteria,
    SortKey,
)
from tradecore.filters.validation import (
    validate_description,
    validate_price,
    validate_title,
)
from tradecore.models.enums import (
    ProductCategory,
    ProductCondition,
    ProductStatus,
    UserRole,
)
from tradecore.models.product import Product
from tradecore.models.user import User
from tradecore.services.guards import (
    log_rejections,
    require_active,
    require_role,
)
from tradecore.services.locks import KeyedLocks
from tradecore.storage.ids import PRODUCT_PREFIX, generate_id
from tradecore.storage.store import Store

logger = logging.getLogger("tradecore.products")


class ProductService:
    """Publish, edit, remove, re-list and search listings."""

    def __init__(
        self, store: Store, locks: KeyedLocks | None = None,
    ) -> None:
        self._store = store
        self._locks = locks or KeyedLocks()

    # ── Publishing & management ──────────────────────────

    def publish(
        self,
        seller: User,
        title: str,
        description: str,
        price: float,
        category: ProductCategory = ProductCategory.OTHER,
        condition: ProductCondition = ProductCondition.GOOD,
    ) -> Product:
        """List a new product for sale."""
        with log_rejections(
            logger, "Publish product", seller=seller.user_id,
        ):
            require_active(seller, "publish products")
            require_role(seller, UserRole.SELLER, "publish products")
            validate_title(title)
            validate_description(description)
            validate_price(price)

            product = Product(
                product_id=generate_id(PRODUCT_PREFIX),
                title=title.strip(),
                description=(description or "").strip(),
                price=round(price, 2),
                seller_id=seller.user_id,
                category=category,
                condition=condition,
            )
            self._store.products.put(product)
        logger.info(
            "Product published: product=%s seller=%s price=%.2f",
            product.product_id, seller.user_id, product.price,
        )
        return product

    def edit(
        self,
        seller: User,
        product_id: str,
        title: str,
        description: str,
        price: float,
    ) -> Product:
        """Change a listing's terms; only AVAILABLE listings are editable.

        Reserved and sold listings keep their terms, so an order never
        refers to a product whose price changed underneath it.
        """
        with log_rejections(
            logger, "Edit product",
            seller=seller.user_id, product=product_id,
        ):
            validate_title(title)
            validate_description(description)
            validate_price(price)
            self._store.products.require(product_id)
            with self._locks.holding(product_id):
                product = self._owned(seller, product_id)
                if product.status != ProductStatus.AVAILABLE:
                    raise InvalidOperationError(
                        f"Product {product_id} cannot be edited "
                        f"while {product.status.label.lower()}"
                    )
                product.title = title.strip()
                product.description = (description or "").strip()
                product.price = round(price, 2)
                product.touch()
        logger.info("Product edited: product=%s", product_id)
        return product

    def remove(self, seller: User, product_id: str) -> Product:
        """Take an AVAILABLE listing down."""
        with log_rejections(
            logger, "Remove product",
            seller=seller.user_id, product=product_id,
        ):
            self._store.products.require(product_id)
            with self._locks.holding(product_id):
                product = self._owned(seller, product_id)
                product.remove()
        logger.info("Product removed: product=%s", product_id)
        return product

    def relist(self, seller: User, product_id: str) -> Product:
        """Put a REMOVED listing back on sale."""
        with log_rejections(
            logger, "Relist product",
            seller=seller.user_id, product=product_id,
        ):
            self._store.products.require(product_id)
            with self._locks.holding(product_id):
                product = self._owned(seller, product_id)
                product.relist()
        logger.info(
            "Product relist requested: product=%s status=%s",
            product_id, product.status.name,
        )
        return product

    # ── Queries ──────────────────────────────────────────

    def get(self, product_id: str) -> Product:
        return self._store.products.require(product_id)

    def by_seller(self, seller_id: str) -> list[Product]:
        return self._store.products.filter(
            lambda p: p.seller_id == seller_id
        )

    def search(
        self,
        criteria: SearchCriteria | None = None,
        sort_key: SortKey | None = None,
    ) -> list[Product]:
        """Filter the catalogue, optionally ordered by *sort_key*."""
        results = ProductFilter.apply(
            self._store.products.all(), criteria or SearchCriteria(),
        )
        if sort_key is not None:
            results = ProductFilter.sort(results, sort_key)
        return results

    def check_available_for_purchase(
        self, product_id: str, buyer_id: str,
    ) -> Product:
        """Raise unless *buyer_id* could order *product_id* right now."""
        product = self.get(product_id)
        if not product.is_available():
            raise InvalidOperationError(
                f"Product {product_id} is not available"
            )
        if product.seller_id == buyer_id:
            raise InvalidOperationError("You cannot buy your own product")
        return product

    def _owned(self, seller: User, product_id: str) -> Product:
        product = self.get(product_id)
        if product.seller_id != seller.user_id:
            raise PermissionDeniedError(
                f"You do not own product {product_id}"
            )
        return product
