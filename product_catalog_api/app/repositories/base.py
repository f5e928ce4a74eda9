"""Abstract repository for the Product entity.

Concrete implementations live next to this module.  Whatever the
backend, every operation must produce the same observable result for
the same input; the shared ``SearchCriteria`` predicate keeps search
results identical across backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from ..models.product import Product


@dataclass(frozen=True)
class SearchCriteria:
    """Filters accepted by ``ProductRepository.search``.

    Every supplied filter must match (logical AND).  Blank strings and
    empty tag lists count as "not supplied".
    """

    query: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    tags: Optional[Sequence[str]] = None

    @property
    def text(self) -> Optional[str]:
        if self.query is None or not self.query.strip():
            return None
        return self.query.lower()

    @property
    def category_key(self) -> Optional[str]:
        if self.category is None or not self.category.strip():
            return None
        return self.category.lower()

    @property
    def tag_keys(self) -> List[str]:
        return [tag.lower() for tag in self.tags or []]

    def matches(self, product: Product) -> bool:
        text = self.text
        if text is not None:
            in_name = text in product.name.lower()
            in_description = product.description is not None and text in product.description.lower()
            if not (in_name or in_description):
                return False
        category = self.category_key
        if category is not None and product.category.lower() != category:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.in_stock is not None and product.in_stock != self.in_stock:
            return False
        wanted = self.tag_keys
        if wanted:
            own = {tag.lower() for tag in product.tags}
            if not any(tag in own for tag in wanted):
                return False
        return True

    def describe(self) -> str:
        """Render the criteria for log messages."""
        return (
            f"query={self.query!r}, category={self.category!r}, min_price={self.min_price}, "
            f"max_price={self.max_price}, in_stock={self.in_stock}, "
            f"tags={', '.join(self.tags) if self.tags else None}"
        )


class ProductRepository(ABC):
    """Storage operations for products.

    A missing product is reported as ``None`` (``get_by_id``) or
    ``False`` (``update``, ``delete``), never raised.  ``add`` raises
    ``DuplicateProductError`` on an id collision and every backend
    failure surfaces as ``StorageError``.  Products passed in and
    returned are copies; callers never hold a reference to stored state.
    """

    #: Short backend name, reported by the health endpoint.
    backend_name = "abstract"

    @abstractmethod
    def list_all(self) -> List[Product]:
        """Return every stored product."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and return the stored record.

        Assigns an identifier when the product has none and stamps
        ``created_at``.  Raises ``DuplicateProductError`` when the
        identifier is already taken.
        """

    @abstractmethod
    def update(self, product: Product) -> bool:
        """Replace a stored product.

        Returns False when no product with that identifier exists.  The
        stored ``created_at`` is preserved and ``updated_at`` is stamped;
        both are also written back onto ``product``.
        """

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Remove a product; return False if it did not exist."""

    @abstractmethod
    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        in_stock: Optional[bool] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> List[Product]:
        """Return the products matching every supplied filter."""
