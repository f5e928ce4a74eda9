"""In-memory implementation of ProductRepository.

Products are kept in a dict keyed by identifier.  Each key is guarded by
one of a fixed pool of lock stripes, so writes to different products
rarely contend and there is no lock over the whole store.  Readers work
on copies and never see a half-applied write.  Data does not survive a
restart.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..core.exceptions import DuplicateProductError
from ..models.product import Product
from .base import ProductRepository, SearchCriteria
from .seed import sample_products

logger = logging.getLogger(__name__)

_LOCK_STRIPES = 32


class InMemoryProductRepository(ProductRepository):
    """Process-local store, seeded with the sample catalog unless ``seed`` is false."""

    backend_name = "memory"

    def __init__(self, seed: bool = True) -> None:
        self._products: Dict[str, Product] = {}
        self._locks = [threading.Lock() for _ in range(_LOCK_STRIPES)]
        if seed:
            self._seed()

    def _lock_for(self, product_id: str) -> threading.Lock:
        return self._locks[hash(product_id) % _LOCK_STRIPES]

    # --- ProductRepository interface ------------------------------------------

    def list_all(self) -> List[Product]:
        logger.info("Getting all products")
        return [product.copy() for product in list(self._products.values())]

    def get_by_id(self, product_id: str) -> Optional[Product]:
        logger.info("Getting product with id %s", product_id)
        product = self._products.get(product_id)
        return product.copy() if product is not None else None

    def add(self, product: Product) -> Product:
        stored = product.copy()
        stored.id = stored.id or str(uuid.uuid4())
        stored.created_at = datetime.now(timezone.utc)
        stored.updated_at = None

        with self._lock_for(stored.id):
            if stored.id in self._products:
                logger.warning("Failed to add product with id %s", stored.id)
                raise DuplicateProductError(stored.id)
            self._products[stored.id] = stored

        logger.info("Added product with id %s", stored.id)
        return stored.copy()

    def update(self, product: Product) -> bool:
        if not product.id:
            raise ValueError("Product id cannot be empty")

        with self._lock_for(product.id):
            existing = self._products.get(product.id)
            if existing is None:
                logger.warning("Failed to update product with id %s - not found", product.id)
                return False
            product.created_at = existing.created_at
            product.updated_at = datetime.now(timezone.utc)
            self._products[product.id] = product.copy()

        logger.info("Updated product with id %s", product.id)
        return True

    def delete(self, product_id: str) -> bool:
        with self._lock_for(product_id):
            removed = self._products.pop(product_id, None)
        result = removed is not None
        logger.info("Deleted product with id %s: %s", product_id, result)
        return result

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        in_stock: Optional[bool] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> List[Product]:
        criteria = SearchCriteria(
            query=query,
            category=category,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            tags=list(tags) if tags is not None else None,
        )
        logger.info("Searching products with %s", criteria.describe())
        return [
            product.copy()
            for product in list(self._products.values())
            if criteria.matches(product)
        ]

    # --- Helpers --------------------------------------------------------------

    def _seed(self) -> None:
        products = sample_products()
        for product in products:
            self.add(product)
        logger.info("Seeded %d products", len(products))
