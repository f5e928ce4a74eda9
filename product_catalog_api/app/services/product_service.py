"""
Business logic for products.

``ProductService`` translates API payloads into ``Product`` entities,
delegates persistence to the configured ``ProductRepository`` and maps
stored entities back to ``ProductRead`` responses.  Repository calls are
blocking (the Cosmos DB SDK performs network I/O), so they are run in
the threadpool to keep the event loop free.

A missing product is reported as ``None`` (or ``False`` for deletes),
never as an exception; the endpoints turn that into HTTP 404.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool

from ..models.product import Product
from ..repositories.base import ProductRepository
from ..schemas.product import ProductCreate, ProductRead, ProductSearch, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Service for managing catalog products."""

    def __init__(self, repository: ProductRepository) -> None:
        self._repository = repository

    async def list_products(self) -> List[ProductRead]:
        logger.info("Getting all products")
        products = await run_in_threadpool(self._repository.list_all)
        return [self.to_read(product) for product in products]

    async def get_product(self, product_id: str) -> Optional[ProductRead]:
        logger.info("Getting product with id %s", product_id)
        product = await run_in_threadpool(self._repository.get_by_id, product_id)
        return self.to_read(product) if product is not None else None

    async def create_product(self, data: ProductCreate) -> ProductRead:
        """Create a product from the request payload.

        Tags default to an empty list.  Raises ``DuplicateProductError``
        or ``StorageError`` from the repository unchanged.
        """
        logger.info("Creating new product '%s'", data.name)
        product = Product(
            name=data.name,
            description=data.description,
            price=Decimal(str(data.price)),
            category=data.category,
            tags=list(data.tags) if data.tags is not None else [],
            in_stock=data.in_stock,
        )
        created = await run_in_threadpool(self._repository.add, product)
        return self.to_read(created)

    async def update_product(self, product_id: str, data: ProductUpdate) -> Optional[ProductRead]:
        """Apply a partial update.

        Only the fields present in ``data`` overwrite the stored values.
        Returns ``None`` if the product does not exist, including when it
        was deleted between the read and the write.
        """
        logger.info("Updating product with id %s", product_id)
        existing = await run_in_threadpool(self._repository.get_by_id, product_id)
        if existing is None:
            logger.warning("Product with id %s not found for update", product_id)
            return None

        updated = existing.apply_changes(data.changes())
        success = await run_in_threadpool(self._repository.update, updated)
        if not success:
            logger.warning("Failed to update product with id %s", product_id)
            return None

        return self.to_read(updated)

    async def delete_product(self, product_id: str) -> bool:
        logger.info("Deleting product with id %s", product_id)
        return await run_in_threadpool(self._repository.delete, product_id)

    async def search_products(self, criteria: ProductSearch) -> List[ProductRead]:
        """Search by free text and category.

        The repository also supports price, stock and tag filters; the
        public search contract does not expose them.
        """
        logger.info("Searching products with criteria: %s", criteria.model_dump_json(exclude_none=True))
        products = await run_in_threadpool(
            self._repository.search,
            criteria.query,
            criteria.category,
        )
        return [self.to_read(product) for product in products]

    @staticmethod
    def to_read(product: Product) -> ProductRead:
        """Map a stored entity to the response schema."""
        return ProductRead(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            category=product.category,
            tags=list(product.tags),
            in_stock=product.in_stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
