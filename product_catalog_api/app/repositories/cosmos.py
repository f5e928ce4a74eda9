"""Azure Cosmos DB implementation of ProductRepository.

Each product is stored as one JSON document, partitioned by category
(``/category`` unless configured otherwise).  Point operations need the
partition key value, so ``update`` and ``delete`` first look the
document up with a cross-partition query on its ``id``.  A 404 from
Cosmos DB means "not found" and is reported as such, never raised;
every other service error is logged and raised as ``StorageError``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from azure.cosmos import CosmosClient, PartitionKey, ThroughputProperties
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from ..core.exceptions import DuplicateProductError, StorageError
from ..models.product import Product
from .base import ProductRepository, SearchCriteria
from .seed import sample_products

logger = logging.getLogger(__name__)


def build_cosmos_client(
    connection_string: str = "",
    endpoint: str = "",
    key: str = "",
) -> CosmosClient:
    """Create a Cosmos DB client from whichever credentials are configured.

    A connection string wins over an endpoint.  An endpoint is used with
    its account key when one is given, otherwise with Azure AD
    credentials resolved by ``DefaultAzureCredential``.
    """
    if connection_string:
        return CosmosClient.from_connection_string(connection_string)
    if not endpoint:
        raise ValueError("Cosmos DB connection string or endpoint must be configured")
    if key:
        return CosmosClient(endpoint, credential=key)
    from azure.identity import DefaultAzureCredential

    return CosmosClient(endpoint, credential=DefaultAzureCredential())


def to_document(product: Product) -> Dict[str, Any]:
    """Serialise a product to its Cosmos DB document."""
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": float(product.price),
        "category": product.category,
        "tags": list(product.tags),
        "inStock": product.in_stock,
        "createdAt": product.created_at.isoformat() if product.created_at else None,
        "updatedAt": product.updated_at.isoformat() if product.updated_at else None,
    }


def from_document(document: Dict[str, Any]) -> Product:
    """Build a product from a Cosmos DB document, ignoring system properties."""
    created_at = document.get("createdAt")
    updated_at = document.get("updatedAt")
    return Product(
        id=document["id"],
        name=document["name"],
        description=document.get("description"),
        price=Decimal(str(document.get("price", 0))),
        category=document["category"],
        tags=list(document.get("tags") or []),
        in_stock=bool(document.get("inStock", True)),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
        updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
    )


class CosmosProductRepository(ProductRepository):
    """Products stored as documents in one Cosmos DB container.

    Documents are partitioned by ``partition_key_path`` (the category by
    default).  Point reads need the partition value, so lookups by id
    use a cross-partition query first.  Call ``initialize`` once before
    use to provision the database and container.
    """

    backend_name = "cosmos"

    def __init__(
        self,
        client: CosmosClient,
        database_name: str,
        container_name: str,
        partition_key_path: str = "/category",
        max_throughput: int = 1000,
    ) -> None:
        if not database_name:
            raise ValueError("Cosmos DB database name is not configured.")
        if not container_name:
            raise ValueError("Cosmos DB container name is not configured.")
        if not partition_key_path.startswith("/"):
            raise ValueError("Cosmos DB partition key path must start with '/'")

        self._client = client
        self._database_name = database_name
        self._container_name = container_name
        self._partition_key_path = partition_key_path
        self._max_throughput = max_throughput
        self._database = client.get_database_client(database_name)
        self._container = self._database.get_container_client(container_name)
        logger.info(
            "Cosmos DB repository configured with database %s and container %s",
            database_name,
            container_name,
        )

    @classmethod
    def from_settings(cls, settings) -> "CosmosProductRepository":
        client = build_cosmos_client(
            connection_string=settings.cosmos_connection_string,
            endpoint=settings.cosmos_endpoint,
            key=settings.cosmos_key,
        )
        return cls(
            client,
            database_name=settings.cosmos_database,
            container_name=settings.cosmos_container,
            partition_key_path=settings.cosmos_partition_key_path,
            max_throughput=settings.cosmos_max_throughput,
        )

    # --- Provisioning ---------------------------------------------------------

    def initialize(self) -> bool:
        """Ensure the database and container exist.

        Safe to call repeatedly.  The sample products are written only
        when this call created the container.  Returns True in that case.
        """
        logger.info("Ensuring Cosmos DB database and container exist")
        try:
            self._database = self._client.create_database_if_not_exists(
                id=self._database_name,
                offer_throughput=ThroughputProperties(auto_scale_max_throughput=self._max_throughput),
            )
            logger.info("Database %s ready", self._database_name)
            created = True
            try:
                self._container = self._database.create_container(
                    id=self._container_name,
                    partition_key=PartitionKey(path=self._partition_key_path),
                )
            except CosmosResourceExistsError:
                created = False
                self._container = self._database.get_container_client(self._container_name)
            logger.info(
                "Container %s ready with partition key %s (created: %s)",
                self._container_name,
                self._partition_key_path,
                created,
            )
            if created:
                self._seed()
            return created
        except CosmosHttpResponseError as exc:
            logger.exception("Error initializing Cosmos DB repository")
            raise StorageError("Could not initialize Cosmos DB storage") from exc

    # --- ProductRepository interface ------------------------------------------

    def list_all(self) -> List[Product]:
        logger.info("Getting all products from Cosmos DB")
        try:
            items = self._container.query_items(
                query="SELECT * FROM c",
                enable_cross_partition_query=True,
            )
            return [from_document(item) for item in items]
        except CosmosHttpResponseError as exc:
            logger.exception("Error getting all products from Cosmos DB")
            raise StorageError("Could not list products") from exc

    def get_by_id(self, product_id: str) -> Optional[Product]:
        logger.info("Getting product with id %s from Cosmos DB", product_id)
        try:
            document = self._find_document(product_id)
        except CosmosHttpResponseError as exc:
            logger.exception("Error getting product with id %s from Cosmos DB", product_id)
            raise StorageError(f"Could not read product {product_id}") from exc
        return from_document(document) if document is not None else None

    def add(self, product: Product) -> Product:
        stored = product.copy()
        stored.id = stored.id or str(uuid.uuid4())
        stored.created_at = datetime.now(timezone.utc)
        stored.updated_at = None
        logger.info("Adding product to Cosmos DB")
        try:
            # Ids are only unique per partition in Cosmos DB; reject a
            # collision in any partition.
            if self._find_document(stored.id) is not None:
                logger.warning("Failed to add product with id %s to Cosmos DB - already exists", stored.id)
                raise DuplicateProductError(stored.id)
            created = self._container.create_item(body=to_document(stored))
        except CosmosResourceExistsError as exc:
            logger.warning("Failed to add product with id %s to Cosmos DB - already exists", stored.id)
            raise DuplicateProductError(stored.id) from exc
        except CosmosHttpResponseError as exc:
            logger.exception("Error adding product to Cosmos DB")
            raise StorageError("Could not add product") from exc

        logger.info("Added product with id %s to Cosmos DB", stored.id)
        return from_document(created)

    def update(self, product: Product) -> bool:
        if not product.id:
            raise ValueError("Product id cannot be empty")

        logger.info("Updating product with id %s in Cosmos DB", product.id)
        try:
            existing = self._find_document(product.id)
            if existing is None:
                logger.warning("Failed to update product with id %s in Cosmos DB - not found", product.id)
                return False

            product.created_at = from_document(existing).created_at
            product.updated_at = datetime.now(timezone.utc)
            document = to_document(product)

            old_partition = self._partition_value(existing)
            if self._partition_value(document) == old_partition:
                self._container.replace_item(item=product.id, body=document)
            else:
                self._move_document(document, old_partition)
        except CosmosResourceNotFoundError:
            logger.warning("Failed to update product with id %s in Cosmos DB - not found", product.id)
            return False
        except CosmosHttpResponseError as exc:
            logger.exception("Error updating product with id %s in Cosmos DB", product.id)
            raise StorageError(f"Could not update product {product.id}") from exc

        logger.info("Updated product with id %s in Cosmos DB", product.id)
        return True

    def delete(self, product_id: str) -> bool:
        logger.info("Deleting product with id %s from Cosmos DB", product_id)
        try:
            existing = self._find_document(product_id)
            if existing is None:
                logger.warning("Failed to delete product with id %s from Cosmos DB - not found", product_id)
                return False
            self._container.delete_item(item=product_id, partition_key=self._partition_value(existing))
        except CosmosResourceNotFoundError:
            logger.warning("Failed to delete product with id %s from Cosmos DB - not found", product_id)
            return False
        except CosmosHttpResponseError as exc:
            logger.exception("Error deleting product with id %s from Cosmos DB", product_id)
            raise StorageError(f"Could not delete product {product_id}") from exc

        logger.info("Deleted product with id %s from Cosmos DB", product_id)
        return True

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
        logger.info("Searching products in Cosmos DB with %s", criteria.describe())
        sql, parameters = self._build_search_query(criteria)
        try:
            items = self._container.query_items(
                query=sql,
                parameters=parameters,
                enable_cross_partition_query=True,
            )
            products = [from_document(item) for item in items]
        except CosmosHttpResponseError as exc:
            logger.exception("Error searching products in Cosmos DB")
            raise StorageError("Could not search products") from exc
        # Text and tag filters are applied here, not in the query.
        return [product for product in products if criteria.matches(product)]

    # --- Helpers --------------------------------------------------------------

    def _find_document(self, product_id: str) -> Optional[Dict[str, Any]]:
        items = self._container.query_items(
            query="SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": product_id}],
            enable_cross_partition_query=True,
        )
        for item in items:
            return item
        return None

    def _move_document(self, document: Dict[str, Any], old_partition: Any) -> None:
        """Write ``document`` to its new partition and drop the old copy.

        The partition key of a document cannot change in place.  If the
        old copy cannot be removed (a concurrent delete, or a service
        error) the new copy is removed again, so the product never ends
        up stored twice or brought back after a delete.
        """
        self._container.create_item(body=document)
        try:
            self._container.delete_item(item=document["id"], partition_key=old_partition)
        except CosmosHttpResponseError:
            new_partition = self._partition_value(document)
            logger.warning("Rolling back move of product %s to partition %s", document["id"], new_partition)
            try:
                self._container.delete_item(item=document["id"], partition_key=new_partition)
            except CosmosResourceNotFoundError:
                logger.info("Moved copy of product %s is already gone", document["id"])
            raise

    def _partition_value(self, document: Dict[str, Any]) -> Any:
        value: Any = document
        for segment in self._partition_key_path.strip("/").split("/"):
            value = value.get(segment) if isinstance(value, dict) else None
        return value

    @staticmethod
    def _build_search_query(criteria: SearchCriteria) -> Tuple[str, List[Dict[str, Any]]]:
        clauses: List[str] = []
        parameters: List[Dict[str, Any]] = []
        if criteria.category_key is not None:
            clauses.append("LOWER(c.category) = @category")
            parameters.append({"name": "@category", "value": criteria.category_key})
        if criteria.min_price is not None:
            clauses.append("c.price >= @minPrice")
            parameters.append({"name": "@minPrice", "value": float(criteria.min_price)})
        if criteria.max_price is not None:
            clauses.append("c.price <= @maxPrice")
            parameters.append({"name": "@maxPrice", "value": float(criteria.max_price)})
        if criteria.in_stock is not None:
            clauses.append("c.inStock = @inStock")
            parameters.append({"name": "@inStock", "value": criteria.in_stock})
        sql = "SELECT * FROM c"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        return sql, parameters

    def _seed(self) -> None:
        logger.info("Seeding data to Cosmos DB")
        products = sample_products()
        for product in products:
            product.id = str(uuid.uuid4())
            product.created_at = datetime.now(timezone.utc)
            self._container.create_item(body=to_document(product))
        logger.info("Seeded %d products to Cosmos DB", len(products))
