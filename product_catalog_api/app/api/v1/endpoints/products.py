"""
Product endpoints for API v1.

These routes expose CRUD operations and search for catalog products.
Missing products are reported as HTTP 404.  Request validation
errors and unexpected failures while creating, updating or searching
are reported as HTTP 400 with a generic message; the details are only
written to the server log.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from product_catalog_api.app.core.db import get_repository
from product_catalog_api.app.core.exceptions import DuplicateProductError
from product_catalog_api.app.repositories.base import ProductRepository
from product_catalog_api.app.schemas.product import (
    ProductCreate,
    ProductRead,
    ProductSearch,
    ProductUpdate,
)
from product_catalog_api.app.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_product_service(repository: ProductRepository = Depends(get_repository)) -> ProductService:
    return ProductService(repository)


@router.get("", response_model=List[ProductRead])
async def list_products(service: ProductService = Depends(get_product_service)) -> List[ProductRead]:
    """Return every product in the catalog."""
    return await service.list_products()


@router.post("/search", response_model=List[ProductRead])
async def search_products(
    criteria: ProductSearch,
    service: ProductService = Depends(get_product_service),
) -> List[ProductRead]:
    """Search products.

    - **query**: case-insensitive text contained in the name or description.
    - **category**: case-insensitive exact category.

    Both filters are optional and are combined with AND.
    """
    try:
        return await service.search_products(criteria)
    except Exception as e:
        logger.exception("Error searching products")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not search products. See server logs for more details.",
        ) from e


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Retrieve a single product by its ID.  Returns 404 if absent."""
    product = await service.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Create a new product.

    The identifier and creation timestamp are assigned by the server.
    The ``Location`` header of the response points at the new product.
    """
    try:
        product = await service.create_product(product_in)
    except DuplicateProductError as e:
        logger.warning("Rejected duplicate product %s", e.product_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except Exception as e:
        logger.exception("Error creating product")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not create product. See server logs for more details.",
        ) from e
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    updates: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Partially update a product.

    Only the fields present in the request body are changed; all other
    fields keep their current values.
    """
    try:
        product = await service.update_product(product_id, updates)
    except Exception as e:
        logger.exception("Error updating product with id %s", product_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not update product. See server logs for more details.",
        ) from e
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Delete a product.  Returns 404 if it does not exist."""
    deleted = await service.delete_product(product_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
