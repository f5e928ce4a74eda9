"""
Router for version 1 of the API.

Collects the resource routers of ``endpoints``; ``main`` mounts the
result under ``/api/v1``.
"""

from fastapi import APIRouter

from .endpoints import health, products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(health.router, prefix="/health", tags=["health"])
