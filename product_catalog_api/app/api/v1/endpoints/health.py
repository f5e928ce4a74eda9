"""
Health endpoint for API v1.

``GET /api/v1/health`` reports that the process is serving requests and
which storage backend is active, e.g. ``{"status": "ok", "storage":
"cosmos"}``.  It does not contact the backend, so a reachable health
endpoint says nothing about Cosmos DB availability.
"""

from fastapi import APIRouter

from product_catalog_api.app.core.db import storage_backend_name
from product_catalog_api.app.schemas.health import HealthStatus

router = APIRouter()


@router.get("", response_model=HealthStatus)
async def health() -> HealthStatus:
    return HealthStatus(status="ok", storage=storage_backend_name())
