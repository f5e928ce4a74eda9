"""
Storage backend selection and initialisation.

This module decides, once per process, which ``ProductRepository`` the
API uses (``init_storage``) and exposes it to FastAPI routes through the
``get_repository`` dependency.  With ``USE_COSMOS_DB`` unset the catalog
is kept in memory.  Otherwise the Cosmos DB database and container are
provisioned (and seeded on first creation) before the application
accepts traffic.  If provisioning fails, the error is logged and,
unless ``STORAGE_FALLBACK_TO_MEMORY`` is disabled, the in‑memory store
is used instead.
"""

import logging
import threading
from typing import Optional

from .config import Settings, settings
from ..repositories.base import ProductRepository
from ..repositories.memory import InMemoryProductRepository

logger = logging.getLogger(__name__)

_repository: Optional[ProductRepository] = None
_init_lock = threading.Lock()


def _create_cosmos_repository(app_settings: Settings) -> ProductRepository:
    # Imported lazily so the in-memory configuration does not need the
    # Azure SDK to be importable.
    from ..repositories.cosmos import CosmosProductRepository

    repository = CosmosProductRepository.from_settings(app_settings)
    repository.initialize()
    return repository


def init_storage(app_settings: Optional[Settings] = None) -> ProductRepository:
    """Create the configured repository and make it the active one.

    Calling this again replaces the active repository, which gives
    every application instance (and every test) a fresh store.
    """
    global _repository
    app_settings = app_settings or settings

    with _init_lock:
        if not app_settings.use_cosmos_db:
            logger.info("Cosmos DB is not enabled, using in-memory storage")
            _repository = InMemoryProductRepository()
            return _repository

        logger.info(
            "Initializing Cosmos DB database %s and container %s",
            app_settings.cosmos_database,
            app_settings.cosmos_container,
        )
        try:
            _repository = _create_cosmos_repository(app_settings)
        except Exception:
            logger.exception("Error initializing Cosmos DB storage")
            if not app_settings.storage_fallback_to_memory:
                raise
            logger.warning("Falling back to in-memory storage")
            _repository = InMemoryProductRepository()
        return _repository


def get_repository() -> ProductRepository:
    """FastAPI dependency returning the active repository.

    Initialises storage with the global settings if the startup hook
    has not run (for example when the app is driven without a lifespan).
    """
    if _repository is None:
        return init_storage()
    return _repository


def storage_backend_name() -> str:
    """Name of the active backend (``memory`` or ``cosmos``)."""
    return get_repository().backend_name
