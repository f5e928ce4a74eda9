"""
Application factory for the Product Catalog API.

``create_app`` wires configuration, logging, CORS, error handlers and
the v1 routes into a FastAPI instance; the storage backend is chosen
when the app starts.  A default instance is built at import time as
``app`` for ASGI servers::

    uvicorn product_catalog_api.app.main:app --reload

Pass a ``Settings`` object to ``create_app`` to build an app with a
different configuration, e.g. in tests.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import Settings, settings
from .core.logging_config import setup_logging
from .core.exceptions import StorageError
from .api.v1.router import router as v1_router
from .core.db import init_storage

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured on the first call only.  Validation errors are
    answered with 400 and storage failures with 500; the per-route
    mapping of other errors lives in the endpoint modules.  The storage
    backend is provisioned by a startup hook, before the first request
    is served.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )

    origins = app_settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials combined with a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Validation failures are reported as 400 with field-level detail.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure while handling %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage backend unavailable. See server logs for more details."},
        )

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Provision the storage backend before accepting traffic.
        init_storage(app_settings)

    return app


# Default instance, configured from the environment.
app = create_app()
