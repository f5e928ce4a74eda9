"""Entry point for the Product Catalog API.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example in Docker, where you only
specify a single Python file to run.

Host and port are read from the environment variables ``HOST`` and
``PORT`` (defaults ``0.0.0.0`` and ``8000``).  Storage and logging are
configured through the variables documented in
``product_catalog_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from product_catalog_api.app.core.config import settings
from product_catalog_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
