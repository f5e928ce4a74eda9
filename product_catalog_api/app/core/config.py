"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with the in-memory store and no external services.  In
a production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: str = os.getenv("LOG_FILE", "")

    # Comma‑separated list of origins allowed by the CORS middleware.
    # ``*`` allows any origin, which is what the web client expects in
    # development.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Storage backend toggle.  When false the catalog lives in process
    # memory and is lost on restart.
    use_cosmos_db: bool = _env_flag("USE_COSMOS_DB", "false")

    # Cosmos DB connection parameters.  A connection string takes
    # precedence; otherwise ``cosmos_endpoint`` is combined with
    # ``cosmos_key`` or, when no key is set, with Azure AD credentials
    # resolved by ``DefaultAzureCredential``.
    cosmos_connection_string: str = os.getenv("COSMOS_CONNECTION_STRING", "")
    cosmos_endpoint: str = os.getenv("COSMOS_ENDPOINT", "")
    cosmos_key: str = os.getenv("COSMOS_KEY", "")
    cosmos_database: str = os.getenv("COSMOS_DATABASE", "ProductsDb")
    cosmos_container: str = os.getenv("COSMOS_CONTAINER", "Products")
    cosmos_partition_key_path: str = os.getenv("COSMOS_PARTITION_KEY_PATH", "/category")
    # Upper bound of the autoscale throughput (RU/s) used when the
    # database is created.
    cosmos_max_throughput: int = int(os.getenv("COSMOS_MAX_THROUGHPUT", "1000"))

    # If Cosmos DB cannot be initialised at startup, serve from the
    # in-memory store instead of refusing to start.
    storage_fallback_to_memory: bool = _env_flag("STORAGE_FALLBACK_TO_MEMORY", "true")

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
