"""Shared fixtures.

``repository`` and ``empty_repository`` are parametrised over both
storage backends so every contract test runs against each of them.  The
Cosmos DB variant uses the in-process fakes from ``tests.fakes`` and is
skipped when the azure-cosmos package is not installed.
"""

import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.main import create_app
from product_catalog_api.app.repositories.memory import InMemoryProductRepository


def _cosmos_repository(seed: bool):
    pytest.importorskip("azure.cosmos")
    from azure.cosmos import PartitionKey

    from product_catalog_api.app.repositories.cosmos import CosmosProductRepository
    from tests.fakes import FakeCosmosClient

    client = FakeCosmosClient()
    if not seed:
        # An existing container is never seeded.
        database = client.create_database_if_not_exists(id="ProductsDb")
        database.create_container(id="Products", partition_key=PartitionKey(path="/category"))
    repository = CosmosProductRepository(client, database_name="ProductsDb", container_name="Products")
    repository.initialize()
    return repository


@pytest.fixture(params=["memory", "cosmos"])
def repository(request):
    """A repository holding the three sample products."""
    if request.param == "memory":
        return InMemoryProductRepository()
    return _cosmos_repository(seed=True)


@pytest.fixture(params=["memory", "cosmos"])
def empty_repository(request):
    if request.param == "memory":
        return InMemoryProductRepository(seed=False)
    return _cosmos_repository(seed=False)


@pytest.fixture
def app():
    return create_app(Settings(use_cosmos_db=False, cors_origins="*"))


@pytest.fixture
def client(app):
    # Entering the context runs the startup hook, which installs a fresh
    # in-memory store for every test.
    with TestClient(app) as test_client:
        yield test_client
