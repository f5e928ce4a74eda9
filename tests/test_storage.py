"""Tests for storage backend selection."""

import pytest

from product_catalog_api.app.core import db
from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.core.exceptions import StorageError
from product_catalog_api.app.repositories.memory import InMemoryProductRepository


def _fail(app_settings):
    raise StorageError("Could not initialize Cosmos DB storage")


class TestInitStorage:

    def test_memory_by_default(self):
        repository = db.init_storage(Settings(use_cosmos_db=False))
        assert isinstance(repository, InMemoryProductRepository)
        assert db.get_repository() is repository
        assert db.storage_backend_name() == "memory"

    def test_each_call_gives_a_fresh_store(self):
        first = db.init_storage(Settings(use_cosmos_db=False))
        first.delete(first.list_all()[0].id)
        second = db.init_storage(Settings(use_cosmos_db=False))
        assert len(second.list_all()) == 3

    def test_falls_back_to_memory_when_cosmos_fails(self, monkeypatch):
        monkeypatch.setattr(db, "_create_cosmos_repository", _fail)
        repository = db.init_storage(Settings(use_cosmos_db=True, storage_fallback_to_memory=True))
        assert isinstance(repository, InMemoryProductRepository)
        assert db.storage_backend_name() == "memory"

    def test_raises_when_fallback_disabled(self, monkeypatch):
        monkeypatch.setattr(db, "_create_cosmos_repository", _fail)
        with pytest.raises(StorageError):
            db.init_storage(Settings(use_cosmos_db=True, storage_fallback_to_memory=False))

    def test_uses_cosmos_when_configured(self, monkeypatch):
        pytest.importorskip("azure.cosmos")
        from product_catalog_api.app.repositories.cosmos import CosmosProductRepository
        from tests.fakes import FakeCosmosClient

        client = FakeCosmosClient()
        monkeypatch.setattr(
            CosmosProductRepository,
            "from_settings",
            classmethod(lambda cls, s: cls(client, s.cosmos_database, s.cosmos_container)),
        )
        repository = db.init_storage(Settings(use_cosmos_db=True))
        assert db.storage_backend_name() == "cosmos"
        assert len(repository.list_all()) == 3

    def test_missing_endpoint_falls_back(self):
        pytest.importorskip("azure.cosmos")
        settings = Settings(use_cosmos_db=True, cosmos_connection_string="", cosmos_endpoint="")
        assert isinstance(db.init_storage(settings), InMemoryProductRepository)
