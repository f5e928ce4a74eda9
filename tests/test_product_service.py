"""Tests for ProductService."""

import asyncio
from decimal import Decimal

import pytest

from product_catalog_api.app.models.product import Product
from product_catalog_api.app.repositories.memory import InMemoryProductRepository
from product_catalog_api.app.schemas.product import ProductCreate, ProductSearch, ProductUpdate
from product_catalog_api.app.services.product_service import ProductService


def run(coro):
    return asyncio.run(coro)


class RecordingRepository(InMemoryProductRepository):
    """In-memory repository that records search arguments."""

    def __init__(self):
        super().__init__(seed=False)
        self.search_calls = []

    def search(self, *args, **kwargs):
        self.search_calls.append((args, kwargs))
        return super().search(*args, **kwargs)


class VanishingRepository(InMemoryProductRepository):
    """Deletes the product between the read and the write of an update."""

    def update(self, product):
        self.delete(product.id)
        return super().update(product)


@pytest.fixture
def repository():
    return InMemoryProductRepository(seed=False)


@pytest.fixture
def service(repository):
    return ProductService(repository)


@pytest.fixture
def lamp(repository):
    return repository.add(
        Product(
            name="Lamp",
            description="Bedside lamp",
            price=Decimal("19.99"),
            category="Lighting",
            tags=["lamp"],
            in_stock=True,
        )
    )


class TestCreate:

    def test_tags_default_to_empty_list(self, service):
        created = run(service.create_product(ProductCreate(name="Chair", price=10, category="Furniture")))
        assert created.tags == []
        assert created.in_stock is True
        assert created.description is None
        assert created.id
        assert created.updated_at is None

    def test_created_product_is_readable(self, service):
        created = run(service.create_product(ProductCreate(name="Chair", price=10.5, category="Furniture")))
        fetched = run(service.get_product(created.id))
        assert fetched == created
        assert fetched.price == 10.5


class TestUpdate:

    def test_price_only_update_keeps_other_fields(self, service, lamp):
        updated = run(service.update_product(lamp.id, ProductUpdate(price=24.5)))
        assert updated.price == 24.5
        assert updated.name == "Lamp"
        assert updated.description == "Bedside lamp"
        assert updated.tags == ["lamp"]
        assert updated.category == "Lighting"
        assert updated.created_at == lamp.created_at
        assert updated.updated_at is not None

    def test_omitted_description_is_kept(self, service, lamp):
        updated = run(service.update_product(lamp.id, ProductUpdate.model_validate({"name": "Desk Lamp"})))
        assert updated.description == "Bedside lamp"

    def test_explicit_null_description_clears_it(self, service, lamp):
        updated = run(service.update_product(lamp.id, ProductUpdate.model_validate({"description": None})))
        assert updated.description is None

    def test_empty_update_only_touches_updated_at(self, service, lamp):
        updated = run(service.update_product(lamp.id, ProductUpdate()))
        assert updated.name == "Lamp"
        assert updated.updated_at is not None

    def test_missing_product_returns_none(self, service):
        assert run(service.update_product("does-not-exist", ProductUpdate(name="x"))) is None

    def test_deleted_between_read_and_write_returns_none(self):
        repository = VanishingRepository(seed=False)
        product = repository.add(Product(name="Lamp", category="Lighting"))
        service = ProductService(repository)
        assert run(service.update_product(product.id, ProductUpdate(name="Desk Lamp"))) is None
        assert repository.get_by_id(product.id) is None


class TestDeleteAndSearch:

    def test_delete(self, service, lamp):
        assert run(service.delete_product(lamp.id)) is True
        assert run(service.get_product(lamp.id)) is None
        assert run(service.delete_product(lamp.id)) is False

    def test_search_forwards_only_query_and_category(self):
        repository = RecordingRepository()
        repository.add(Product(name="Lamp", category="Lighting"))
        service = ProductService(repository)

        found = run(service.search_products(ProductSearch(query="LAMP", category="lighting")))

        assert [p.name for p in found] == ["Lamp"]
        assert repository.search_calls == [(("LAMP", "lighting"), {})]

    def test_list_products(self, service, lamp):
        products = run(service.list_products())
        assert [p.id for p in products] == [lamp.id]
