"""Tests for the requests based API client."""

import json
from unittest import mock

import pytest
import requests

from product_catalog_client import DEFAULT_BASE_URL, ProductCatalogClient


def _response(status_code, body=None, text=None, url="http://api/products"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if body is not None:
        response._content = json.dumps(body).encode()
    elif text is not None:
        response._content = text.encode()
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    return mock.Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return ProductCatalogClient(base_url="http://api/v1/", session=session, timeout=5)


class TestProductCatalogClient:

    def test_default_base_url(self):
        assert ProductCatalogClient().base_url == DEFAULT_BASE_URL

    def test_list_products(self, api, session):
        session.request.return_value = _response(200, [{"id": "1", "name": "Laptop"}])
        products, error = api.list_products()
        assert error is None
        assert products == [{"id": "1", "name": "Laptop"}]
        session.request.assert_called_once_with(
            method="GET",
            url="http://api/v1/products",
            json=None,
            headers={"Accept": "application/json"},
            timeout=5,
        )

    def test_get_missing_product(self, api, session):
        session.request.return_value = _response(404, {"detail": "Product not found"})
        product, error = api.get_product("nope")
        assert product is None
        assert error == {"status_code": 404, "message": "Product not found"}

    def test_validation_error_detail_is_stringified(self, api, session):
        detail = [{"loc": ["body", "price"], "msg": "Input should be greater than or equal to 0"}]
        session.request.return_value = _response(400, {"detail": detail})
        product, error = api.create_product({"name": "Lamp", "price": -1, "category": "Lighting"})
        assert product is None
        assert error["status_code"] == 400
        assert "greater than or equal to 0" in error["message"]

    def test_non_json_error_body(self, api, session):
        session.request.return_value = _response(502, text="Bad gateway")
        _, error = api.list_products()
        assert error == {"status_code": 502, "message": "Bad gateway"}

    def test_connection_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")
        products, error = api.list_products()
        assert products == []
        assert error == {"status_code": None, "message": "refused"}

    def test_create_product(self, api, session):
        session.request.return_value = _response(201, {"id": "1", "name": "Lamp"})
        product, error = api.create_product({"name": "Lamp", "price": 1, "category": "Lighting"})
        assert error is None
        assert product["id"] == "1"
        assert session.request.call_args.kwargs["method"] == "POST"

    def test_update_sends_put_with_changes_only(self, api, session):
        session.request.return_value = _response(200, {"id": "1", "price": 2})
        api.update_product("1", {"price": 2})
        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["url"] == "http://api/v1/products/1"
        assert kwargs["json"] == {"price": 2}

    def test_delete_product(self, api, session):
        session.request.return_value = _response(204)
        assert api.delete_product("1") == (True, None)

    def test_delete_missing_product(self, api, session):
        session.request.return_value = _response(404, {"detail": "Product not found"})
        deleted, error = api.delete_product("1")
        assert deleted is False
        assert error["status_code"] == 404

    def test_search_sends_only_given_filters(self, api, session):
        session.request.return_value = _response(200, [])
        products, error = api.search_products(category="Electronics")
        assert (products, error) == ([], None)
        kwargs = session.request.call_args.kwargs
        assert kwargs["url"] == "http://api/v1/products/search"
        assert kwargs["json"] == {"category": "Electronics"}
