"""Product Catalog API client.

This module defines a small client wrapper around the REST API served
by ``product_catalog_api``.  The client uses the ``requests`` library
internally to make HTTP calls and exposes one method per operation:

* :meth:`list_products` – return every product.
* :meth:`get_product` – fetch a single product by its identifier.
* :meth:`create_product` – add a product to the catalog.
* :meth:`update_product` – partially update a product.
* :meth:`delete_product` – remove a product.
* :meth:`search_products` – search by text and category.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary with
the keys ``status_code`` and ``message``.  Failures are also logged, so
callers that only need the happy path can ignore ``error``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api/v1"

Error = Dict[str, Any]


class ProductCatalogClient:
    """Client for interacting with the product catalog API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the versioned API, e.g.
                ``https://example.com/api/v1``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/products``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and ``error``
            is ``None``. On failure, ``data`` is ``None`` and ``error`` is
            a dictionary with keys ``status_code`` and ``message``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                except ValueError:
                    message = exc.response.text
                else:
                    detail = err_json.get("detail") if isinstance(err_json, dict) else None
                    message = detail if isinstance(detail, str) else str(detail or err_json)
            if not message:
                message = str(exc)
            logger.error("API request %s %s failed (%s): %s", method, url, status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request %s %s failed: %s", method, url, exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Product operations
    # ------------------------------------------------------------------
    def list_products(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all products."""
        data, error = self._request("GET", "/products")
        if error:
            return [], error
        return data or [], None

    def get_product(self, product_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single product by ID.

        A missing product is returned as an error with ``status_code`` 404.
        """
        return self._request("GET", f"/products/{product_id}")

    def create_product(self, product: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a product.

        Args:
            product: Payload with ``name``, ``price``, ``category`` and
                optionally ``description``, ``tags`` and ``inStock``.
        """
        return self._request("POST", "/products", json_body=product)

    def update_product(
        self, product_id: str, changes: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Partially update a product.

        Only the keys present in ``changes`` are modified on the server.
        """
        return self._request("PUT", f"/products/{product_id}", json_body=changes)

    def delete_product(self, product_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete a product.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/products/{product_id}")
        if error:
            return False, error
        return True, None

    def search_products(
        self, query: Optional[str] = None, category: Optional[str] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Search products by free text and/or category."""
        body: Dict[str, Any] = {}
        if query is not None:
            body["query"] = query
        if category is not None:
            body["category"] = category
        data, error = self._request("POST", "/products/search", json_body=body)
        if error:
            return [], error
        return data or [], None
