"""Catalog-level exceptions.

A missing product is never an exception here: repositories return
``None`` or ``False`` and the API layer turns that into a 404.  The
classes below cover the remaining failure kinds so the API layer can
catch them uniformly.
"""


class ProductCatalogError(Exception):
    """Base class for all catalog errors."""


class DuplicateProductError(ProductCatalogError):
    """A product with the same identifier is already stored."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product with id {product_id} already exists.")
        self.product_id = product_id


class StorageError(ProductCatalogError):
    """The storage backend failed or could not be reached."""
