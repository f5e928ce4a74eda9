"""
Top‑level package for the Product Catalog API.

Makes ``product_catalog_api`` importable so modules within ``app`` can
be referenced by fully qualified names like
``product_catalog_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
