"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: configuration and storage bootstrap in ``core``, entities
in ``models``, persistence backends in ``repositories``, request and
response shapes in ``schemas``, business logic in ``services`` and the
versioned HTTP routes under ``api/<version>/``.
"""

from .main import app  # noqa: F401
