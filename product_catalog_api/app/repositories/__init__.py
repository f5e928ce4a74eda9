"""
Persistence layer.

``ProductRepository`` in ``base`` is the capability set every backend
implements.  Two interchangeable backends are provided: an in-memory
store (``memory``) and Azure Cosmos DB (``cosmos``).  Which one is used
is decided once at startup by ``core.db.init_storage``.
"""

from .base import ProductRepository, SearchCriteria  # noqa: F401
