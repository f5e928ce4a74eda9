"""
Product entity.

``Product`` is the only record the catalog manages.  Identifier and
timestamps are owned by the repositories: ``id`` and ``created_at`` are
assigned once when a product is added, ``updated_at`` stays ``None``
until the first successful update.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class Product:
    """A product in the catalog."""

    name: str
    category: str
    price: Decimal = Decimal("0")
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    in_stock: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def copy(self) -> "Product":
        """Return an independent copy (the tag list is not shared)."""
        return copy.deepcopy(self)

    def apply_changes(self, changes: Dict[str, Any]) -> "Product":
        """Return a copy with ``changes`` applied.

        ``changes`` maps entity field names to new values; only the keys
        present are overwritten.  Identifier and timestamps cannot be
        changed this way.
        """
        protected = {"id", "created_at", "updated_at"}
        updated = self.copy()
        for name, value in changes.items():
            if name in protected:
                raise ValueError(f"Field '{name}' is managed by the repository")
            if not hasattr(updated, name):
                raise ValueError(f"Unknown product field '{name}'")
            if name == "tags":
                value = list(value)
            elif name == "price":
                value = Decimal(str(value))
            setattr(updated, name, value)
        return updated
