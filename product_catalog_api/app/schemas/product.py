"""
Pydantic models for product data.

These schemas define the JSON exchanged via the API.  Field names are
snake_case in Python and camelCase on the wire (``inStock``,
``createdAt``); both spellings are accepted on input.  ``ProductCreate``
is the create payload, ``ProductUpdate`` the partial update payload,
``ProductSearch`` the search body and ``ProductRead`` the response.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _not_blank(value: str, field_name: str) -> str:
    if not value.strip():
        raise ValueError(f"{field_name} must not be empty")
    return value


class ProductCreate(CamelModel):
    """Schema for creating a product.

    Identifier and timestamps are assigned by the server; if a client
    sends them they are ignored.
    """

    name: str = Field(..., examples=["Laptop"])
    description: Optional[str] = Field(None, examples=["High-performance laptop with the latest processor"])
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[1200.0])
    category: str = Field(..., examples=["Electronics"])
    tags: Optional[List[str]] = Field(None, examples=[["computer", "tech"]])
    in_stock: bool = True

    @field_validator("name", "category")
    @classmethod
    def validate_required_text(cls, v: str, info):
        return _not_blank(v, info.field_name)


class ProductUpdate(CamelModel):
    """Schema for a partial update.

    Every field is optional and only the fields present in the request
    body are applied.  Presence is tracked by pydantic
    (``model_fields_set``), so omitting ``description`` keeps the
    current value while ``"description": null`` clears it.  The other
    fields cannot be set to null.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    in_stock: Optional[bool] = None

    @field_validator("name", "category")
    @classmethod
    def validate_text(cls, v: Optional[str], info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return _not_blank(v, info.field_name)

    @field_validator("price", "tags", "in_stock")
    @classmethod
    def validate_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Return only the fields supplied by the client."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ProductSearch(CamelModel):
    """Search criteria accepted by ``POST /products/search``."""

    query: Optional[str] = Field(None, examples=["lap"])
    category: Optional[str] = Field(None, examples=["Electronics"])


class ProductRead(CamelModel):
    """Schema for reading a product from the API."""

    id: str
    name: str
    description: Optional[str] = None
    price: float
    category: str
    tags: List[str] = Field(default_factory=list)
    in_stock: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
