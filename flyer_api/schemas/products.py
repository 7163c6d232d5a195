"""
flyer_api/schemas/products.py

Pydantic models for the "products" HTTP API.

Products are the live catalogue a user maintains; flyers copy them into
snapshots (see ``schemas.flyers.ProductSnapshotRead``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from .common import APIModel


ProductID = str

# Columns that cannot be cleared once set.
_REQUIRED_ON_UPDATE = ("name", "price", "category")


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ProductBase(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: float = Field(..., ge=0)
    barcode: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Unique among the owner's products; other users may reuse it.",
    )
    category: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = Field(
        default=None,
        max_length=2048,
        description="Where the product image is served from (opaque URL).",
    )

    @field_validator("barcode", "image_url", "description")
    @classmethod
    def _empty_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(APIModel):
    """
    Partial update payload.

    All fields are optional; only provided ones are patched. ``name``,
    ``price`` and ``category`` may be changed but not cleared.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    price: Optional[float] = Field(default=None, ge=0)
    barcode: Optional[str] = Field(default=None, max_length=128)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    image_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("barcode", "image_url", "description")
    @classmethod
    def _empty_is_missing(cls, value: Optional[str]) -> Optional[str]:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def _required_fields_not_nulled(self) -> "ProductUpdate":
        for name in _REQUIRED_ON_UPDATE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class ProductRead(ProductBase):
    """
    Full product representation as returned by the API.
    """

    id: ProductID
    owner_user_id: str
    created_at: datetime
    updated_at: datetime


__all__ = [
    "ProductID",
    "ProductBase",
    "ProductCreate",
    "ProductUpdate",
    "ProductRead",
]
