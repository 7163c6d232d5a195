"""
flyer_api/schemas/flyers.py

Pydantic models for the "flyers" HTTP API.

A flyer's ``products`` field is special on input and output:

- on input it is a list of product references, each either a bare product
  id or an object carrying display overrides;
- on output it is a list of embedded snapshots, frozen at the time the list
  was last submitted.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import Field, model_validator

from flyer_api.db.models import FlyerStatus, FlyerTemplate
from flyer_api.domain.snapshots import DisplayOverride

from .common import APIModel


FlyerID = str

_HEX_COLOR = r"^#[0-9A-Fa-f]{3,8}$"

# Columns that cannot be cleared once set.
_REQUIRED_ON_UPDATE = ("title", "template", "layout", "business_info", "status", "is_public")


# ---------------------------------------------------------------------------
# Layout / business info
# ---------------------------------------------------------------------------


class Arrangement(str, enum.Enum):
    GRID = "grid"
    LIST = "list"
    CAROUSEL = "carousel"


class LayoutColors(APIModel):
    primary: str = Field("#007bff", pattern=_HEX_COLOR)
    secondary: str = Field("#6c757d", pattern=_HEX_COLOR)
    background: str = Field("#ffffff", pattern=_HEX_COLOR)
    text: str = Field("#212529", pattern=_HEX_COLOR)


class LayoutFonts(APIModel):
    heading: str = Field("Arial", min_length=1, max_length=100)
    body: str = Field("Arial", min_length=1, max_length=100)


class FlyerLayout(APIModel):
    colors: LayoutColors = Field(default_factory=LayoutColors)
    fonts: LayoutFonts = Field(default_factory=LayoutFonts)
    arrangement: Arrangement = Arrangement.GRID


class BusinessInfo(APIModel):
    name: Optional[str] = Field(default=None, max_length=200)
    logo: Optional[str] = Field(default=None, max_length=2048)
    address: Optional[str] = Field(default=None, max_length=500)
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    website: Optional[str] = Field(default=None, max_length=2048)
    hours: Optional[str] = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Product references (input) and snapshots (output)
# ---------------------------------------------------------------------------


class FlyerProductRef(APIModel):
    """
    A product to place on a flyer, with optional presentation overrides.
    """

    product_id: str = Field(..., min_length=1)
    display_name: Optional[str] = Field(default=None, max_length=100)
    display_price: Optional[float] = Field(default=None, ge=0)
    display_order: Optional[int] = Field(default=None, ge=0)


FlyerProductItem = Union[str, FlyerProductRef]


def split_product_refs(
    items: List[FlyerProductItem],
) -> "tuple[List[str], Dict[str, DisplayOverride]]":
    """
    Separate a submitted product list into ordered ids and per-id overrides.
    The first entry wins when an id appears more than once.
    """
    ids: List[str] = []
    overrides: Dict[str, DisplayOverride] = {}
    for item in items:
        if isinstance(item, str):
            ids.append(item)
            continue
        ids.append(item.product_id)
        if item.product_id in overrides:
            continue
        if item.display_name is None and item.display_price is None and item.display_order is None:
            continue
        overrides[item.product_id] = DisplayOverride(
            display_name=item.display_name,
            display_price=item.display_price,
            display_order=item.display_order,
        )
    return ids, overrides


class ProductSnapshotRead(APIModel):
    product_id: str
    name: str
    price: float
    barcode: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0
    display_name: Optional[str] = None
    display_price: Optional[float] = None


# ---------------------------------------------------------------------------
# Flyers
# ---------------------------------------------------------------------------


class FlyerCreate(APIModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    template: FlyerTemplate = FlyerTemplate.MODERN
    layout: FlyerLayout = Field(default_factory=FlyerLayout)
    business_info: BusinessInfo = Field(default_factory=BusinessInfo)
    products: Optional[List[FlyerProductItem]] = Field(
        default=None,
        description="Product ids (or objects with overrides) to snapshot into the flyer.",
    )
    status: FlyerStatus = FlyerStatus.DRAFT
    is_public: bool = False


class FlyerUpdate(APIModel):
    """
    Partial update payload.

    Omitting ``products`` keeps the existing snapshots; sending a list
    (including ``[]``) replaces them wholesale.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    template: Optional[FlyerTemplate] = None
    layout: Optional[FlyerLayout] = None
    business_info: Optional[BusinessInfo] = None
    products: Optional[List[FlyerProductItem]] = None
    status: Optional[FlyerStatus] = None
    is_public: Optional[bool] = None

    @model_validator(mode="after")
    def _required_fields_not_nulled(self) -> "FlyerUpdate":
        for name in _REQUIRED_ON_UPDATE:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    @property
    def replaces_products(self) -> bool:
        return "products" in self.model_fields_set and self.products is not None


class FlyerRead(APIModel):
    id: FlyerID
    owner_user_id: str
    title: str
    description: Optional[str] = None
    template: FlyerTemplate
    layout: FlyerLayout
    business_info: BusinessInfo
    products: List[ProductSnapshotRead] = Field(default_factory=list)
    status: FlyerStatus
    is_public: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


__all__ = [
    "FlyerID",
    "Arrangement",
    "LayoutColors",
    "LayoutFonts",
    "FlyerLayout",
    "BusinessInfo",
    "FlyerProductRef",
    "FlyerProductItem",
    "split_product_refs",
    "ProductSnapshotRead",
    "FlyerCreate",
    "FlyerUpdate",
    "FlyerRead",
]
