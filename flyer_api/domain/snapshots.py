# flyer_api/domain/snapshots.py

"""
Product snapshots embedded in flyers.

A flyer never references live products. When a flyer is created, or its
product list replaced, each requested product is copied into a
``ProductSnapshot`` and stored by value inside the flyer document. Later
edits to the product (price changes, renames, deletion) do not reach the
flyer.

Resolution rules:

- one batched, owner-scoped query for all requested ids;
- ids that are unknown or belong to someone else are dropped silently, so a
  client holding a stale product list still gets a flyer;
- the surviving ids keep their input order, and ``display_order`` is their
  0-based position unless the caller overrides it;
- an id requested twice resolves once, at its first position.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog

from flyer_api.db import models
from flyer_api.repositories.products import ProductsRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DisplayOverride:
    """Per-product presentation tweaks supplied with a flyer's product list."""

    display_name: Optional[str] = None
    display_price: Optional[float] = None
    display_order: Optional[int] = None


@dataclass(frozen=True)
class ProductSnapshot:
    """
    Point-in-time copy of a product, as embedded in a flyer.

    ``product_id`` is a back-reference for traceability only. It is not an
    ownership link and nothing is cascaded through it.
    """

    product_id: str
    name: str
    price: float
    category: Optional[str] = None
    description: Optional[str] = None
    barcode: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0
    display_name: Optional[str] = None
    display_price: Optional[float] = None

    @classmethod
    def capture(
        cls,
        product: models.Product,
        *,
        display_order: int,
        override: Optional[DisplayOverride] = None,
    ) -> "ProductSnapshot":
        override = override or DisplayOverride()
        return cls(
            product_id=product.id,
            name=product.name,
            price=product.price,
            category=product.category,
            description=product.description,
            barcode=product.barcode,
            image_url=product.image_url,
            display_order=(
                override.display_order
                if override.display_order is not None
                else display_order
            ),
            display_name=override.display_name,
            display_price=override.display_price,
        )

    def to_document(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ProductSnapshot":
        known = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in doc.items() if k in known})


class SnapshotResolver:
    """
    Turns an owner's product ids into ordered snapshots.
    """

    def __init__(self, products: ProductsRepository) -> None:
        self._products = products

    def resolve(
        self,
        owner_id: str,
        product_ids: Optional[Sequence[str]],
        display_overrides: Optional[Mapping[str, DisplayOverride]] = None,
    ) -> List[ProductSnapshot]:
        if not product_ids:
            return []

        ordered_ids = list(dict.fromkeys(product_ids))
        found = {
            product.id: product
            for product in self._products.bulk_get_by_ids(owner_id, ordered_ids)
        }

        overrides = display_overrides or {}
        snapshots: List[ProductSnapshot] = []
        for product_id in ordered_ids:
            product = found.get(product_id)
            if product is None:
                continue
            snapshots.append(
                ProductSnapshot.capture(
                    product,
                    display_order=len(snapshots),
                    override=overrides.get(product_id),
                )
            )

        logger.info(
            "snapshots_resolved",
            owner_id=owner_id,
            requested=len(ordered_ids),
            resolved=len(snapshots),
        )
        return snapshots


def resolve_snapshots(
    products: ProductsRepository,
    owner_id: str,
    product_ids: Optional[Sequence[str]],
    display_overrides: Optional[Mapping[str, DisplayOverride]] = None,
) -> List[ProductSnapshot]:
    """
    Functional shortcut for ``SnapshotResolver(products).resolve(...)``.
    """
    return SnapshotResolver(products).resolve(owner_id, product_ids, display_overrides)


__all__ = [
    "DisplayOverride",
    "ProductSnapshot",
    "SnapshotResolver",
    "resolve_snapshots",
]
