# flyer_api/repositories/products.py

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..db import models
from .scoping import OwnerScope


class ProductsRepository:
    """
    Thin data-access layer around the Product model.

    Every method takes the owner id explicitly; nothing is visible across
    owners.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    def scope(self, owner_id: str) -> OwnerScope[models.Product]:
        return OwnerScope(self._session, models.Product, owner_id)

    @staticmethod
    def _newest_first() -> tuple:
        return (models.Product.created_at.desc(), models.Product.id)

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_products(self, owner_id: str) -> Sequence[models.Product]:
        return self.scope(owner_id).find_many(order_by=self._newest_first())

    def get_by_id(self, owner_id: str, product_id: str) -> Optional[models.Product]:
        return self.scope(owner_id).find_by_id(product_id)

    def search(self, owner_id: str, query: str) -> Sequence[models.Product]:
        """
        Case-insensitive substring match over name, description and barcode.
        """
        return self.scope(owner_id).find_many(
            or_(
                models.Product.name.icontains(query, autoescape=True),
                models.Product.description.icontains(query, autoescape=True),
                models.Product.barcode.icontains(query, autoescape=True),
            ),
            order_by=self._newest_first(),
        )

    def bulk_get_by_ids(
        self,
        owner_id: str,
        ids: Iterable[str],
    ) -> Sequence[models.Product]:
        """
        Fetch the owner's products among ``ids`` in one query. Order is
        whatever the database returns.
        """
        ids_list = list(dict.fromkeys(ids))
        if not ids_list:
            return []
        return self.scope(owner_id).find_many(models.Product.id.in_(ids_list))

    def barcode_taken(
        self,
        owner_id: str,
        barcode: str,
        *,
        exclude_id: Optional[str] = None,
    ) -> bool:
        criteria = [models.Product.barcode == barcode]
        if exclude_id is not None:
            criteria.append(models.Product.id != exclude_id)
        return self.scope(owner_id).exists(*criteria)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(self, owner_id: str, **fields: Any) -> models.Product:
        return self.scope(owner_id).insert(**fields)

    def update_fields(
        self,
        owner_id: str,
        product_id: str,
        *,
        fields: dict[str, Any],
    ) -> Optional[models.Product]:
        return self.scope(owner_id).update_by_id(product_id, fields)

    def delete_by_id(self, owner_id: str, product_id: str) -> bool:
        return self.scope(owner_id).delete_by_id(product_id)
